"""Tests for the typed selection walker."""

from __future__ import annotations

from graphql import GraphQLNamedType
from graphql.language.ast import FieldNode, NameNode, SelectionSetNode

from gqlnorm.compiler.store import DocumentStore
from gqlnorm.compiler.types import Severity
from gqlnorm.compiler.walker import location_hint, walk_document, walk_selections
from tests.conftest import TYPE_CONTEXT, collected_docs


def record_walk(source: str, name: str, *extra: str):
    store = DocumentStore(collected_docs(source, *extra))
    seen: list[tuple[list[str], str]] = []

    def visit(selection_set: SelectionSetNode, resolved_type: GraphQLNamedType) -> None:
        keys = [getattr(getattr(s, "name", None), "value", "...") for s in selection_set.selections]
        seen.append((keys, resolved_type.name))

    diagnostics = walk_document(TYPE_CONTEXT, store, store.get(name), visit)
    return seen, diagnostics


class TestResolution:
    def test_pre_order_document_order_with_types(self):
        seen, diagnostics = record_walk(
            """
            query Q {
                users { pets { name } bestFriend { name } }
                viewer { settings { theme } }
            }
            """,
            "Q",
        )
        assert diagnostics == []
        assert [t for _, t in seen] == ["Query", "User", "Cat", "Friend", "Viewer", "Settings"]

    def test_inline_fragment_type_condition(self):
        seen, _ = record_walk("query Q { entities { ... on Ghost { haunts { ... on Cat { id } } } } }", "Q")
        assert [t for _, t in seen] == ["Query", "Entity", "Ghost", "Entity", "Cat"]

    def test_untyped_inline_fragment_keeps_current_type(self):
        seen, _ = record_walk("query Q { user { ... { name } } }", "Q")
        assert [t for _, t in seen] == ["Query", "User", "User"]

    def test_fragment_document_starts_at_type_condition(self):
        seen, _ = record_walk("fragment CatInfo on Cat { owner { name } }", "CatInfo")
        assert [t for _, t in seen] == ["Cat", "User"]

    def test_mutation_root(self):
        seen, _ = record_walk("mutation M { updateUser(name: \"x\") { id } }", "M")
        assert [t for _, t in seen] == ["Mutation", "User"]

    def test_meta_fields_resolve(self):
        seen, diagnostics = record_walk("query Q { __schema { queryType { name } } }", "Q")
        assert diagnostics == []
        assert [t for _, t in seen] == ["Query", "__Schema", "__Type"]


class TestFragmentSpreads:
    def test_spread_is_walked_under_fragment_type(self):
        seen, _ = record_walk(
            "query Q { friends { ...CatOwner } }",
            "Q",
            "fragment CatOwner on Cat { owner { name } }",
        )
        assert [t for _, t in seen] == ["Query", "Friend", "Cat", "User"]

    def test_fragment_reached_twice_is_walked_twice(self):
        seen, diagnostics = record_walk(
            "query Q { user { ...Bad } users { ...Bad } }",
            "Q",
            "fragment Bad on User { nope { name } }",
        )
        # per path: the field's set, the fragment body, and the unknown field walked as User
        assert [t for _, t in seen] == ["Query"] + ["User"] * 6
        assert len(diagnostics) == 2
        assert {d.location_hint.split(" ")[0] for d in diagnostics} == {"user....Bad.nope", "users....Bad.nope"}

    def test_missing_fragment_is_fatal(self):
        _, diagnostics = record_walk("query Q { user { ...Nowhere } }", "Q")
        [diag] = diagnostics
        assert diag.severity is Severity.FATAL
        assert "Nowhere" in diag.message

    def test_fragment_cycle_stops(self):
        _, diagnostics = record_walk(
            "query Q { user { ...A } }",
            "Q",
            "fragment A on User { bestFriend { ...B } }",
            "fragment B on Friend { ... on User { ...A } }",
        )
        [diag] = diagnostics
        assert diag.severity is Severity.FATAL
        assert "A -> B -> A" in diag.message


class TestUnknownNames:
    def test_unknown_field_uses_last_known_type(self):
        seen, diagnostics = record_walk("query Q { user { ghost { pets { name } } } }", "Q")
        assert [t for _, t in seen] == ["Query", "User", "User", "Cat"]
        [diag] = diagnostics
        assert diag.severity is Severity.ADVISORY
        assert "'ghost'" in diag.message and "'User'" in diag.message
        assert diag.location_hint.startswith("user.ghost")

    def test_unknown_type_condition(self):
        seen, diagnostics = record_walk("query Q { user { ... on Robot { name } } }", "Q")
        assert [t for _, t in seen] == ["Query", "User", "User"]
        assert diagnostics[0].severity is Severity.ADVISORY
        assert "Robot" in diagnostics[0].message

    def test_schema_without_root_type(self):
        seen, diagnostics = record_walk("subscription S { user { id } }", "S")
        assert seen == []
        assert diagnostics[0].severity is Severity.ADVISORY


class TestVisitorMutation:
    def test_walker_does_not_mutate(self):
        docs = collected_docs("query Q { friends { ... on Cat { id } } }")
        store = DocumentStore(docs)
        before = store.get("Q").selection_set.selections[0].selection_set.selections
        walk_document(TYPE_CONTEXT, store, store.get("Q"), lambda s, t: None)
        assert store.get("Q").selection_set.selections[0].selection_set.selections is before

    def test_appended_selections_are_walked(self):
        docs = collected_docs("query Q { user { name } }")
        store = DocumentStore(docs)
        seen: list[str] = []

        def visit(selection_set: SelectionSetNode, resolved_type: GraphQLNamedType) -> None:
            seen.append(resolved_type.name)
            if resolved_type.name == "User" and len(selection_set.selections) == 1:
                pets = FieldNode(
                    name=NameNode(value="pets"),
                    arguments=(),
                    directives=(),
                    selection_set=SelectionSetNode(
                        selections=(FieldNode(name=NameNode(value="name"), arguments=(), directives=()),)
                    ),
                )
                selection_set.selections = (*selection_set.selections, pets)

        walk_selections(
            TYPE_CONTEXT,
            store.get("Q").selection_set,
            TYPE_CONTEXT.get_type("Query"),
            visit,
            store=store,
            document_name="Q",
        )
        assert seen == ["Query", "User", "Cat"]


class TestLocationHint:
    def test_includes_line_and_column(self):
        docs = collected_docs("query Q {\n  user {\n    id\n  }\n}")
        user = docs[0].selection_set.selections[0]
        assert location_hint(user, ("user",)) == "user (2:3)"

    def test_synthetic_node_has_path_only(self):
        node = FieldNode(name=NameNode(value="x"), arguments=(), directives=())
        assert location_hint(node, ("a", "x")) == "a.x"
