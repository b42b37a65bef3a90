"""Tests for the cache key field pass."""

from __future__ import annotations

from gqlnorm.compiler.compile import print_document
from gqlnorm.compiler.passes import AddKeyFields
from gqlnorm.compiler.store import DocumentStore
from gqlnorm.compiler.types import Severity
from tests.conftest import TYPE_CONTEXT, collected_docs, compile_sources, expected, printed


def keys_only(*sources: str, key_fields=("id",)):
    return compile_sources(*sources, passes=[AddKeyFields(key_fields)])


class TestAddKeyFields:
    def test_adds_id_to_entities(self):
        result = keys_only("query Users { users { name pets { name } } }")
        assert printed(result, "Users") == expected(
            """
            query Users {
              users {
                name
                pets {
                  name
                  id
                }
                id
              }
            }
            """
        )

    def test_existing_key_is_kept(self):
        result = keys_only("query Users { users { id name } }")
        assert printed(result, "Users") == expected(
            """
            query Users {
              users {
                id
                name
              }
            }
            """
        )

    def test_interface_with_key_gets_it(self):
        result = keys_only('query N { node(id: "1") { ... on User { name } } }')
        assert printed(result, "N") == expected(
            """
            query N {
              node(id: "1") {
                ... on User {
                  name
                }
                id
              }
            }
            """
        )

    def test_types_without_key_are_left_alone(self):
        source = "query Q { friends { name } entities { ... on Ghost { aka } } viewer { settings { theme } } }"
        result = keys_only(source)
        assert printed(result, "Q") == print_document(collected_docs(source)[0])

    def test_root_type_is_skipped(self):
        result = keys_only("query Q { viewer { settings { theme } } }", key_fields=("viewer",))
        assert printed(result, "Q").count("viewer") == 1

    def test_fragment_root_gets_keys(self):
        result = keys_only("query Q { user { ...UserName } }", "fragment UserName on User { name }")
        assert printed(result, "UserName") == "fragment UserName on User {\n  name\n  id\n}"

    def test_compound_keys(self):
        result = keys_only("query Q { friends { ... on Ghost { haunts { ... on Cat { owner { id } } } } } }", key_fields=("id", "name"))
        text = printed(result, "Q")
        assert "owner {\n            id\n            name\n          }" in text

    def test_empty_key_list_is_a_no_op(self):
        source = "query Users { users { name } }"
        result = keys_only(source, key_fields=())
        assert printed(result, "Users") == print_document(collected_docs(source)[0])

    def test_idempotent(self):
        store = DocumentStore(collected_docs("query Users { users { pets { owner { name } } } }"))
        AddKeyFields(["id"])(TYPE_CONTEXT, store)
        once = print_document(store.get("Users"))
        AddKeyFields(["id"])(TYPE_CONTEXT, store)
        assert print_document(store.get("Users")) == once

    def test_no_key_fields_by_default(self):
        source = "query Users { users { name pets { name } } }"
        result = compile_sources(source, passes=[AddKeyFields()])
        assert printed(result, "Users") == print_document(collected_docs(source)[0])


class TestUnusableKeyFields:
    def test_composite_key_field_is_reported_not_added(self):
        source = "query Q { users { name } }"
        result = keys_only(source, key_fields=("bestFriend",))
        assert printed(result, "Q") == print_document(collected_docs(source)[0])
        [diag] = list(result.diagnostics)
        assert diag.severity == Severity.ADVISORY
        assert diag.document_name == "Q"
        assert diag.pass_name == "add_key_fields"
        assert "'bestFriend' on type 'User'" in diag.message

    def test_key_field_with_required_arguments_is_reported(self):
        source = "query Q { viewer { settings { theme } } }"
        result = keys_only(source, key_fields=("theme", "label"))
        assert printed(result, "Q") == print_document(collected_docs(source)[0])
        assert [d.message.split(" is ")[0] for d in result.diagnostics] == [
            "Key field 'label' on type 'Settings'"
        ]

    def test_reported_once_per_type(self):
        result = keys_only(
            "query A { users { name } user { name } }",
            "query B { user { pets { owner { name } } } }",
            key_fields=("id", "bestFriend"),
        )
        assert len(result.diagnostics) == 1
        assert "id" not in printed(result, "B")

    def test_optional_arguments_are_fine(self):
        result = keys_only("query Q { viewer { settings { label(locale: \"fr\") } } }", key_fields=("theme",))
        assert list(result.diagnostics) == []
        assert printed(result, "Q").endswith("label(locale: \"fr\")\n      theme\n    }\n  }\n}")
