"""Typed traversal of selection sets.

Visits every selection set of a document in document order, depth-first,
parent before children, while tracking the schema type each set selects
from. The walker itself never changes the tree: mutation is left to the
visitor, and child selections are read after the visitor returns so that
anything it appended is walked too.

Fragment spreads are followed into the fragment's own selection set under
the fragment's declared type. There is no global "visited" set, so a
fragment reached through two spreads is walked twice and any diagnostic
inside it is reported twice. Only the spreads open on the current path are
remembered, to stop at a fragment cycle.
"""

from __future__ import annotations

from collections.abc import Callable

from graphql import GraphQLNamedType
from graphql.language import get_location
from graphql.language.ast import (
    FieldNode,
    FragmentSpreadNode,
    InlineFragmentNode,
    Node,
    SelectionSetNode,
)

from gqlnorm.compiler.store import DocumentStore
from gqlnorm.compiler.type_context import TypeContext
from gqlnorm.compiler.types import CollectedDocument, Diagnostic

Visit = Callable[[SelectionSetNode, GraphQLNamedType], None]


def walk_document(
    type_context: TypeContext,
    store: DocumentStore,
    doc: CollectedDocument,
    visit: Visit,
) -> list[Diagnostic]:
    """Walk a collected document from its root type."""
    if doc.kind.is_fragment:
        type_name = doc.type_condition or ""
        root = type_context.get_type(type_name)
        if root is None:
            return [
                Diagnostic.advisory(
                    f"Unknown type {type_name!r} in fragment type condition, skipped",
                    doc.name,
                    location_hint(doc.definition),
                )
            ]
    else:
        root = type_context.root_type(doc.kind)
        if root is None:
            return [
                Diagnostic.advisory(
                    f"Schema has no {doc.kind.value} root type, skipped",
                    doc.name,
                    location_hint(doc.definition),
                )
            ]

    return walk_selections(
        type_context, doc.selection_set, root, visit, store=store, document_name=doc.name
    )


def walk_selections(
    type_context: TypeContext,
    selection_set: SelectionSetNode,
    parent_type: GraphQLNamedType,
    visit: Visit,
    *,
    store: DocumentStore,
    document_name: str,
) -> list[Diagnostic]:
    """Walk ``selection_set`` and everything below it.

    ``visit(selection_set, resolved_type)`` is called once per selection set
    reached, the root set being visited with ``parent_type``. Returns the
    diagnostics found along the way.
    """
    walker = _SelectionWalker(type_context, store, document_name, visit)
    walker.walk(selection_set, parent_type, (), ())
    return walker.diagnostics


class _SelectionWalker:
    def __init__(
        self,
        type_context: TypeContext,
        store: DocumentStore,
        document_name: str,
        visit: Visit,
    ):
        self.type_context = type_context
        self.store = store
        self.document_name = document_name
        self.visit = visit
        self.diagnostics: list[Diagnostic] = []

    def walk(
        self,
        selection_set: SelectionSetNode,
        current_type: GraphQLNamedType,
        path: tuple[str, ...],
        open_fragments: tuple[str, ...],
    ) -> None:
        self.visit(selection_set, current_type)

        for selection in tuple(selection_set.selections):
            if isinstance(selection, FieldNode):
                if selection.selection_set is None:
                    continue
                field_name = selection.name.value
                key = selection.alias.value if selection.alias else field_name
                child_path = (*path, key)
                child_type = self.type_context.field_type(current_type, field_name)
                if child_type is None:
                    # keep going with the last type we know about
                    self._advisory(
                        f"Cannot query field {field_name!r} on type {current_type.name!r}",
                        child_path,
                        selection,
                    )
                    child_type = current_type
                self.walk(selection.selection_set, child_type, child_path, open_fragments)

            elif isinstance(selection, InlineFragmentNode):
                child_type = current_type
                if selection.type_condition is None:
                    child_path = (*path, "...")
                else:
                    type_name = selection.type_condition.name.value
                    child_path = (*path, f"... on {type_name}")
                    narrowed = self.type_context.get_type(type_name)
                    if narrowed is None:
                        self._advisory(
                            f"Unknown type {type_name!r} in inline fragment",
                            child_path,
                            selection,
                        )
                    else:
                        child_type = narrowed
                self.walk(selection.selection_set, child_type, child_path, open_fragments)

            elif isinstance(selection, FragmentSpreadNode):
                self._walk_spread(selection, current_type, path, open_fragments)

    def _walk_spread(
        self,
        spread: FragmentSpreadNode,
        current_type: GraphQLNamedType,
        path: tuple[str, ...],
        open_fragments: tuple[str, ...],
    ) -> None:
        name = spread.name.value
        child_path = (*path, f"...{name}")
        if name in open_fragments:
            cycle = " -> ".join((*open_fragments, name))
            self._fatal(f"Fragment cycle: {cycle}", child_path, spread)
            return

        fragment = self.store.fragment(name)
        if fragment is None:
            self._fatal(f"Unknown fragment {name!r}", child_path, spread)
            return

        type_name = fragment.type_condition.name.value
        fragment_type = self.type_context.get_type(type_name)
        if fragment_type is None:
            self._advisory(
                f"Unknown type {type_name!r} in fragment {name!r}", child_path, spread
            )
            fragment_type = current_type
        self.walk(fragment.selection_set, fragment_type, child_path, (*open_fragments, name))

    def _advisory(self, message: str, path: tuple[str, ...], node: Node) -> None:
        self.diagnostics.append(
            Diagnostic.advisory(message, self.document_name, location_hint(node, path))
        )

    def _fatal(self, message: str, path: tuple[str, ...], node: Node) -> None:
        self.diagnostics.append(
            Diagnostic.fatal(message, self.document_name, location_hint(node, path))
        )


def location_hint(node: Node, path: tuple[str, ...] = ()) -> str:
    """Describe where ``node`` is: its selection path and source position."""
    hint = ".".join(path)
    loc = node.loc
    if loc is not None and loc.source is not None:
        position = get_location(loc.source, loc.start)
        where = f"{position.line}:{position.column}"
        hint = f"{hint} ({where})" if hint else where
    return hint
