"""Pass: add ``__typename`` wherever a selection narrows an abstract type.

A selection set whose parent type is an interface or a union, and which
narrows it with at least one typed inline fragment, gets a ``__typename``
field appended unless it already selects one. The cache and the generated
narrowing code read it to tell which concrete type came back.

Object-typed selection sets never get one, including the bodies of inline
fragments on concrete types. Every interface/union boundary is checked on
its own, at any depth.
"""

from __future__ import annotations

from graphql import GraphQLNamedType
from graphql.language.ast import (
    FieldNode,
    InlineFragmentNode,
    NameNode,
    SelectionSetNode,
)

from gqlnorm.compiler.passes.base import CompilerPass
from gqlnorm.compiler.store import DocumentStore
from gqlnorm.compiler.type_context import TypeContext
from gqlnorm.compiler.types import TYPENAME, Diagnostic
from gqlnorm.compiler.walker import walk_document


class AddTypename(CompilerPass):
    name = "add_typename"

    def __call__(self, type_context: TypeContext, store: DocumentStore) -> list[Diagnostic]:
        def visit(selection_set: SelectionSetNode, resolved_type: GraphQLNamedType) -> None:
            if not type_context.is_abstract(resolved_type):
                return
            if not has_typed_inline_fragment(selection_set):
                return
            if selects_field(selection_set, TYPENAME):
                return
            append_field(selection_set, TYPENAME)

        diagnostics: list[Diagnostic] = []
        for doc in store:
            diagnostics.extend(walk_document(type_context, store, doc, visit))
        return diagnostics


def has_typed_inline_fragment(selection_set: SelectionSetNode) -> bool:
    return any(
        isinstance(sel, InlineFragmentNode) and sel.type_condition is not None
        for sel in selection_set.selections
    )


def selects_field(selection_set: SelectionSetNode, field_name: str) -> bool:
    """Whether a direct, unaliased child selects ``field_name``."""
    for sel in selection_set.selections:
        if isinstance(sel, FieldNode) and sel.name.value == field_name and sel.alias is None:
            return True
    return False


def append_field(selection_set: SelectionSetNode, field_name: str) -> None:
    """Append a bare field (no alias, arguments or selections) in place."""
    field = FieldNode(
        name=NameNode(value=field_name),
        arguments=(),
        directives=(),
    )
    selection_set.selections = (*selection_set.selections, field)
