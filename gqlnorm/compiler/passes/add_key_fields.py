"""Pass: select the cache key fields of every entity a document reaches.

The normalized cache identifies records by their key fields. No key fields
are configured by default, which makes the pass a no-op. Any selection set
reached through a field or a fragment definition, whose type declares all
the key fields, gets the missing ones appended. Operation root types and
inline fragment bodies are left alone.

A key field has to be selectable bare: a scalar or enum field with no
required arguments. A type whose key fields are not all like that is left
alone and reported once as an advisory.
"""

from __future__ import annotations

from collections.abc import Sequence

from graphql import GraphQLNamedType
from graphql.language.ast import InlineFragmentNode, SelectionSetNode

from gqlnorm.compiler.passes.add_typename import append_field, selects_field
from gqlnorm.compiler.passes.base import CompilerPass
from gqlnorm.compiler.store import DocumentStore
from gqlnorm.compiler.type_context import TypeContext
from gqlnorm.compiler.types import Diagnostic
from gqlnorm.compiler.walker import location_hint, walk_document

DEFAULT_KEY_FIELDS: tuple[str, ...] = ()


class AddKeyFields(CompilerPass):
    name = "add_key_fields"

    def __init__(self, key_fields: Sequence[str] = DEFAULT_KEY_FIELDS):
        self.key_fields = tuple(key_fields)

    def __call__(self, type_context: TypeContext, store: DocumentStore) -> list[Diagnostic]:
        if not self.key_fields:
            return []

        diagnostics: list[Diagnostic] = []
        # ids of inline fragment bodies; parents are visited before children
        narrowing: set[int] = set()
        rejected: set[tuple[str, str]] = set()
        document_name = ""

        def visit(selection_set: SelectionSetNode, resolved_type: GraphQLNamedType) -> None:
            for sel in selection_set.selections:
                if isinstance(sel, InlineFragmentNode):
                    narrowing.add(id(sel.selection_set))
            if id(selection_set) in narrowing:
                return
            if type_context.is_root_type(resolved_type):
                return
            if not type_context.has_fields(resolved_type, self.key_fields):
                return

            unusable = [
                key for key in self.key_fields
                if not type_context.is_bare_selectable(resolved_type, key)
            ]
            if unusable:
                for key in unusable:
                    if (resolved_type.name, key) in rejected:
                        continue
                    rejected.add((resolved_type.name, key))
                    diagnostics.append(
                        Diagnostic.advisory(
                            f"Key field {key!r} on type {resolved_type.name!r} is not a scalar "
                            "field without required arguments, keys not added",
                            document_name,
                            location_hint(selection_set),
                        )
                    )
                return

            for key in self.key_fields:
                if not selects_field(selection_set, key):
                    append_field(selection_set, key)

        for doc in store:
            document_name = doc.name
            diagnostics.extend(walk_document(type_context, store, doc, visit))
        return diagnostics
