"""Compile entry point: build the pass list and run it over a document set."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from graphql.language import print_ast

from gqlnorm.compiler.diagnostics import Diagnostics
from gqlnorm.compiler.passes import AddKeyFields, AddTypename, ValidateDocuments
from gqlnorm.compiler.passes.add_key_fields import DEFAULT_KEY_FIELDS
from gqlnorm.compiler.runner import Pass, PassRunner
from gqlnorm.compiler.store import DocumentStore
from gqlnorm.compiler.type_context import TypeContext
from gqlnorm.compiler.types import CollectedDocument


@dataclass
class CompileResult:
    """Transformed documents plus everything the passes reported."""

    store: DocumentStore
    diagnostics: Diagnostics

    @property
    def ok(self) -> bool:
        return not self.diagnostics.has_fatal


def default_passes(key_fields: Sequence[str] = DEFAULT_KEY_FIELDS) -> list[Pass]:
    """Validation, then key fields when any are configured, then __typename."""
    # validation has to run first
    passes: list[Pass] = [ValidateDocuments()]
    if key_fields:
        passes.append(AddKeyFields(key_fields))
    passes.append(AddTypename())
    return passes


def compile_documents(
    type_context: TypeContext,
    documents: Iterable[CollectedDocument],
    passes: Sequence[Pass] | None = None,
    on_progress: Callable[[str], None] | None = None,
) -> CompileResult:
    """Run the passes over ``documents``, mutating them in place."""
    store = DocumentStore(documents)
    runner = PassRunner(default_passes() if passes is None else passes, on_progress)
    diagnostics = runner.run(type_context, store)
    return CompileResult(store=store, diagnostics=diagnostics)


def print_document(doc: CollectedDocument) -> str:
    return print_ast(doc.document)
