"""Run an ordered list of passes over a document store.

Passes run strictly in list order and each one sees what the previous ones
changed. Diagnostics are stamped with the pass that reported them. The first
pass reporting a fatal diagnostic is the last one to run.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import replace

from gqlnorm.compiler.diagnostics import Diagnostics
from gqlnorm.compiler.store import DocumentStore
from gqlnorm.compiler.type_context import TypeContext
from gqlnorm.compiler.types import Diagnostic

Pass = Callable[[TypeContext, DocumentStore], list[Diagnostic]]


class PassRunner:
    """Drives one compile. Holds no state between runs."""

    def __init__(
        self,
        passes: Sequence[Pass],
        on_progress: Callable[[str], None] | None = None,
    ):
        self.passes = list(passes)
        self.on_progress = on_progress

    def run(self, type_context: TypeContext, store: DocumentStore) -> Diagnostics:
        diagnostics = Diagnostics()
        for compiler_pass in self.passes:
            name = pass_name(compiler_pass)
            self._progress(f"Running pass {name} over {len(store)} documents")
            reported = [
                d if d.pass_name else replace(d, pass_name=name)
                for d in compiler_pass(type_context, store)
            ]
            diagnostics.extend(reported)
            if any(d.is_fatal for d in reported):
                self._progress(f"  Pass {name} reported a fatal error, stopping")
                break
        return diagnostics

    def _progress(self, msg: str) -> None:
        if self.on_progress:
            self.on_progress(msg)


def run(
    type_context: TypeContext,
    store: DocumentStore,
    passes: Sequence[Pass],
) -> Diagnostics:
    """Run ``passes`` in order over ``store`` and return their diagnostics."""
    return PassRunner(passes).run(type_context, store)


def pass_name(compiler_pass: Pass) -> str:
    name = getattr(compiler_pass, "name", None)
    if isinstance(name, str):
        return name
    return getattr(compiler_pass, "__name__", type(compiler_pass).__name__)
