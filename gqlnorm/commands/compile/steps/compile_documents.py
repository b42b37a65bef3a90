"""Step: run the compiler passes over the collected documents.

The compile itself is synchronous and never yields. It runs in a worker
thread so that several independent compiles started from the same event
loop do not block each other. Each compile owns its documents; only the
schema behind the TypeContext is shared, read-only.
"""

from __future__ import annotations

import asyncio

from gqlnorm.commands.compile.steps.base import MechanicalStep, StepValidationError
from gqlnorm.commands.compile.steps.types import CompileInput
from gqlnorm.compiler.compile import CompileResult, compile_documents, default_passes


class CompileDocumentsStep(MechanicalStep[CompileInput, CompileResult]):
    name = "compile_documents"

    async def _execute(self, input: CompileInput) -> CompileResult:
        passes = input.passes if input.passes is not None else default_passes(input.key_fields)
        return await asyncio.to_thread(
            compile_documents,
            input.type_context,
            input.documents,
            passes,
            input.on_progress,
        )

    def _validate_output(self, input: CompileInput, output: CompileResult) -> None:
        # documents are mutated in place, so compare with the names the store was keyed by
        expected = output.store.names()
        names = [doc.name for doc in output.store]
        if names != expected or len(expected) != len(input.documents):
            raise StepValidationError(
                "Passes must not add, remove, rename or reorder documents",
                details={"expected": expected, "got": names},
            )
