"""Step: print the transformed documents.

Printing the same tree twice must give the same text; the output is
checked for that before it is handed to the writers.
"""

from __future__ import annotations

from gqlnorm.commands.compile.steps.base import MechanicalStep, StepValidationError
from gqlnorm.commands.compile.steps.types import CompileOutput, PrintedDocument
from gqlnorm.compiler.compile import CompileResult, print_document


class PrintDocumentsStep(MechanicalStep[CompileResult, CompileOutput]):
    name = "print_documents"

    async def _execute(self, input: CompileResult) -> CompileOutput:
        printed = [
            PrintedDocument(
                name=doc.name,
                kind=doc.kind,
                source_file=doc.source_file,
                text=print_document(doc),
            )
            for doc in input.store
        ]
        return CompileOutput(documents=printed, diagnostics=input.diagnostics)

    def _validate_output(self, input: CompileResult, output: CompileOutput) -> None:
        for printed in output.documents:
            doc = input.store.get(printed.name)
            if doc is None or print_document(doc) != printed.text:
                raise StepValidationError(
                    f"Printing {printed.name!r} is not stable",
                    details={"document": printed.name},
                )
