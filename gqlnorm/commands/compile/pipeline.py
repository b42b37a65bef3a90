"""Orchestrator for the compile pipeline.

Loads the schema, collects the documents, runs the compiler passes and
prints the result. Writing files is left to the caller so that nothing is
emitted when a fatal diagnostic is present.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from gqlnorm.commands.compile.loader import collect_documents, find_document_files, load_schema
from gqlnorm.commands.compile.steps.compile_documents import CompileDocumentsStep
from gqlnorm.commands.compile.steps.print_documents import PrintDocumentsStep
from gqlnorm.commands.compile.steps.types import CompileInput, CompileOutput
from gqlnorm.formats.compile_report import CompileReport, DiagnosticEntry, DocumentEntry
from gqlnorm.formats.project_config import ProjectConfig


async def build_artifacts(
    config: ProjectConfig,
    on_progress: Callable[[str], None] | None = None,
) -> CompileOutput:
    """Compile every document matched by ``config``."""

    def progress(msg: str) -> None:
        if on_progress:
            on_progress(msg)

    progress(f"Loading schema {config.schema_path}")
    type_context = load_schema(config.schema_path)
    progress(f"  Found {len(type_context.schema.type_map)} types")

    files = find_document_files(config.documents, exclude=[config.schema_path, config.output])
    documents = collect_documents(files)
    progress(f"Collected {len(documents)} documents from {len(files)} files")

    compile_step = CompileDocumentsStep()
    result = await compile_step.run(
        CompileInput(
            type_context=type_context,
            documents=documents,
            key_fields=list(config.key_fields),
            on_progress=on_progress,
        )
    )

    print_step = PrintDocumentsStep()
    output = await print_step.run(result)
    advisories = len(output.diagnostics.advisories)
    progress(f"  {advisories} warning(s), {'no errors' if output.ok else 'compile failed'}")
    return output


def write_artifacts(output: CompileOutput, output_dir: str | Path) -> dict[str, Path]:
    """Write one .graphql file per document. Refuses to write a failed compile."""
    if not output.ok:
        raise ValueError("Refusing to write documents from a failed compile")
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    written: dict[str, Path] = {}
    for printed in output.documents:
        path = output_dir / f"{printed.name}.graphql"
        with open(path, "w") as f:
            f.write(printed.text)
            f.write("\n")
        written[printed.name] = path
    return written


def build_report(output: CompileOutput, written: dict[str, Path] | None = None) -> CompileReport:
    written = written or {}
    return CompileReport(
        ok=output.ok,
        documents=[
            DocumentEntry(
                name=d.name,
                kind=d.kind.value,
                source_file=d.source_file,
                output_file=str(written[d.name]) if d.name in written else None,
            )
            for d in output.documents
        ],
        diagnostics=[
            DiagnosticEntry(
                severity=d.severity.value,
                message=d.message,
                document=d.document_name,
                location=d.location_hint,
                pass_name=d.pass_name,
            )
            for d in output.diagnostics
        ],
    )
