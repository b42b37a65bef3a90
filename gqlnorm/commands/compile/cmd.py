"""CLI commands for the compile stage."""

from __future__ import annotations

import asyncio
from pathlib import Path
import sys

import click
from rich.markup import escape

from gqlnorm.commands.compile.steps.types import CompileOutput
from gqlnorm.errors import GqlnormError
from gqlnorm.formats.project_config import ProjectConfig, load_config
from gqlnorm.helpers.console import console, diagnostics_table


@click.command(name="compile")
@click.argument("schema", required=False, type=click.Path(exists=True, dir_okay=False))
@click.argument("documents", nargs=-1)
@click.option(
    "-c",
    "--config",
    "config_path",
    envvar="GQLNORM_CONFIG",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Project config file (gqlnorm.yaml)",
)
@click.option("-o", "--output", default=None, help="Output directory for transformed documents")
@click.option(
    "--key-field",
    "key_fields",
    multiple=True,
    help="Cache key field to select on every entity (repeatable, none by default)",
)
@click.option("--report", default=None, help="Write a JSON compile report to this path")
def compile_cmd(
    schema: str | None,
    documents: tuple[str, ...],
    config_path: str | None,
    output: str | None,
    key_fields: tuple[str, ...],
    report: str | None,
) -> None:
    """Normalize GraphQL documents against a schema and write them out."""
    from gqlnorm.commands.compile.pipeline import build_report, write_artifacts

    config = _resolve_config(config_path, schema, documents, output, key_fields, report)
    result = _run(config)

    written = {}
    if result.ok:
        written = write_artifacts(result, config.output)
        console.print(f"[green]Wrote {len(written)} documents to {config.output}[/green]")

    if config.report:
        report_path = Path(config.report)
        report_path.parent.mkdir(parents=True, exist_ok=True)
        report_path.write_text(build_report(result, written).model_dump_json(indent=2, by_alias=True))
        console.print(f"[green]Compile report written to {report_path}[/green]")

    if not result.ok:
        sys.exit(1)


@click.command()
@click.argument("schema", type=click.Path(exists=True, dir_okay=False))
@click.argument("documents", nargs=-1, required=True)
@click.option("--key-field", "key_fields", multiple=True, help="Cache key field (repeatable, none by default)")
def inspect(schema: str, documents: tuple[str, ...], key_fields: tuple[str, ...]) -> None:
    """Print the transformed documents without writing anything."""
    config = _resolve_config(None, schema, documents, None, key_fields, None)
    result = _run(config)

    for printed in result.documents:
        console.print()
        console.print(f"[bold]# {printed.name}[/bold] [dim]({printed.kind.value}, {printed.source_file})[/dim]")
        console.print(printed.text, markup=False, highlight=False)

    if not result.ok:
        sys.exit(1)


def _resolve_config(
    config_path: str | None,
    schema: str | None,
    documents: tuple[str, ...],
    output: str | None,
    key_fields: tuple[str, ...],
    report: str | None,
) -> ProjectConfig:
    """Merge the config file (if any) with command-line overrides."""
    try:
        config = load_config(config_path) if config_path else ProjectConfig()
    except GqlnormError as e:
        raise click.ClickException(str(e)) from e

    if config_path is None and schema is None:
        raise click.UsageError("Provide a SCHEMA argument or a --config file")

    overrides: dict[str, object] = {}
    if schema is not None:
        overrides["schema_path"] = schema
    if documents:
        overrides["documents"] = list(documents)
    if output is not None:
        overrides["output"] = output
    if key_fields:
        overrides["key_fields"] = list(key_fields)
    if report is not None:
        overrides["report"] = report
    return config.model_copy(update=overrides)


def _run(config: ProjectConfig) -> CompileOutput:
    from gqlnorm.commands.compile.pipeline import build_artifacts

    def on_progress(msg: str) -> None:
        console.print(f"  {msg}")

    console.print(f"[bold]Compiling documents against {config.schema_path}[/bold]")
    try:
        result = asyncio.run(build_artifacts(config, on_progress=on_progress))
    except GqlnormError as e:
        raise click.ClickException(str(e)) from e

    if result.diagnostics:
        console.print(diagnostics_table(result.diagnostics))
    fatal = result.diagnostics.fatal
    if fatal is not None:
        console.print(f"[red]Compile failed: {escape(str(fatal))}[/red]")
    return result
