"""CLI entry point for gqlnorm."""

from __future__ import annotations

import click
from dotenv import load_dotenv

from gqlnorm.commands.compile.cmd import compile_cmd, inspect

load_dotenv()


@click.group()
@click.version_option(version="0.1.0", prog_name="gqlnorm")
def cli() -> None:
    """Normalize GraphQL documents against a schema before code generation."""


cli.add_command(compile_cmd)
cli.add_command(inspect)


if __name__ == "__main__":
    cli()
