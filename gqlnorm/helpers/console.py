"""Shared console and diagnostics rendering for CLI commands."""

from __future__ import annotations

from collections.abc import Iterable

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gqlnorm.compiler.types import Diagnostic

console = Console()


def diagnostics_table(diagnostics: Iterable[Diagnostic]) -> Table:
    """Build a table listing diagnostics, fatal ones in red."""
    table = Table(title="Diagnostics")
    table.add_column("Severity", no_wrap=True)
    table.add_column("Document", style="cyan", no_wrap=True)
    table.add_column("Location")
    table.add_column("Pass")
    table.add_column("Message")
    for d in diagnostics:
        severity = f"[red]{d.severity.value}[/red]" if d.is_fatal else f"[yellow]{d.severity.value}[/yellow]"
        table.add_row(severity, d.document_name, escape(d.location_hint), d.pass_name, escape(truncate(d.message, 120)))
    return table


def truncate(s: str, max_len: int) -> str:
    """Truncate a string to max_len, adding '...' if needed."""
    if len(s) <= max_len:
        return s
    return s[: max_len - 3] + "..."
