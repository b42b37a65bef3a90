"""Intermediate types passed between compile pipeline steps."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from gqlnorm.compiler.diagnostics import Diagnostics
from gqlnorm.compiler.runner import Pass
from gqlnorm.compiler.type_context import TypeContext
from gqlnorm.compiler.types import CollectedDocument, DocumentKind


@dataclass
class CompileInput:
    type_context: TypeContext
    documents: list[CollectedDocument]
    key_fields: list[str] = field(default_factory=lambda: list[str]())
    # overrides the default pass list built from key_fields
    passes: list[Pass] | None = None
    on_progress: Callable[[str], None] | None = None


@dataclass
class PrintedDocument:
    """A transformed document, printed."""

    name: str
    kind: DocumentKind
    source_file: str
    text: str


@dataclass
class CompileOutput:
    """Result of the compile pipeline handed to writers and reporters."""

    documents: list[PrintedDocument] = field(default_factory=lambda: list[PrintedDocument]())
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    @property
    def ok(self) -> bool:
        return not self.diagnostics.has_fatal
