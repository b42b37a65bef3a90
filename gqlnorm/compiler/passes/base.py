"""Base class for compiler passes."""

from __future__ import annotations

from abc import ABC, abstractmethod

from gqlnorm.compiler.store import DocumentStore
from gqlnorm.compiler.type_context import TypeContext
from gqlnorm.compiler.types import Diagnostic


class CompilerPass(ABC):
    """A transformation applied to every document of a compile.

    A pass may mutate the documents of the store in place and returns the
    diagnostics it found. Running a pass twice must give the same tree as
    running it once.
    """

    name: str = "pass"

    @abstractmethod
    def __call__(self, type_context: TypeContext, store: DocumentStore) -> list[Diagnostic]:
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
