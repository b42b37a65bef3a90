"""Aggregated diagnostics returned to whoever drives a compile."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from gqlnorm.compiler.types import Diagnostic, Severity


class Diagnostics:
    """Diagnostics in the order the passes reported them."""

    def __init__(self, items: Iterable[Diagnostic] = ()):
        self._items: list[Diagnostic] = list(items)

    def extend(self, items: Iterable[Diagnostic]) -> None:
        self._items.extend(items)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    @property
    def advisories(self) -> list[Diagnostic]:
        return [d for d in self._items if d.severity is Severity.ADVISORY]

    @property
    def fatal(self) -> Diagnostic | None:
        """The first fatal diagnostic, if any."""
        return next((d for d in self._items if d.is_fatal), None)

    @property
    def has_fatal(self) -> bool:
        return self.fatal is not None

    def for_document(self, name: str) -> list[Diagnostic]:
        return [d for d in self._items if d.document_name == name]
