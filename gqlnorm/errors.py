"""Exceptions raised outside the passes.

Passes report problems as diagnostics; these cover the steps around them
(config, schema loading, document collection) where there is no document
to attach a diagnostic to.
"""

from __future__ import annotations

from typing import Any


class GqlnormError(Exception):
    """Base class for gqlnorm errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.details: dict[str, Any] = details or {}


class ConfigError(GqlnormError):
    """Raised when a project config file is missing or invalid."""


class SchemaLoadError(GqlnormError):
    """Raised when the schema SDL cannot be read or built."""


class DocumentCollectionError(GqlnormError):
    """Raised when a source file cannot be turned into collected documents."""


class DuplicateDocumentError(GqlnormError):
    """Raised when two collected documents share a name."""
