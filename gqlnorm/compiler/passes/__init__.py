"""Compiler passes run over the document store."""

from __future__ import annotations

from gqlnorm.compiler.passes.add_key_fields import (
    AddKeyFields as AddKeyFields,
)
from gqlnorm.compiler.passes.add_typename import (
    AddTypename as AddTypename,
)
from gqlnorm.compiler.passes.base import (
    CompilerPass as CompilerPass,
)
from gqlnorm.compiler.passes.validate_documents import (
    ValidateDocuments as ValidateDocuments,
)

__all__ = [
    "AddKeyFields",
    "AddTypename",
    "CompilerPass",
    "ValidateDocuments",
]
