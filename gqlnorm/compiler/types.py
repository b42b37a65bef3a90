"""Types shared by the compiler passes.

Centralised in one file so the data flowing between the store, the walker
and the passes is readable without opening each module.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from graphql.language.ast import (
    DocumentNode,
    ExecutableDefinitionNode,
    FragmentDefinitionNode,
    OperationDefinitionNode,
    SelectionSetNode,
)

TYPENAME = "__typename"


class TypeKind(str, Enum):
    OBJECT = "object"
    INTERFACE = "interface"
    UNION = "union"
    SCALAR = "scalar"
    ENUM = "enum"
    INPUT = "input"


class DocumentKind(str, Enum):
    QUERY = "query"
    MUTATION = "mutation"
    SUBSCRIPTION = "subscription"
    FRAGMENT = "fragment"

    @property
    def is_fragment(self) -> bool:
        return self is DocumentKind.FRAGMENT

    @property
    def is_operation(self) -> bool:
        return self is not DocumentKind.FRAGMENT


class Severity(str, Enum):
    ADVISORY = "advisory"
    FATAL = "fatal"


@dataclass(frozen=True)
class Diagnostic:
    """An issue found while transforming a document.

    Fatal diagnostics stop the pipeline; advisory ones are collected and
    surfaced as warnings.
    """

    severity: Severity
    message: str
    document_name: str
    location_hint: str = ""
    pass_name: str = ""  # stamped by the runner

    @property
    def is_fatal(self) -> bool:
        return self.severity is Severity.FATAL

    @classmethod
    def advisory(cls, message: str, document_name: str, location_hint: str = "") -> Diagnostic:
        return cls(Severity.ADVISORY, message, document_name, location_hint)

    @classmethod
    def fatal(cls, message: str, document_name: str, location_hint: str = "") -> Diagnostic:
        return cls(Severity.FATAL, message, document_name, location_hint)

    def __str__(self) -> str:
        where = f" at {self.location_hint}" if self.location_hint else ""
        return f"[{self.severity.value}] {self.document_name}{where}: {self.message}"


@dataclass
class CollectedDocument:
    """A named operation or fragment definition, ready for the passes.

    ``document`` owns exactly one executable definition. Passes mutate its
    selection sets in place but never reassign ``name`` or ``kind``.
    """

    name: str
    kind: DocumentKind
    document: DocumentNode
    source_file: str = ""

    @property
    def definition(self) -> ExecutableDefinitionNode:
        definition = self.document.definitions[0]
        assert isinstance(definition, (OperationDefinitionNode, FragmentDefinitionNode))
        return definition

    @property
    def selection_set(self) -> SelectionSetNode:
        return self.definition.selection_set

    @property
    def type_condition(self) -> str | None:
        """The declared type of a fragment document, None for operations."""
        definition = self.definition
        if isinstance(definition, FragmentDefinitionNode):
            return definition.type_condition.name.value
        return None
