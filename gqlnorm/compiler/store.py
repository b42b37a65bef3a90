"""Ordered collection of the documents taking part in one compile."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from graphql.language.ast import FragmentDefinitionNode

from gqlnorm.compiler.types import CollectedDocument
from gqlnorm.errors import DuplicateDocumentError


class DocumentStore:
    """Documents keyed by their unique name, in collection order.

    Passes mutate the documents in place. Nothing is added or removed once
    the store is built.
    """

    def __init__(self, documents: Iterable[CollectedDocument] = ()):
        self._documents: dict[str, CollectedDocument] = {}
        for doc in documents:
            existing = self._documents.get(doc.name)
            if existing is not None:
                raise DuplicateDocumentError(
                    f"Document name {doc.name!r} is defined more than once",
                    details={"files": [existing.source_file, doc.source_file]},
                )
            self._documents[doc.name] = doc

    def __iter__(self) -> Iterator[CollectedDocument]:
        return iter(self._documents.values())

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, name: object) -> bool:
        return name in self._documents

    def names(self) -> list[str]:
        """Names the documents were collected under, in order."""
        return list(self._documents)

    def get(self, name: str) -> CollectedDocument | None:
        return self._documents.get(name)

    def operations(self) -> list[CollectedDocument]:
        return [doc for doc in self if doc.kind.is_operation]

    def fragments(self) -> list[CollectedDocument]:
        return [doc for doc in self if doc.kind.is_fragment]

    def fragment(self, name: str) -> FragmentDefinitionNode | None:
        """Look up a fragment definition by name."""
        doc = self._documents.get(name)
        if doc is None or not doc.kind.is_fragment:
            return None
        definition = doc.definition
        assert isinstance(definition, FragmentDefinitionNode)
        return definition
