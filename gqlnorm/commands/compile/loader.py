"""Load the schema and collect documents from .graphql files on disk."""

from __future__ import annotations

from collections.abc import Iterable
import glob
from pathlib import Path

from graphql import GraphQLError, Source, parse as gql_parse
from graphql.language.ast import (
    DocumentNode,
    FragmentDefinitionNode,
    OperationDefinitionNode,
)

from gqlnorm.compiler.type_context import TypeContext
from gqlnorm.compiler.types import CollectedDocument, DocumentKind
from gqlnorm.errors import DocumentCollectionError, SchemaLoadError


def load_schema(path: str | Path) -> TypeContext:
    """Build a TypeContext from an SDL file."""
    path = Path(path)
    try:
        sdl = path.read_text()
    except OSError as e:
        raise SchemaLoadError(f"Cannot read schema {path}: {e}") from e
    try:
        return TypeContext.from_sdl(sdl)
    except (GraphQLError, TypeError) as e:
        # build_schema raises TypeError when the SDL is syntactically valid but inconsistent
        raise SchemaLoadError(f"Invalid schema {path}: {e}") from e


def find_document_files(patterns: Iterable[str], exclude: Iterable[str | Path] = ()) -> list[Path]:
    """Expand glob patterns into a sorted, de-duplicated list of files.

    ``exclude`` holds files or directories; a directory excludes everything
    beneath it.
    """
    excluded = [Path(p).resolve() for p in exclude]
    found: set[Path] = set()
    for pattern in patterns:
        for match in glob.glob(pattern, recursive=True):
            path = Path(match)
            if not path.is_file():
                continue
            resolved = path.resolve()
            if any(resolved == e or e in resolved.parents for e in excluded):
                continue
            found.add(path)
    return sorted(found)


def collect_documents(paths: Iterable[str | Path]) -> list[CollectedDocument]:
    """Parse each file and split it into one collected document per definition."""
    documents: list[CollectedDocument] = []
    for path in paths:
        path = Path(path)
        try:
            text = path.read_text()
        except OSError as e:
            raise DocumentCollectionError(f"Cannot read {path}: {e}") from e
        documents.extend(collect_source(text, str(path)))
    return documents


def collect_source(text: str, source_file: str = "") -> list[CollectedDocument]:
    """Parse GraphQL source text into collected documents."""
    try:
        document = gql_parse(Source(text, source_file or "GraphQL request"))
    except GraphQLError as e:
        raise DocumentCollectionError(
            f"Cannot parse {source_file or 'document'}: {e.message}",
            details={"file": source_file, "locations": [tuple(loc) for loc in e.locations or []]},
        ) from e

    documents: list[CollectedDocument] = []
    for defn in document.definitions:
        if isinstance(defn, OperationDefinitionNode):
            if defn.name is None:
                raise DocumentCollectionError(
                    f"Anonymous {defn.operation.value} in {source_file or 'document'}: operations must be named",
                    details={"file": source_file},
                )
            kind = DocumentKind(defn.operation.value)
        elif isinstance(defn, FragmentDefinitionNode):
            kind = DocumentKind.FRAGMENT
        else:
            raise DocumentCollectionError(
                f"Unexpected {defn.kind} in {source_file or 'document'}: only operations and fragments are collected",
                details={"file": source_file},
            )
        documents.append(
            CollectedDocument(
                name=defn.name.value,
                kind=kind,
                document=DocumentNode(definitions=(defn,), loc=document.loc),
                source_file=source_file,
            )
        )
    return documents
