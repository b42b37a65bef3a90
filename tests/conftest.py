"""Shared test fixtures for gqlnorm tests."""

from __future__ import annotations

from collections.abc import Sequence
import textwrap

import pytest

from gqlnorm.commands.compile.loader import collect_source
from gqlnorm.compiler.compile import CompileResult, compile_documents, print_document
from gqlnorm.compiler.runner import Pass
from gqlnorm.compiler.type_context import TypeContext
from gqlnorm.compiler.types import CollectedDocument

SCHEMA_SDL = """
type Query {
  user: User
  users(stringValue: String): [User!]!
  friends: [Friend!]!
  entities: [Entity!]!
  node(id: ID!): Node
  viewer: Viewer
}

type Mutation {
  updateUser(name: String): User
}

interface Node {
  id: ID!
}

interface Friend {
  name: String!
}

type User implements Node & Friend {
  id: ID!
  name: String!
  friendsInterface: [Friend!]!
  bestFriend: Friend
  pets: [Cat!]!
}

type Cat implements Node & Friend {
  id: ID!
  name: String!
  owner: User
  enemies: [Friend!]!
}

type Ghost implements Friend {
  name: String!
  aka: String!
  haunts: [Entity!]!
}

union Entity = User | Cat | Ghost

type Viewer {
  settings: Settings
}

type Settings {
  theme(fallback: String): String
  label(locale: String!): String
}

enum Color {
  RED
  GREEN
}

scalar Date

input UserFilter {
  name: String
}
"""

TYPE_CONTEXT = TypeContext.from_sdl(SCHEMA_SDL)


@pytest.fixture
def type_context() -> TypeContext:
    return TYPE_CONTEXT


def collected_docs(*sources: str) -> list[CollectedDocument]:
    """Collect documents from GraphQL source snippets, one file per snippet."""
    docs: list[CollectedDocument] = []
    for i, source in enumerate(sources):
        docs.extend(collect_source(textwrap.dedent(source), f"src/doc_{i}.graphql"))
    return docs


def compile_sources(*sources: str, passes: Sequence[Pass] | None = None) -> CompileResult:
    """Collect and compile snippets against the shared test schema."""
    return compile_documents(TYPE_CONTEXT, collected_docs(*sources), passes=passes)


def printed(result: CompileResult, name: str) -> str:
    doc = result.store.get(name)
    assert doc is not None, f"no document named {name}"
    return print_document(doc)


def expected(text: str) -> str:
    """Dedent an expected printed document."""
    return textwrap.dedent(text).strip()
