"""Pass: structural checks that have to hold before any rewriting.

Runs first. Anything reported fatal here would make the later passes walk
a document they cannot resolve: spreads of unknown fragments, fragment
cycles, fragment type conditions that are not composite types, and
operations whose root type the schema lacks. Fragments nobody spreads are
only reported as advisory. Never mutates the documents.
"""

from __future__ import annotations

from graphql.language.ast import FragmentSpreadNode
from graphql.language.visitor import Visitor, visit

from gqlnorm.compiler.passes.base import CompilerPass
from gqlnorm.compiler.store import DocumentStore
from gqlnorm.compiler.type_context import TypeContext
from gqlnorm.compiler.types import CollectedDocument, Diagnostic
from gqlnorm.compiler.walker import location_hint


class _SpreadCollector(Visitor):
    """Collect every fragment spread of a document, in document order."""

    def __init__(self) -> None:
        super().__init__()
        self.spreads: list[FragmentSpreadNode] = []

    def enter_fragment_spread(self, node: FragmentSpreadNode, *_args: object) -> None:
        self.spreads.append(node)


def collect_spreads(doc: CollectedDocument) -> list[FragmentSpreadNode]:
    collector = _SpreadCollector()
    visit(doc.document, collector)
    return collector.spreads


class ValidateDocuments(CompilerPass):
    name = "validate_documents"

    def __call__(self, type_context: TypeContext, store: DocumentStore) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        dependencies: dict[str, list[str]] = {}
        spread_names: set[str] = set()

        for doc in store:
            diagnostics.extend(_check_root(type_context, doc))

            spreads = collect_spreads(doc)
            for spread in spreads:
                name = spread.name.value
                spread_names.add(name)
                if store.fragment(name) is None:
                    diagnostics.append(
                        Diagnostic.fatal(
                            f"Unknown fragment {name!r}", doc.name, location_hint(spread)
                        )
                    )
            if doc.kind.is_fragment:
                dependencies[doc.name] = [s.name.value for s in spreads]

        for cycle in find_fragment_cycles(dependencies):
            fragment = store.fragment(cycle[0])
            diagnostics.append(
                Diagnostic.fatal(
                    f"Fragment cycle: {' -> '.join(cycle)}",
                    cycle[0],
                    location_hint(fragment) if fragment else "",
                )
            )

        for doc in store.fragments():
            if doc.name not in spread_names:
                diagnostics.append(
                    Diagnostic.advisory(
                        f"Fragment {doc.name!r} is never used", doc.name, location_hint(doc.definition)
                    )
                )

        return diagnostics


def _check_root(type_context: TypeContext, doc: CollectedDocument) -> list[Diagnostic]:
    hint = location_hint(doc.definition)
    if doc.kind.is_operation:
        if type_context.root_type(doc.kind) is None:
            return [Diagnostic.fatal(f"Schema has no {doc.kind.value} root type", doc.name, hint)]
        return []

    type_name = doc.type_condition or ""
    fragment_type = type_context.get_type(type_name)
    if fragment_type is None:
        return [Diagnostic.fatal(f"Unknown type {type_name!r} in fragment type condition", doc.name, hint)]
    if not type_context.is_composite(fragment_type):
        kind = type_context.kind_of(fragment_type).value
        return [
            Diagnostic.fatal(
                f"Fragment cannot condition on {kind} type {type_name!r}", doc.name, hint
            )
        ]
    return []


def find_fragment_cycles(dependencies: dict[str, list[str]]) -> list[list[str]]:
    """Return each fragment cycle once, as the path that closes it.

    ``dependencies`` maps a fragment name to the fragments it spreads.
    """
    cycles: list[list[str]] = []
    done: set[str] = set()

    def dfs(name: str, path: list[str]) -> None:
        if name in path:
            cycles.append([*path[path.index(name):], name])
            return
        if name in done or name not in dependencies:
            return
        path.append(name)
        for dep in dependencies[name]:
            dfs(dep, path)
        path.pop()
        done.add(name)

    for name in dependencies:
        dfs(name, [])
    return cycles
