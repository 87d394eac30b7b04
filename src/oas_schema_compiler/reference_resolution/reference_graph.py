"""Reference graph resolution service."""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterator, Mapping
from dataclasses import dataclass, field

from oas_schema_compiler.dialect_registry import Dialect
from oas_schema_compiler.schema_model import (
    DefinitionsTable,
    Discriminator,
    ReferenceNode,
    SchemaNode,
    escape_pointer_segment,
    iter_child_nodes,
)

from .pointer_parsing import parse_local_reference

_LOGGER = logging.getLogger("oas_schema_compiler.references")
_LOGGER.addHandler(logging.NullHandler())

DEFINITIONS_COLLECTION = "definitions"


@dataclass(frozen=True)
class ReferenceEdge:
    """One reference found while walking a definition."""

    owner: str
    location: str
    ref: str


@dataclass(frozen=True)
class DanglingReference:
    """Reference whose local target does not exist."""

    owner: str
    location: str
    ref: str
    collection: str | None
    target_name: str | None

    def describe(self) -> str:
        """Return a one-line human readable description."""
        if self.collection is None:
            return f"{self.location}: '{self.ref}' does not point into a known collection"
        return (
            f"{self.location}: '{self.ref}' names missing {self.collection} "
            f"entry '{self.target_name}'"
        )


class UnresolvedReferencesError(Exception):
    """Raised with the complete list of dangling references of a definitions table."""

    def __init__(self, dangling: tuple[DanglingReference, ...], graph: ResolvedGraph) -> None:
        summary = "; ".join(item.describe() for item in dangling)
        super().__init__(f"{len(dangling)} unresolved reference(s): {summary}")
        self.dangling = dangling
        self.graph = graph


class ReferenceLookupError(KeyError):
    """Raised when a lookup cannot be satisfied from the definitions table."""


@dataclass(frozen=True)
class ResolvedGraph:
    """Definitions table plus every reference edge found in it."""

    table: DefinitionsTable
    edges: tuple[ReferenceEdge, ...]
    external_references: tuple[str, ...]
    collections: Mapping[str, str] = field(default_factory=dict)

    def lookup(self, ref: str, *, follow: bool = False) -> SchemaNode:
        """Return the definition a local reference points at.

        Args:
          ref: Reference string such as `#/definitions/Pet`.
          follow: Keep resolving while the target is itself a reference node.

        Raises:
          ReferenceLookupError: If the reference is external, targets another
            collection, or names a missing definition, or if following
            references loops.
        """
        seen: list[str] = []
        current = ref
        while True:
            if current in seen:
                chain = " -> ".join([*seen, current])
                raise ReferenceLookupError(f"Reference cycle: {chain}")
            seen.append(current)
            target = parse_local_reference(current, self.collections)
            if target is None or target.collection != DEFINITIONS_COLLECTION:
                raise ReferenceLookupError(f"Reference is not a local definition: {current}")
            if target.name not in self.table:
                raise ReferenceLookupError(f"Definition not found: {target.name}")
            node = self.table[target.name]
            if not follow or not isinstance(node, ReferenceNode):
                return node
            current = node.ref

    def references_to(self, name: str) -> tuple[ReferenceEdge, ...]:
        """Return every edge targeting the named definition."""
        matches = []
        for edge in self.edges:
            target = parse_local_reference(edge.ref, self.collections)
            if target and target.collection == DEFINITIONS_COLLECTION and target.name == name:
                matches.append(edge)
        return tuple(matches)


def resolve_references(
    table: DefinitionsTable,
    dialect: Dialect,
    *,
    collections: Mapping[str, Collection[str]] | None = None,
) -> ResolvedGraph:
    """Verify that every local reference in a definitions table resolves.

    Args:
      table: Definitions to walk; never mutated.
      dialect: Supplies the pointer prefixes for each collection.
      collections: Names present in sibling collections (parameters,
        responses, ...), keyed by collection name.

    Returns:
      The resolved graph when no local reference dangles.

    Raises:
      UnresolvedReferencesError: Carrying every dangling reference and the graph.
    """
    known_names: dict[str, frozenset[str]] = {
        name: frozenset(entries) for name, entries in (collections or {}).items()
    }
    known_names[DEFINITIONS_COLLECTION] = frozenset(table)

    edges: list[ReferenceEdge] = []
    external: list[str] = []
    dangling: list[DanglingReference] = []

    for owner, node in table.items():
        base = f"#/definitions/{escape_pointer_segment(owner)}"
        for location, ref in _iter_references(node, base):
            edges.append(ReferenceEdge(owner=owner, location=location, ref=ref))
            target = parse_local_reference(ref, dialect.reference_collections)
            if target is None:
                external.append(ref)
                continue
            if target.is_document_root:
                continue
            if target.collection is None or target.name not in known_names.get(
                target.collection, frozenset()
            ):
                dangling.append(
                    DanglingReference(
                        owner=owner,
                        location=location,
                        ref=ref,
                        collection=target.collection,
                        target_name=target.name,
                    )
                )

    for ref in dict.fromkeys(external):
        _LOGGER.debug("Accepting external reference without inspection: %s", ref)

    graph = ResolvedGraph(
        table=table,
        edges=tuple(edges),
        external_references=tuple(dict.fromkeys(external)),
        collections=dialect.reference_collections,
    )
    if dangling:
        raise UnresolvedReferencesError(tuple(dangling), graph)
    return graph


def _iter_references(node: SchemaNode, location: str) -> Iterator[tuple[str, str]]:
    if isinstance(node, ReferenceNode):
        yield location, node.ref
        return
    if isinstance(node.discriminator, Discriminator):
        for value, target in node.discriminator.mapping.items():
            mapping_location = f"{location}/discriminator/mapping/{escape_pointer_segment(value)}"
            yield mapping_location, _mapping_target_as_reference(target)
    for relative, child in iter_child_nodes(node):
        yield from _iter_references(child, f"{location}/{relative}")


def _mapping_target_as_reference(target: str) -> str:
    # Bare mapping values name a schema definition.
    if "#" in target or "/" in target or target.endswith((".json", ".yaml", ".yml")):
        return target
    return f"#/definitions/{escape_pointer_segment(target)}"
