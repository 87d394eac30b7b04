"""Definitions table entity."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from .schema_nodes import SchemaNode


class DefinitionsTable(Mapping[str, SchemaNode]):
    """Ordered, read-only mapping of definition names to schema nodes."""

    def __init__(self, entries: Mapping[str, SchemaNode] | Iterable[tuple[str, SchemaNode]] = ()):
        pairs = entries.items() if isinstance(entries, Mapping) else entries
        self._entries: dict[str, SchemaNode] = {}
        for name, node in pairs:
            if name in self._entries:
                raise ValueError(f"Duplicate definition name: {name}")
            self._entries[name] = node

    def __getitem__(self, name: str) -> SchemaNode:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"DefinitionsTable({list(self._entries)!r})"

    def names(self) -> tuple[str, ...]:
        """Return definition names in insertion order."""
        return tuple(self._entries)
