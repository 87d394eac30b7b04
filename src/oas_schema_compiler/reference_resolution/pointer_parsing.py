"""Reference pointer parsing helpers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from urllib.parse import unquote


@dataclass(frozen=True)
class PointerTarget:
    """Decoded target of a local (`#`-prefixed) reference."""

    pointer: str
    collection: str | None
    name: str | None

    @property
    def is_document_root(self) -> bool:
        return self.pointer in ("#", "#/")


def is_local_reference(ref: str) -> bool:
    """Return True when the reference points inside the current document."""
    return ref.startswith("#")


def unescape_pointer_segment(segment: str) -> str:
    """Decode one percent-encoded JSON pointer segment."""
    return unquote(segment).replace("~1", "/").replace("~0", "~")


def parse_local_reference(ref: str, collections: Mapping[str, str]) -> PointerTarget | None:
    """Split a local reference into its collection and definition name.

    Returns None for references that leave the document (URLs, other files).
    A local pointer whose prefix is not one of `collections` yields a target
    with neither collection nor name.
    """
    if not is_local_reference(ref):
        return None
    if ref in ("#", "#/"):
        return PointerTarget(pointer=ref, collection=None, name=None)
    for prefix in sorted(collections, key=len, reverse=True):
        if not ref.startswith(prefix):
            continue
        remainder = ref[len(prefix) :]
        first_segment = remainder.split("/", 1)[0]
        if not first_segment:
            return PointerTarget(pointer=ref, collection=collections[prefix], name=None)
        return PointerTarget(
            pointer=ref,
            collection=collections[prefix],
            name=unescape_pointer_segment(first_segment),
        )
    return PointerTarget(pointer=ref, collection=None, name=None)
