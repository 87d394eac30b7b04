"""Reference resolution exports."""

from .pointer_parsing import (
    PointerTarget,
    is_local_reference,
    parse_local_reference,
    unescape_pointer_segment,
)
from .reference_graph import (
    DanglingReference,
    ReferenceEdge,
    ReferenceLookupError,
    ResolvedGraph,
    UnresolvedReferencesError,
    resolve_references,
)

__all__ = [
    "DanglingReference",
    "PointerTarget",
    "ReferenceEdge",
    "ReferenceLookupError",
    "ResolvedGraph",
    "UnresolvedReferencesError",
    "is_local_reference",
    "parse_local_reference",
    "resolve_references",
    "unescape_pointer_segment",
]
