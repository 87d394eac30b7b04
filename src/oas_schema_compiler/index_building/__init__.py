"""Index building exports."""

from .index_builder import build_aggregate_index, build_version_index, write_index_manifests
from .index_models import INDEX_FILENAME, IndexManifest

__all__ = [
    "INDEX_FILENAME",
    "IndexManifest",
    "build_aggregate_index",
    "build_version_index",
    "write_index_manifests",
]
