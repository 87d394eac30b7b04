"""Index manifest builder service."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

from oas_schema_compiler.artifact_emission import (
    COMPONENTS_DIRECTORY,
    MAIN_DIRECTORY,
    SPECIFICATION_FILENAME,
)

from .index_models import INDEX_FILENAME, IndexManifest


def build_version_index(version_id: str, version_dir: Path | str) -> IndexManifest:
    """Build the manifest of one version from the artifacts present on disk."""
    root = Path(version_dir)
    specification_path = root / MAIN_DIRECTORY / SPECIFICATION_FILENAME
    components_dir = root / COMPONENTS_DIRECTORY

    components: dict[str, str] = {}
    if components_dir.is_dir():
        for artifact_path in sorted(components_dir.glob("*.json")):
            components[artifact_path.stem] = artifact_path.relative_to(root).as_posix()

    return IndexManifest(
        version_id=version_id,
        specification=(
            specification_path.relative_to(root).as_posix()
            if specification_path.is_file()
            else None
        ),
        components=components,
    )


def build_aggregate_index(manifests: Sequence[IndexManifest]) -> dict[str, dict[str, str]]:
    """Map every version to its schemas, with paths relative to the output root."""
    aggregate: dict[str, dict[str, str]] = {}
    for manifest in manifests:
        aggregate[manifest.version_id] = {
            name: f"{manifest.version_id}/{relative}"
            for name, relative in manifest.schemas.items()
        }
    return aggregate


def write_index_manifests(
    output_root: Path | str, manifests: Sequence[IndexManifest]
) -> tuple[Path, ...]:
    """Write one index per version plus the aggregate index and return their paths."""
    root = Path(output_root)
    written: list[Path] = []
    for manifest in manifests:
        version_index = root / manifest.version_id / INDEX_FILENAME
        version_index.parent.mkdir(parents=True, exist_ok=True)
        _write_json(version_index, manifest.to_document())
        written.append(version_index)

    aggregate_index = root / INDEX_FILENAME
    root.mkdir(parents=True, exist_ok=True)
    _write_json(aggregate_index, build_aggregate_index(manifests))
    written.append(aggregate_index)
    return tuple(written)


def _write_json(path: Path, document: object) -> None:
    path.write_text(json.dumps(document, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
