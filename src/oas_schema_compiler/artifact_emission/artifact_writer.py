"""Artifact emission and writing service."""

from __future__ import annotations

import json
import shutil
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from oas_schema_compiler.schema_model import SchemaNode, serialize_node, serialize_table

from .artifact_models import DRAFT_07_SCHEMA_URI, Artifact, ArtifactKind, ArtifactLayout

_RESERVED_KEYS = frozenset({"$schema", "definitions"})


class EmissionFailureError(Exception):
    """Raised when one artifact cannot be produced or written."""


def emit_artifact(
    name: str,
    node: SchemaNode,
    definitions: Mapping[str, SchemaNode],
    *,
    kind: ArtifactKind = ArtifactKind.COMPONENT,
) -> Artifact:
    """Wrap a schema node and the whole definitions table into a draft-07 document.

    Raises:
      EmissionFailureError: If the node cannot be serialized to JSON.
    """
    try:
        body = serialize_node(node)
        table = serialize_table(definitions)
    except (TypeError, ValueError) as exc:
        raise EmissionFailureError(f"Cannot serialize {name}: {exc}") from exc

    clashing = sorted(_RESERVED_KEYS & set(body))
    if clashing:
        raise EmissionFailureError(f"Schema {name} uses reserved keys: {', '.join(clashing)}")

    document: dict[str, Any] = {"$schema": DRAFT_07_SCHEMA_URI, **body, "definitions": table}
    try:
        text = json.dumps(document, indent=2, ensure_ascii=False, allow_nan=False) + "\n"
    except (TypeError, ValueError) as exc:
        raise EmissionFailureError(f"Cannot encode {name} as JSON: {exc}") from exc
    return Artifact(name=name, kind=kind, document=document, text=text)


def write_artifact(artifact: Artifact, layout: ArtifactLayout) -> Path:
    """Write an artifact below the version layout and return its path.

    Raises:
      EmissionFailureError: If the file cannot be written.
    """
    destination = layout.path_for(artifact)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(artifact.text, encoding="utf-8")
    except OSError as exc:
        raise EmissionFailureError(f"Cannot write {destination}: {exc}") from exc
    return destination


def prepare_version_directory(output_root: Path | str, version_id: str) -> ArtifactLayout:
    """Clear any previous output of a version and recreate its directories."""
    layout = ArtifactLayout(version_dir=Path(output_root) / version_id)
    if layout.version_dir.exists():
        shutil.rmtree(layout.version_dir)
    layout.main_dir.mkdir(parents=True, exist_ok=True)
    layout.components_dir.mkdir(parents=True, exist_ok=True)
    return layout


def load_artifact_body(path: Path | str) -> dict[str, Any]:
    """Read an artifact and return its top-level schema keywords."""
    document = json.loads(Path(path).read_text(encoding="utf-8"))
    return {key: value for key, value in document.items() if key not in _RESERVED_KEYS}
