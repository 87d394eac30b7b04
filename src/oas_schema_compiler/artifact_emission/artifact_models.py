"""Artifact emission entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

DRAFT_07_SCHEMA_URI = "http://json-schema.org/draft-07/schema#"
MAIN_DIRECTORY = "main"
COMPONENTS_DIRECTORY = "components"
SPECIFICATION_FILENAME = "specification.json"


class ArtifactKind(str, Enum):
    """Role of an emitted artifact within a version's output."""

    SPECIFICATION = "specification"
    COMPONENT = "component"


@dataclass(frozen=True)
class Artifact:
    """Self-contained JSON Schema document for one schema node."""

    name: str
    kind: ArtifactKind
    document: Mapping[str, Any]
    text: str

    @property
    def file_name(self) -> str:
        """Return the case-normalized file name of the artifact."""
        if self.kind == ArtifactKind.SPECIFICATION:
            return SPECIFICATION_FILENAME
        return f"{self.name.lower()}.json"


@dataclass(frozen=True)
class ArtifactLayout:
    """Output directories of one version."""

    version_dir: Path

    @property
    def main_dir(self) -> Path:
        return self.version_dir / MAIN_DIRECTORY

    @property
    def components_dir(self) -> Path:
        return self.version_dir / COMPONENTS_DIRECTORY

    def path_for(self, artifact: Artifact) -> Path:
        """Return where an artifact is written."""
        if artifact.kind == ArtifactKind.SPECIFICATION:
            return self.main_dir / artifact.file_name
        return self.components_dir / artifact.file_name
