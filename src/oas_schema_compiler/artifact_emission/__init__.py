"""Artifact emission exports."""

from .artifact_models import (
    COMPONENTS_DIRECTORY,
    DRAFT_07_SCHEMA_URI,
    MAIN_DIRECTORY,
    SPECIFICATION_FILENAME,
    Artifact,
    ArtifactKind,
    ArtifactLayout,
)
from .artifact_writer import (
    EmissionFailureError,
    emit_artifact,
    load_artifact_body,
    prepare_version_directory,
    write_artifact,
)

__all__ = [
    "Artifact",
    "ArtifactKind",
    "ArtifactLayout",
    "COMPONENTS_DIRECTORY",
    "DRAFT_07_SCHEMA_URI",
    "EmissionFailureError",
    "MAIN_DIRECTORY",
    "SPECIFICATION_FILENAME",
    "emit_artifact",
    "load_artifact_body",
    "prepare_version_directory",
    "write_artifact",
]
