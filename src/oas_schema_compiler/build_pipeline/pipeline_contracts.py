"""Build pipeline entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from oas_schema_compiler.artifact_emission import ArtifactKind
from oas_schema_compiler.index_building import IndexManifest
from oas_schema_compiler.reference_resolution import DanglingReference
from oas_schema_compiler.surface_extraction import DialectSource, ShapeDefect


class PipelineState(str, Enum):
    """States of one version pipeline run."""

    START = "start"
    EXTRACTING_SURFACE = "extracting-surface"
    VALIDATING_REFERENCES = "validating-references"
    EMITTING_ROOT = "emitting-root"
    EMITTING_COMPONENTS = "emitting-components"
    DONE = "done"
    PARTIALLY_FAILED = "partially-failed"
    ABORTED = "aborted"


@dataclass(frozen=True)
class VersionBuildRequest:
    """Input contract for building one version."""

    source: DialectSource
    output_root: Path
    parallelism: int = 1


@dataclass(frozen=True)
class ComponentResult:
    """Outcome of emitting one artifact."""

    version_id: str
    name: str
    kind: ArtifactKind
    output_path: Path | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class VersionBuildOutcome:  # pylint: disable=too-many-instance-attributes
    """Output contract for one version pipeline run."""

    version_id: str
    state: PipelineState
    transitions: tuple[PipelineState, ...]
    results: tuple[ComponentResult, ...] = ()
    dangling_references: tuple[DanglingReference, ...] = ()
    external_references: tuple[str, ...] = ()
    shape_defects: tuple[ShapeDefect, ...] = ()
    missing_components: tuple[str, ...] = ()
    error: str | None = None

    @property
    def succeeded(self) -> tuple[ComponentResult, ...]:
        return tuple(result for result in self.results if result.succeeded)

    @property
    def failed(self) -> tuple[ComponentResult, ...]:
        return tuple(result for result in self.results if not result.succeeded)

    @property
    def warnings(self) -> tuple[str, ...]:
        """Return human readable warnings that did not fail any artifact."""
        messages = [
            f"unresolved reference {item.describe()}" for item in self.dangling_references
        ]
        messages.extend(
            f"allow-listed component {name} is not declared" for name in self.missing_components
        )
        return tuple(messages)

    @property
    def failure_count(self) -> int:
        """Return failed artifacts, counting an aborted version as one failure."""
        return len(self.failed) + (1 if self.state == PipelineState.ABORTED else 0)


@dataclass(frozen=True)
class BuildRequest:
    """Input contract for building every configured version."""

    sources: tuple[DialectSource, ...]
    output_root: Path
    parallelism: int = 1


@dataclass(frozen=True)
class BuildOutcome:
    """Output contract for a complete multi-version build."""

    versions: tuple[VersionBuildOutcome, ...]
    manifests: tuple[IndexManifest, ...]
    index_paths: tuple[Path, ...]

    @property
    def succeeded_count(self) -> int:
        return sum(len(version.succeeded) for version in self.versions)

    @property
    def failed_count(self) -> int:
        return sum(version.failure_count for version in self.versions)
