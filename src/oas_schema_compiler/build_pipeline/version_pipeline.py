"""Version pipeline use-case service."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from oas_schema_compiler.artifact_emission import (
    ArtifactKind,
    ArtifactLayout,
    EmissionFailureError,
    emit_artifact,
    prepare_version_directory,
    write_artifact,
)
from oas_schema_compiler.dialect_registry import UnknownDialectError, lookup_dialect
from oas_schema_compiler.index_building import build_version_index, write_index_manifests
from oas_schema_compiler.reference_resolution import (
    DanglingReference,
    UnresolvedReferencesError,
    resolve_references,
)
from oas_schema_compiler.schema_model import SchemaNode
from oas_schema_compiler.surface_extraction import (
    Surface,
    SurfaceExtractionError,
    extract_surface,
)

from .pipeline_contracts import (
    BuildOutcome,
    BuildRequest,
    ComponentResult,
    PipelineState,
    VersionBuildOutcome,
    VersionBuildRequest,
)

_LOGGER = logging.getLogger("oas_schema_compiler.pipeline")
_LOGGER.addHandler(logging.NullHandler())


@dataclass
class _PipelineRun:
    """Mutable collector for one version run."""

    version_id: str
    transitions: list[PipelineState] = field(default_factory=lambda: [PipelineState.START])

    def enter(self, state: PipelineState) -> None:
        _LOGGER.info("%s: %s -> %s", self.version_id, self.transitions[-1].value, state.value)
        self.transitions.append(state)


@dataclass(frozen=True)
class _EmissionJob:
    """One artifact to emit, or the reason it cannot be."""

    name: str
    kind: ArtifactKind
    node: SchemaNode | None
    failure: str | None = None


def run_build(request: BuildRequest) -> BuildOutcome:
    """Build every version sequentially, then write the index manifests."""
    outcomes = tuple(
        run_version_pipeline(
            VersionBuildRequest(
                source=source,
                output_root=request.output_root,
                parallelism=request.parallelism,
            )
        )
        for source in request.sources
    )
    manifests = tuple(
        build_version_index(outcome.version_id, Path(request.output_root) / outcome.version_id)
        for outcome in outcomes
        if outcome.state != PipelineState.ABORTED
    )
    index_paths = write_index_manifests(request.output_root, manifests)
    return BuildOutcome(versions=outcomes, manifests=manifests, index_paths=index_paths)


def run_version_pipeline(request: VersionBuildRequest) -> VersionBuildOutcome:
    """Extract, validate and emit every artifact of one version.

    Never raises for schema problems: unknown dialects abort only this
    version, dangling references are reported as warnings and emission
    failures are collected per artifact.
    """
    source = request.source
    run = _PipelineRun(version_id=source.version_id)

    try:
        dialect = lookup_dialect(source.version_id)
    except UnknownDialectError as exc:
        return _aborted(run, str(exc))

    run.enter(PipelineState.EXTRACTING_SURFACE)
    try:
        surface = extract_surface(source, dialect)
        layout = prepare_version_directory(request.output_root, source.version_id)
    except (SurfaceExtractionError, OSError) as exc:
        return _aborted(run, str(exc))

    if not source.declarations:
        _LOGGER.info("%s: no declarations, nothing to emit", source.version_id)
        run.enter(PipelineState.DONE)
        return VersionBuildOutcome(
            version_id=source.version_id,
            state=PipelineState.DONE,
            transitions=tuple(run.transitions),
            missing_components=surface.missing_components,
        )

    run.enter(PipelineState.VALIDATING_REFERENCES)
    dangling, external = _validate_references(surface, source.collections)

    results: list[ComponentResult] = []
    run.enter(PipelineState.EMITTING_ROOT)
    if surface.has_root:
        root_job = _job_for(surface, surface.root_name, ArtifactKind.SPECIFICATION)
        results.append(_emit(root_job, surface, layout))

    run.enter(PipelineState.EMITTING_COMPONENTS)
    results.extend(_emit_components(surface, layout, request.parallelism))

    final_state = (
        PipelineState.PARTIALLY_FAILED
        if any(not result.succeeded for result in results)
        else PipelineState.DONE
    )
    run.enter(final_state)
    return VersionBuildOutcome(
        version_id=source.version_id,
        state=final_state,
        transitions=tuple(run.transitions),
        results=tuple(results),
        dangling_references=dangling,
        external_references=external,
        shape_defects=surface.defects,
        missing_components=surface.missing_components,
    )


def _aborted(run: _PipelineRun, error: str) -> VersionBuildOutcome:
    _LOGGER.error("%s: build aborted: %s", run.version_id, error)
    run.enter(PipelineState.ABORTED)
    return VersionBuildOutcome(
        version_id=run.version_id,
        state=PipelineState.ABORTED,
        transitions=tuple(run.transitions),
        error=error,
    )


def _validate_references(
    surface: Surface, collections: Mapping[str, Mapping[str, object]]
) -> tuple[tuple[DanglingReference, ...], tuple[str, ...]]:
    try:
        graph = resolve_references(surface.definitions, surface.dialect, collections=collections)
    except UnresolvedReferencesError as exc:
        for item in exc.dangling:
            _LOGGER.warning("%s: %s", surface.dialect.version_id, item.describe())
        return exc.dangling, exc.graph.external_references
    return (), graph.external_references


def _job_for(surface: Surface, name: str, kind: ArtifactKind) -> _EmissionJob:
    defect = surface.defect_for(name)
    if defect is not None:
        return _EmissionJob(
            name=name, kind=kind, node=None, failure=f"invalid schema shape: {defect.message}"
        )
    return _EmissionJob(name=name, kind=kind, node=surface.definitions[name])


def _emit_components(
    surface: Surface, layout: ArtifactLayout, parallelism: int
) -> list[ComponentResult]:
    jobs: list[_EmissionJob] = []
    claimed_files: dict[str, str] = {}
    for name in surface.component_names:
        file_key = name.lower()
        if file_key in claimed_files:
            jobs.append(
                _EmissionJob(
                    name=name,
                    kind=ArtifactKind.COMPONENT,
                    node=None,
                    failure=f"file name {file_key}.json already used by {claimed_files[file_key]}",
                )
            )
            continue
        claimed_files[file_key] = name
        jobs.append(_job_for(surface, name, ArtifactKind.COMPONENT))

    if parallelism > 1 and len(jobs) > 1:
        with ThreadPoolExecutor(max_workers=parallelism) as executor:
            results = list(executor.map(lambda job: _emit(job, surface, layout), jobs))
    else:
        results = [_emit(job, surface, layout) for job in jobs]
    return sorted(results, key=lambda result: result.name)


def _emit(job: _EmissionJob, surface: Surface, layout: ArtifactLayout) -> ComponentResult:
    version_id = layout.version_dir.name
    if job.node is None:
        _LOGGER.warning("%s/%s not emitted: %s", version_id, job.name, job.failure)
        return ComponentResult(
            version_id=version_id, name=job.name, kind=job.kind, error=job.failure
        )
    try:
        artifact = emit_artifact(job.name, job.node, surface.definitions, kind=job.kind)
        output_path = write_artifact(artifact, layout)
    except EmissionFailureError as exc:
        _LOGGER.warning("%s/%s not emitted: %s", version_id, job.name, exc)
        return ComponentResult(version_id=version_id, name=job.name, kind=job.kind, error=str(exc))
    _LOGGER.info("%s/%s written to %s", version_id, job.name, output_path)
    return ComponentResult(
        version_id=version_id, name=job.name, kind=job.kind, output_path=output_path
    )
