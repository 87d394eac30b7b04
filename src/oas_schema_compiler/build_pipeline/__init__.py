"""Build pipeline exports."""

from .configured_build import (
    BuildExecutionError,
    build_request_from_configuration,
    execute_configured_build,
)
from .pipeline_contracts import (
    BuildOutcome,
    BuildRequest,
    ComponentResult,
    PipelineState,
    VersionBuildOutcome,
    VersionBuildRequest,
)
from .version_pipeline import run_build, run_version_pipeline

__all__ = [
    "BuildExecutionError",
    "BuildOutcome",
    "BuildRequest",
    "ComponentResult",
    "PipelineState",
    "VersionBuildOutcome",
    "VersionBuildRequest",
    "build_request_from_configuration",
    "execute_configured_build",
    "run_build",
    "run_version_pipeline",
]
