"""Configuration-driven build use case."""

from __future__ import annotations

from pathlib import Path

from oas_schema_compiler.configuration import (
    BuildConfiguration,
    ConfigurationError,
    load_configuration,
)
from oas_schema_compiler.surface_extraction import DialectSource

from .pipeline_contracts import BuildOutcome, BuildRequest
from .version_pipeline import run_build


class BuildExecutionError(Exception):
    """Raised when a configured build cannot be started."""


def build_request_from_configuration(configuration: BuildConfiguration) -> BuildRequest:
    """Translate loaded configuration into pipeline input contracts."""
    return BuildRequest(
        sources=tuple(
            DialectSource(
                version_id=settings.version_id,
                declarations=settings.declarations,
                allow_list=settings.components,
                collections=settings.collections,
            )
            for settings in configuration.versions
        ),
        output_root=configuration.output_dir,
        parallelism=configuration.parallelism,
    )


def execute_configured_build(config_path: Path | str) -> BuildOutcome:
    """Load the build configuration and build every configured version."""
    try:
        configuration = load_configuration(config_path)
    except (ConfigurationError, OSError) as exc:
        raise BuildExecutionError(str(exc)) from exc
    try:
        return run_build(build_request_from_configuration(configuration))
    except OSError as exc:
        raise BuildExecutionError(f"Failed to write index manifests: {exc}") from exc
