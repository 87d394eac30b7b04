"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import BuildConfiguration, VersionSettings

DEFAULT_OUTPUT_DIR = "schemas"
DEFAULT_PARALLELISM = 1


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str) -> BuildConfiguration:
    """Load and validate the build configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    parsed = _parse_document(path.read_text(encoding="utf-8"), f"configuration file {path}")
    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    base_path = path.parent.resolve()
    output_dir = _resolve_path(
        base_path,
        _require_non_empty_string(parsed.get("output_dir", DEFAULT_OUTPUT_DIR), "output_dir"),
    )
    parallelism = _require_positive_int(
        parsed.get("parallelism", DEFAULT_PARALLELISM), "parallelism"
    )
    versions = _parse_versions_section(parsed.get("versions"), base_path)

    return BuildConfiguration(
        path=path,
        output_dir=output_dir,
        parallelism=parallelism,
        versions=versions,
    )


def _parse_document(text: str, label: str) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse {label}: {exc}") from exc


def _parse_versions_section(value: Any, base_path: Path) -> tuple[VersionSettings, ...]:
    section = _require_mapping(value, "versions")
    if not section:
        raise ConfigurationError("versions must configure at least one version.")
    versions = []
    seen: set[str] = set()
    for raw_version, settings in section.items():
        version_id = _require_non_empty_string(
            str(raw_version) if isinstance(raw_version, (int, float)) else raw_version,
            "versions key",
        )
        if version_id in seen:
            raise ConfigurationError(f"Duplicate version '{version_id}' in versions.")
        seen.add(version_id)
        versions.append(_parse_version_settings(version_id, settings, base_path))
    return tuple(versions)


def _parse_version_settings(version_id: str, value: Any, base_path: Path) -> VersionSettings:
    label = f"versions.{version_id}"
    section = _require_mapping(value, label)
    document, source_path = _load_source_definition(section.get("source"), base_path, label)
    if not isinstance(document, Mapping):
        raise ConfigurationError(f"{label}.source must contain a mapping.")

    declarations = document.get("definitions")
    if declarations is None:
        declarations = {}
    if not isinstance(declarations, Mapping):
        raise ConfigurationError(f"{label}.source definitions must be a mapping.")

    collections = document.get("collections") or {}
    if not isinstance(collections, Mapping) or not all(
        isinstance(entries, Mapping) for entries in collections.values()
    ):
        raise ConfigurationError(f"{label}.source collections must map names to mappings.")

    components = section.get("components")
    return VersionSettings(
        version_id=version_id,
        declarations=dict(declarations),
        collections={str(name): dict(entries) for name, entries in collections.items()},
        components=(
            None
            if components is None
            else _normalize_string_sequence(components, f"{label}.components")
        ),
        source_path=source_path,
    )


def _load_source_definition(
    definition: Any, base_path: Path, label: str
) -> tuple[Any, Path | None]:
    mapping = _require_mapping(definition, f"{label}.source")
    inline = mapping.get("inline")
    path_value = mapping.get("path")
    if inline and path_value:
        raise ConfigurationError(f"{label}.source must not set both inline and path.")
    if inline:
        if isinstance(inline, str):
            return _parse_document(inline, f"{label}.source.inline"), None
        if isinstance(inline, Mapping):
            return inline, None
        raise ConfigurationError(f"{label}.source.inline must be a string or mapping.")
    if path_value:
        if not isinstance(path_value, str):
            raise ConfigurationError(f"{label}.source.path must be a string.")
        source_path = _resolve_path(base_path, path_value)
        if not source_path.exists():
            raise ConfigurationError(f"Source file not found: {source_path}")
        text = source_path.read_text(encoding="utf-8")
        return _parse_document(text, f"source file {source_path}"), source_path
    raise ConfigurationError(f"{label}.source requires either inline or path.")


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if isinstance(value, str):
        stripped = value.strip()
        return (stripped,) if stripped else ()
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            stripped = item.strip()
            if stripped and stripped not in normalized:
                normalized.append(stripped)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' is required.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
