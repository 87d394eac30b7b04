"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class VersionSettings:
    """Normalized source settings for one specification version."""

    version_id: str
    declarations: Mapping[str, Any]
    collections: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)
    components: tuple[str, ...] | None = None
    source_path: Path | None = None


@dataclass(frozen=True)
class BuildConfiguration:
    """Top-level build configuration aggregate."""

    path: Path
    output_dir: Path
    parallelism: int
    versions: tuple[VersionSettings, ...]
