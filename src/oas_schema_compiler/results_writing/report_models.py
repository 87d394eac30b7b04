"""Results writing entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class BuildStatus(str, Enum):
    """Rendered status in the report status column."""

    OK = "OK"
    FAILED = "FAILED"
    ABORTED = "ABORTED"


@dataclass(frozen=True)
class ReportRow:
    """One row of the Components sheet."""

    version_id: str
    component: str
    status: BuildStatus
    artifact_path: str = ""
    error: str = ""
