"""Results writing domain exports."""

from .build_report_writer import (
    COMPONENTS_SHEET_NAME,
    SUMMARY_SHEET_NAME,
    build_report_rows,
    write_build_report,
)
from .report_models import BuildStatus, ReportRow

__all__ = [
    "BuildStatus",
    "COMPONENTS_SHEET_NAME",
    "ReportRow",
    "SUMMARY_SHEET_NAME",
    "build_report_rows",
    "write_build_report",
]
