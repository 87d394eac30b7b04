"""Build report workbook writer service."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from oas_schema_compiler.build_pipeline import BuildOutcome, PipelineState, VersionBuildOutcome

from .report_models import BuildStatus, ReportRow

COMPONENTS_SHEET_NAME = "Components"
SUMMARY_SHEET_NAME = "Summary"
COMPONENT_COLUMNS = ("version", "component", "status", "artifact_path", "error")
SUMMARY_COLUMNS = (
    "version",
    "state",
    "succeeded",
    "failed",
    "warnings",
    "dangling_references",
    "shape_defects",
)
_COLUMN_WIDTHS = {"component": 30, "artifact_path": 60, "error": 80, "state": 20}


def write_build_report(outcome: BuildOutcome, output_path: Path | str) -> Path:
    """Write the end-of-run build report workbook and return its path."""
    workbook = Workbook()
    components_sheet = workbook.active
    components_sheet.title = COMPONENTS_SHEET_NAME
    _write_header(components_sheet, COMPONENT_COLUMNS)
    for row_number, row in enumerate(build_report_rows(outcome), start=2):
        values = (
            row.version_id,
            row.component,
            row.status.value,
            row.artifact_path,
            row.error,
        )
        for column, value in enumerate(values, start=1):
            components_sheet.cell(row=row_number, column=column, value=value)

    _write_summary_sheet(workbook.create_sheet(SUMMARY_SHEET_NAME), outcome.versions)

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    return output


def build_report_rows(outcome: BuildOutcome) -> list[ReportRow]:
    """Flatten a build outcome into Components sheet rows."""
    rows: list[ReportRow] = []
    for version in outcome.versions:
        if version.state == PipelineState.ABORTED:
            rows.append(
                ReportRow(
                    version_id=version.version_id,
                    component="",
                    status=BuildStatus.ABORTED,
                    error=version.error or "",
                )
            )
            continue
        for result in version.results:
            rows.append(
                ReportRow(
                    version_id=result.version_id,
                    component=result.name,
                    status=BuildStatus.OK if result.succeeded else BuildStatus.FAILED,
                    artifact_path=str(result.output_path) if result.output_path else "",
                    error=result.error or "",
                )
            )
    return rows


def _write_header(sheet, columns: Sequence[str]) -> None:
    for column, name in enumerate(columns, start=1):
        cell = sheet.cell(row=1, column=column, value=name)
        cell.style = "Headline 1"
        sheet.column_dimensions[get_column_letter(column)].width = _COLUMN_WIDTHS.get(name, 14)
    sheet.freeze_panes = "A2"


def _write_summary_sheet(sheet, versions: Sequence[VersionBuildOutcome]) -> None:
    _write_header(sheet, SUMMARY_COLUMNS)
    totals = [0] * (len(SUMMARY_COLUMNS) - 2)
    row_number = 1
    for row_number, version in enumerate(versions, start=2):
        counts = (
            len(version.succeeded),
            version.failure_count,
            len(version.warnings),
            len(version.dangling_references),
            len(version.shape_defects),
        )
        sheet.cell(row=row_number, column=1, value=version.version_id)
        sheet.cell(row=row_number, column=2, value=version.state.value)
        for offset, value in enumerate(counts):
            sheet.cell(row=row_number, column=offset + 3, value=value)
            totals[offset] += value

    totals_row = row_number + 1
    sheet.cell(row=totals_row, column=1, value="total")
    for offset, value in enumerate(totals):
        sheet.cell(row=totals_row, column=offset + 3, value=value)
