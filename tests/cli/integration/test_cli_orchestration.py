"""CLI orchestration integration tests."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner
from openpyxl import load_workbook
from oas_schema_compiler.cli import cli, main


def _write_config(tmp_path: Path, definitions: dict) -> Path:
    source_path = tmp_path / "swagger.json"
    source_path.write_text(json.dumps({"definitions": definitions}), encoding="utf-8")
    config = {
        "output_dir": "out",
        "versions": {
            "2.0": {"source": {"path": source_path.name}, "components": sorted(definitions)},
        },
    }
    path = tmp_path / "build.json"
    path.write_text(json.dumps(config), encoding="utf-8")
    return path


def test_generate_config_command_writes_scaffold(tmp_path: Path) -> None:
    runner = CliRunner()
    output_path = tmp_path / "oas-build.yaml"

    result = runner.invoke(cli, ["generate-config", "--output", str(output_path)])

    assert result.exit_code == 0
    assert output_path.exists()
    assert str(output_path.resolve()) in result.output


def test_build_command_writes_artifacts_and_report(tmp_path: Path) -> None:
    runner = CliRunner()
    config_path = _write_config(
        tmp_path,
        {
            "Pet": {"type": "object", "properties": {"tag": {"$ref": "#/definitions/Tag"}}},
            "Tag": {"type": "object"},
        },
    )
    report_path = tmp_path / "report.xlsx"

    result = runner.invoke(
        cli, ["build", "--config", str(config_path), "--report", str(report_path)]
    )

    assert result.exit_code == 0, result.output
    assert "2.0: done (2 written, 0 failed, 0 warnings)" in result.output
    assert "total: 2 written, 0 failed" in result.output
    assert (tmp_path / "out" / "2.0" / "components" / "pet.json").is_file()
    assert (tmp_path / "out" / "index.json").is_file()
    workbook = load_workbook(report_path)
    assert workbook["Components"].max_row == 3


def test_build_command_fails_when_a_component_fails(tmp_path: Path, capsys) -> None:
    config_path = _write_config(
        tmp_path,
        {"Good": {"type": "object"}, "Bad": {"type": "string", "allOf": [{"type": "string"}]}},
    )

    exit_code = main(["build", "--config", str(config_path)])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "2.0: partially-failed (1 written, 1 failed, 0 warnings)" in captured.out
    assert "Bad: invalid schema shape:" in captured.out
    assert "1 artifact(s) failed to build." in captured.err
    assert (tmp_path / "out" / "2.0" / "components" / "good.json").is_file()
