"""Artifact emission tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from oas_schema_compiler.artifact_emission import (
    DRAFT_07_SCHEMA_URI,
    ArtifactKind,
    EmissionFailureError,
    emit_artifact,
    load_artifact_body,
    prepare_version_directory,
    write_artifact,
)
from oas_schema_compiler.dialect_registry import OPENAPI_31, SWAGGER_20, SchemaVariant
from oas_schema_compiler.schema_model import (
    DefinitionsTable,
    PrimitiveNode,
    build_node,
    serialize_node,
)


def _definitions(dialect, declarations: dict) -> DefinitionsTable:
    return DefinitionsTable({name: build_node(raw, dialect) for name, raw in declarations.items()})


def test_emit_artifact_wraps_node_with_schema_uri_and_definitions() -> None:
    definitions = _definitions(
        SWAGGER_20,
        {
            "Pet": {"type": "object", "properties": {"tag": {"$ref": "#/definitions/Tag"}}},
            "Tag": {"type": "object"},
        },
    )

    artifact = emit_artifact("Pet", definitions["Pet"], definitions)

    assert artifact.kind == ArtifactKind.COMPONENT
    assert artifact.file_name == "pet.json"
    assert list(artifact.document)[0] == "$schema"
    assert artifact.document["$schema"] == DRAFT_07_SCHEMA_URI
    assert artifact.document["type"] == "object"
    assert set(artifact.document["definitions"]) == {"Pet", "Tag"}
    assert artifact.text.endswith("}\n")
    assert json.loads(artifact.text) == artifact.document


def test_written_artifact_body_reproduces_the_node(tmp_path: Path) -> None:
    definitions = _definitions(
        OPENAPI_31,
        {"Name": {"type": "string", "title": "Näme", "maxLength": 5, "x-a": [1]}},
    )
    layout = prepare_version_directory(tmp_path, "3.1")

    path = write_artifact(emit_artifact("Name", definitions["Name"], definitions), layout)

    assert path == tmp_path / "3.1" / "components" / "name.json"
    assert "Näme" in path.read_text(encoding="utf-8")
    body = load_artifact_body(path)
    assert body == serialize_node(definitions["Name"])
    assert build_node(body, OPENAPI_31) == definitions["Name"]


def test_specification_artifact_is_written_to_main(tmp_path: Path) -> None:
    definitions = _definitions(OPENAPI_31, {"Specification": {"type": "object"}})
    layout = prepare_version_directory(tmp_path, "3.1")

    path = write_artifact(
        emit_artifact(
            "Specification",
            definitions["Specification"],
            definitions,
            kind=ArtifactKind.SPECIFICATION,
        ),
        layout,
    )

    assert path == tmp_path / "3.1" / "main" / "specification.json"


def test_non_finite_numbers_fail_emission() -> None:
    node = PrimitiveNode(variant=SchemaVariant.NUMBER, validations={"maximum": float("inf")})
    definitions = DefinitionsTable({"Big": node})

    with pytest.raises(EmissionFailureError, match="Big"):
        emit_artifact("Big", node, definitions)


def test_non_json_values_fail_emission() -> None:
    node = PrimitiveNode(variant=SchemaVariant.STRING, annotations={"default": {1, 2}})
    definitions = DefinitionsTable({"Odd": node})

    with pytest.raises(EmissionFailureError, match="Odd"):
        emit_artifact("Odd", node, definitions)


def test_prepare_version_directory_clears_previous_output(tmp_path: Path) -> None:
    stale = tmp_path / "2.0" / "components" / "stale.json"
    stale.parent.mkdir(parents=True)
    stale.write_text("{}", encoding="utf-8")

    layout = prepare_version_directory(tmp_path, "2.0")

    assert not stale.exists()
    assert layout.main_dir.is_dir()
    assert layout.components_dir.is_dir()


def test_write_failures_surface_as_emission_errors(tmp_path: Path) -> None:
    definitions = _definitions(OPENAPI_31, {"Name": {"type": "string"}})
    layout = prepare_version_directory(tmp_path, "3.1")
    (layout.components_dir / "name.json").mkdir()

    with pytest.raises(EmissionFailureError, match="Cannot write"):
        write_artifact(emit_artifact("Name", definitions["Name"], definitions), layout)
