"""Build tests where one malformed declaration must not affect its siblings or later versions."""

from __future__ import annotations

import json
from pathlib import Path

import yaml
from oas_schema_compiler.build_pipeline import BuildOutcome, BuildRequest, PipelineState, run_build
from oas_schema_compiler.surface_extraction import DialectSource

_HEALTHY_31 = DialectSource(
    version_id="3.1",
    declarations={"Schema": {"type": "object"}, "Tag": {"type": "string"}},
    allow_list=("Schema", "Tag"),
)


def _build(tmp_path: Path, version_id: str, document: str, allow_list: tuple[str, ...]):
    source = DialectSource(
        version_id=version_id, declarations=yaml.safe_load(document), allow_list=allow_list
    )
    return run_build(BuildRequest(sources=(source, _HEALTHY_31), output_root=tmp_path))


def _assert_later_version_completed(outcome: BuildOutcome, tmp_path: Path) -> None:
    later = outcome.versions[1]
    assert later.state == PipelineState.DONE
    assert [result.name for result in later.succeeded] == ["Schema", "Tag"]
    root_index = json.loads((tmp_path / "index.json").read_text(encoding="utf-8"))
    assert root_index["3.1"] == {
        "schema": "3.1/components/schema.json",
        "tag": "3.1/components/tag.json",
    }


def _component_names(tmp_path: Path, version_id: str) -> list[str]:
    return sorted(path.name for path in (tmp_path / version_id / "components").iterdir())


def test_swagger_discriminator_with_empty_required_fails_only_its_component(
    tmp_path: Path,
) -> None:
    document = """
Pet:
  type: object
  discriminator: kind
  required:
Tag:
  type: object
"""

    outcome = _build(tmp_path, "2.0", document, ("Pet", "Tag"))

    swagger = outcome.versions[0]
    assert swagger.state == PipelineState.PARTIALLY_FAILED
    (failure,) = swagger.failed
    assert failure.name == "Pet"
    assert failure.error is not None
    assert "Keyword 'required' must be a list of unique strings" in failure.error
    assert [result.name for result in swagger.succeeded] == ["Tag"]
    assert _component_names(tmp_path, "2.0") == ["tag.json"]
    _assert_later_version_completed(outcome, tmp_path)


def test_date_example_fails_only_its_component(tmp_path: Path) -> None:
    document = """
Schema:
  type: object
Response:
  type: object
  properties:
    status:
      type: integer
Birthday:
  type: string
  format: date
  example: 2017-07-21
"""

    outcome = _build(tmp_path, "3.0", document, ("Schema", "Response", "Birthday"))

    openapi = outcome.versions[0]
    assert openapi.state == PipelineState.PARTIALLY_FAILED
    assert [result.name for result in openapi.succeeded] == ["Response", "Schema"]
    (failure,) = openapi.failed
    assert failure.name == "Birthday"
    assert failure.error is not None
    assert "Keyword 'example' must be a JSON value" in failure.error
    (defect,) = openapi.shape_defects
    assert defect.keyword == "example"
    assert defect.path == "#/definitions/Birthday"
    schema = json.loads(
        (tmp_path / "3.0" / "components" / "schema.json").read_text(encoding="utf-8")
    )
    assert list(schema["definitions"]) == ["Schema", "Response"]
    _assert_later_version_completed(outcome, tmp_path)


def test_non_finite_bound_fails_only_its_component(tmp_path: Path) -> None:
    document = """
Schema:
  type: object
Ratio:
  type: number
  maximum: .inf
"""

    outcome = _build(tmp_path, "3.0", document, ("Schema", "Ratio"))

    openapi = outcome.versions[0]
    assert [result.name for result in openapi.failed] == ["Ratio"]
    assert [result.name for result in openapi.succeeded] == ["Schema"]
    _assert_later_version_completed(outcome, tmp_path)


def test_self_referencing_alias_fails_only_its_component(tmp_path: Path) -> None:
    document = """
Node: &node
  type: object
  properties:
    child: *node
Leaf:
  type: string
"""

    outcome = _build(tmp_path, "3.0", document, ("Node", "Leaf"))

    openapi = outcome.versions[0]
    assert openapi.state == PipelineState.PARTIALLY_FAILED
    (failure,) = openapi.failed
    assert failure.name == "Node"
    assert failure.error is not None
    assert "Schema value is cyclic" in failure.error
    (defect,) = openapi.shape_defects
    assert defect.path == "#/definitions/Node/properties/child"
    assert _component_names(tmp_path, "3.0") == ["leaf.json"]
    _assert_later_version_completed(outcome, tmp_path)
