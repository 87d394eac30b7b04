"""Reference graph resolution tests."""

from __future__ import annotations

import logging

import pytest
from oas_schema_compiler.dialect_registry import OPENAPI_30, OPENAPI_31, SWAGGER_20
from oas_schema_compiler.reference_resolution import (
    ReferenceLookupError,
    UnresolvedReferencesError,
    resolve_references,
)
from oas_schema_compiler.schema_model import DefinitionsTable, build_node


def _table(dialect, declarations: dict) -> DefinitionsTable:
    return DefinitionsTable(
        {name: build_node(raw, dialect) for name, raw in declarations.items()}
    )


_PETSTORE = {
    "Pet": {
        "type": "object",
        "properties": {
            "tag": {"$ref": "#/definitions/Tag"},
            "owner": {"$ref": "#/definitions/Owner"},
        },
    },
    "Tag": {"type": "object"},
    "Owner": {"type": "object", "additionalProperties": {"$ref": "#/definitions/Tag"}},
    "Pets": {"type": "array", "items": {"$ref": "#/definitions/Pet"}},
}


def test_closed_table_resolves_without_dangling_references() -> None:
    graph = resolve_references(_table(SWAGGER_20, _PETSTORE), SWAGGER_20)

    assert len(graph.edges) == 4
    assert {edge.owner for edge in graph.references_to("Tag")} == {"Pet", "Owner"}


def test_removing_one_target_reports_exactly_its_references() -> None:
    declarations = {name: raw for name, raw in _PETSTORE.items() if name != "Owner"}

    with pytest.raises(UnresolvedReferencesError) as excinfo:
        resolve_references(_table(SWAGGER_20, declarations), SWAGGER_20)

    (dangling,) = excinfo.value.dangling
    assert dangling.owner == "Pet"
    assert dangling.location == "#/definitions/Pet/properties/owner"
    assert dangling.collection == "definitions"
    assert dangling.target_name == "Owner"
    assert "missing definitions entry 'Owner'" in dangling.describe()


def test_all_dangling_references_are_reported_together() -> None:
    table = _table(
        OPENAPI_30,
        {
            "A": {
                "allOf": [{"$ref": "#/components/schemas/Missing"}],
                "not": {"$ref": "#/unknown/B"},
            }
        },
    )

    with pytest.raises(UnresolvedReferencesError) as excinfo:
        resolve_references(table, OPENAPI_30)

    assert [item.location for item in excinfo.value.dangling] == [
        "#/definitions/A/allOf/0",
        "#/definitions/A/not",
    ]
    assert excinfo.value.dangling[1].collection is None


def test_external_references_are_accepted_and_recorded(caplog) -> None:
    table = _table(
        OPENAPI_31,
        {
            "A": {"$ref": "Pet.json#/Foo"},
            "B": {"type": "array", "items": {"$ref": "Pet.json#/Foo"}},
        },
    )

    with caplog.at_level(logging.DEBUG, logger="oas_schema_compiler.references"):
        graph = resolve_references(table, OPENAPI_31)

    assert graph.external_references == ("Pet.json#/Foo",)
    assert "Pet.json#/Foo" in caplog.text


def test_sibling_collections_satisfy_references() -> None:
    table = _table(SWAGGER_20, {"A": {"$ref": "#/parameters/limit"}})

    with pytest.raises(UnresolvedReferencesError):
        resolve_references(table, SWAGGER_20)

    graph = resolve_references(table, SWAGGER_20, collections={"parameters": {"limit": {}}})
    assert len(graph.edges) == 1


def test_document_root_reference_always_resolves() -> None:
    graph = resolve_references(_table(OPENAPI_30, {"Tree": {"$ref": "#"}}), OPENAPI_30)

    assert graph.edges[0].ref == "#"


def test_escaped_definition_names_resolve() -> None:
    table = _table(
        OPENAPI_30,
        {
            "a/b": {"type": "string"},
            "Pet Store": {"type": "string"},
            "C": {
                "anyOf": [
                    {"$ref": "#/components/schemas/a~1b"},
                    {"$ref": "#/definitions/Pet%20Store"},
                ]
            },
        },
    )

    graph = resolve_references(table, OPENAPI_30)

    assert len(graph.references_to("a/b")) == 1
    assert len(graph.references_to("Pet Store")) == 1


def test_discriminator_mapping_targets_are_checked() -> None:
    table = _table(
        OPENAPI_30,
        {
            "Cat": {"type": "object"},
            "Animal": {
                "oneOf": [{"$ref": "#/components/schemas/Cat"}],
                "discriminator": {
                    "propertyName": "kind",
                    "mapping": {"cat": "Cat", "dog": "#/components/schemas/Dog"},
                },
            },
        },
    )

    with pytest.raises(UnresolvedReferencesError) as excinfo:
        resolve_references(table, OPENAPI_30)

    (dangling,) = excinfo.value.dangling
    assert dangling.location == "#/definitions/Animal/discriminator/mapping/dog"
    assert dangling.target_name == "Dog"


def test_lookup_and_follow() -> None:
    graph = resolve_references(
        _table(
            OPENAPI_30,
            {
                "Alias": {"$ref": "#/components/schemas/Pet"},
                "Pet": {"type": "object"},
            },
        ),
        OPENAPI_30,
    )

    assert graph.lookup("#/components/schemas/Alias") == graph.table["Alias"]
    assert graph.lookup("#/components/schemas/Alias", follow=True) == graph.table["Pet"]
    with pytest.raises(ReferenceLookupError):
        graph.lookup("#/components/schemas/Missing")
    with pytest.raises(ReferenceLookupError):
        graph.lookup("Pet.json#/Foo")


def test_lookup_follow_detects_cycles() -> None:
    graph = resolve_references(
        _table(
            OPENAPI_30,
            {"A": {"$ref": "#/definitions/B"}, "B": {"$ref": "#/definitions/A"}},
        ),
        OPENAPI_30,
    )

    with pytest.raises(ReferenceLookupError, match="Reference cycle"):
        graph.lookup("#/definitions/A", follow=True)


def test_resolution_does_not_mutate_table() -> None:
    table = _table(SWAGGER_20, _PETSTORE)
    before = dict(table)

    resolve_references(table, SWAGGER_20)

    assert dict(table) == before
