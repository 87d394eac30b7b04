"""Reference pointer parsing tests."""

from __future__ import annotations

from oas_schema_compiler.dialect_registry import OPENAPI_30, SWAGGER_20
from oas_schema_compiler.reference_resolution import (
    PointerTarget,
    is_local_reference,
    parse_local_reference,
    unescape_pointer_segment,
)


def test_unescape_pointer_segment_decodes_percent_and_tilde_escapes() -> None:
    assert unescape_pointer_segment("a~1b") == "a/b"
    assert unescape_pointer_segment("a~0b") == "a~b"
    assert unescape_pointer_segment("a~01") == "a~1"
    assert unescape_pointer_segment("Pet%20Store") == "Pet Store"


def test_external_references_are_not_local() -> None:
    assert not is_local_reference("Pet.json#/Foo")
    collections = SWAGGER_20.reference_collections
    assert parse_local_reference("https://example.com/pet.json", collections) is None


def test_local_reference_yields_collection_and_name() -> None:
    target = parse_local_reference(
        "#/components/schemas/Pet/properties/id", OPENAPI_30.reference_collections
    )

    assert target == PointerTarget(
        pointer="#/components/schemas/Pet/properties/id", collection="definitions", name="Pet"
    )


def test_document_root_reference() -> None:
    target = parse_local_reference("#", OPENAPI_30.reference_collections)

    assert target is not None
    assert target.is_document_root


def test_unknown_prefix_has_no_collection() -> None:
    target = parse_local_reference("#/paths/~1pets", SWAGGER_20.reference_collections)

    assert target == PointerTarget(pointer="#/paths/~1pets", collection=None, name=None)
