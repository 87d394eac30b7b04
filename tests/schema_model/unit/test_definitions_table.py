"""Definitions table tests."""

from __future__ import annotations

import pytest
from oas_schema_compiler.dialect_registry import SchemaVariant
from oas_schema_compiler.schema_model import DefinitionsTable, PrimitiveNode


def test_table_preserves_insertion_order() -> None:
    node = PrimitiveNode(variant=SchemaVariant.STRING)

    table = DefinitionsTable([("b", node), ("a", node)])

    assert table.names() == ("b", "a")
    assert list(table) == ["b", "a"]
    assert len(table) == 2
    assert table["a"] is node


def test_table_rejects_duplicate_names() -> None:
    node = PrimitiveNode(variant=SchemaVariant.STRING)

    with pytest.raises(ValueError, match="Duplicate definition name: a"):
        DefinitionsTable([("a", node), ("a", node)])


def test_table_is_read_only() -> None:
    table = DefinitionsTable({"a": PrimitiveNode(variant=SchemaVariant.STRING)})

    with pytest.raises(TypeError):
        table["b"] = PrimitiveNode(variant=SchemaVariant.STRING)  # type: ignore[index]
