"""Schema node serialization service."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .schema_nodes import (
    ArrayNode,
    CompositionNode,
    Discriminator,
    ObjectNode,
    PrimitiveNode,
    ReferenceNode,
    SchemaNode,
)


def serialize_node(node: SchemaNode) -> dict[str, Any]:
    """Return the JSON-compatible keyword mapping for a schema node."""
    if isinstance(node, ReferenceNode):
        document: dict[str, Any] = {"$ref": node.ref}
        if node.description is not None:
            document["description"] = node.description
        if node.summary is not None:
            document["summary"] = node.summary
        document.update(node.extensions)
        return document

    document = {}
    if isinstance(node, PrimitiveNode):
        document["type"] = node.variant.value
    elif isinstance(node, ArrayNode):
        document["type"] = "array"
    elif isinstance(node, ObjectNode):
        if node.declares_type:
            document["type"] = "object"
    elif not isinstance(node, CompositionNode):
        raise TypeError(f"Unsupported schema node: {type(node).__name__}")

    document.update(node.annotations)
    document.update(node.validations)

    if isinstance(node, ArrayNode):
        _serialize_array(node, document)
    elif isinstance(node, ObjectNode):
        _serialize_object(node, document)

    for keyword, value in node.arms.keyword_items():
        if isinstance(value, tuple):
            document[keyword] = [serialize_node(child) for child in value]
        else:
            document[keyword] = serialize_node(value)

    if isinstance(node.discriminator, Discriminator):
        document["discriminator"] = _serialize_discriminator(node.discriminator)
    elif node.discriminator is not None:
        document["discriminator"] = node.discriminator
    if node.xml is not None:
        document["xml"] = dict(node.xml)
    document.update(node.extensions)
    return document


def serialize_table(table: Mapping[str, SchemaNode]) -> dict[str, Any]:
    """Serialize every entry of a definitions table, preserving order."""
    return {name: serialize_node(node) for name, node in table.items()}


def _serialize_array(node: ArrayNode, document: dict[str, Any]) -> None:
    if node.items is not None:
        document["items"] = serialize_node(node.items)
    if node.prefix_items:
        document["prefixItems"] = [serialize_node(child) for child in node.prefix_items]
    if node.contains is not None:
        document["contains"] = serialize_node(node.contains)


def _serialize_object(node: ObjectNode, document: dict[str, Any]) -> None:
    if node.properties:
        document["properties"] = serialize_table(node.properties)
    if node.required:
        document["required"] = list(node.required)
    if isinstance(node.additional_properties, bool):
        document["additionalProperties"] = node.additional_properties
    elif node.additional_properties is not None:
        document["additionalProperties"] = serialize_node(node.additional_properties)
    if node.pattern_properties:
        document["patternProperties"] = serialize_table(node.pattern_properties)
    if node.property_names is not None:
        document["propertyNames"] = serialize_node(node.property_names)
    if node.dependent_schemas:
        document["dependentSchemas"] = serialize_table(node.dependent_schemas)


def _serialize_discriminator(discriminator: Discriminator) -> dict[str, Any]:
    document: dict[str, Any] = {"propertyName": discriminator.property_name}
    if discriminator.mapping:
        document["mapping"] = dict(discriminator.mapping)
    document.update(discriminator.extensions)
    return document
