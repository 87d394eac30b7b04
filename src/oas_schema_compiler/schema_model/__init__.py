"""Schema node model exports."""

from .definitions_table import DefinitionsTable
from .node_builder import InvalidSchemaShapeError, build_node
from .node_serializer import serialize_node, serialize_table
from .schema_nodes import (
    ArrayNode,
    CompositionArms,
    CompositionNode,
    Discriminator,
    ObjectNode,
    PrimitiveNode,
    ReferenceNode,
    SchemaNode,
    escape_pointer_segment,
    iter_child_nodes,
)

__all__ = [
    "ArrayNode",
    "CompositionArms",
    "CompositionNode",
    "DefinitionsTable",
    "Discriminator",
    "InvalidSchemaShapeError",
    "ObjectNode",
    "PrimitiveNode",
    "ReferenceNode",
    "SchemaNode",
    "build_node",
    "escape_pointer_segment",
    "iter_child_nodes",
    "serialize_node",
    "serialize_table",
]
