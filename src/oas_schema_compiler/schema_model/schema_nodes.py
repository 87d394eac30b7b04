"""Schema node entities.

A schema node is one of a small set of frozen variant classes. Consumers
dispatch on the concrete class; nested schemas are held directly, while
cross-definition links are `ReferenceNode` pointers resolved by name against
a definitions table.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from oas_schema_compiler.dialect_registry import SchemaVariant


def escape_pointer_segment(segment: str) -> str:
    """Escape one JSON pointer segment (`~` -> `~0`, `/` -> `~1`)."""
    return segment.replace("~", "~0").replace("/", "~1")


@dataclass(frozen=True)
class Discriminator:
    """Structured polymorphism metadata (OpenAPI 3.x)."""

    property_name: str
    mapping: Mapping[str, str] = field(default_factory=dict)
    extensions: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class CompositionArms:  # pylint: disable=too-many-instance-attributes
    """Composition and conditional applicators attached to a node."""

    all_of: tuple[SchemaNode, ...] = ()
    any_of: tuple[SchemaNode, ...] = ()
    one_of: tuple[SchemaNode, ...] = ()
    not_: SchemaNode | None = None
    if_: SchemaNode | None = None
    then: SchemaNode | None = None
    else_: SchemaNode | None = None

    @property
    def is_empty(self) -> bool:
        """Return True when no applicator is present."""
        return not any(self.keyword_items())

    @property
    def selects_subschemas(self) -> bool:
        """Return True when allOf, anyOf or oneOf is present."""
        return bool(self.all_of or self.any_of or self.one_of)

    def keyword_items(self) -> Iterator[tuple[str, SchemaNode | tuple[SchemaNode, ...]]]:
        """Yield (keyword, value) pairs for the applicators that are present."""
        for keyword, value in (
            ("allOf", self.all_of),
            ("anyOf", self.any_of),
            ("oneOf", self.one_of),
            ("not", self.not_),
            ("if", self.if_),
            ("then", self.then),
            ("else", self.else_),
        ):
            if value:
                yield keyword, value


NO_ARMS = CompositionArms()


@dataclass(frozen=True)
class ReferenceNode:
    """Pure pointer to another definition."""

    ref: str
    description: str | None = None
    summary: str | None = None
    extensions: Mapping[str, Any] = field(default_factory=dict)

    @property
    def variant(self) -> SchemaVariant:
        return SchemaVariant.REFERENCE


@dataclass(frozen=True, kw_only=True)
class _TypedNodeBase:
    """Fields shared by every non-reference variant."""

    annotations: Mapping[str, Any] = field(default_factory=dict)
    validations: Mapping[str, Any] = field(default_factory=dict)
    arms: CompositionArms = NO_ARMS
    discriminator: Discriminator | str | None = None
    xml: Mapping[str, Any] | None = None
    extensions: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, kw_only=True)
class PrimitiveNode(_TypedNodeBase):
    """String, number, integer, boolean, file or null schema."""

    variant: SchemaVariant


@dataclass(frozen=True, kw_only=True)
class ArrayNode(_TypedNodeBase):
    """Array schema with item applicators."""

    items: SchemaNode | None = None
    prefix_items: tuple[SchemaNode, ...] = ()
    contains: SchemaNode | None = None

    @property
    def variant(self) -> SchemaVariant:
        return SchemaVariant.ARRAY


@dataclass(frozen=True, kw_only=True)
class ObjectNode(_TypedNodeBase):  # pylint: disable=too-many-instance-attributes
    """Object schema with property applicators."""

    properties: Mapping[str, SchemaNode] = field(default_factory=dict)
    required: tuple[str, ...] = ()
    additional_properties: bool | SchemaNode | None = None
    pattern_properties: Mapping[str, SchemaNode] = field(default_factory=dict)
    property_names: SchemaNode | None = None
    dependent_schemas: Mapping[str, SchemaNode] = field(default_factory=dict)
    declares_type: bool = True

    @property
    def variant(self) -> SchemaVariant:
        return SchemaVariant.OBJECT


@dataclass(frozen=True, kw_only=True)
class CompositionNode(_TypedNodeBase):
    """Untyped schema defined by its applicators and annotations."""

    @property
    def variant(self) -> SchemaVariant:
        return SchemaVariant.COMPOSITION


SchemaNode = ReferenceNode | PrimitiveNode | ArrayNode | ObjectNode | CompositionNode


def iter_child_nodes(node: SchemaNode) -> Iterator[tuple[str, SchemaNode]]:
    """Yield (relative pointer, child) for every schema nested directly in a node."""
    if isinstance(node, ReferenceNode):
        return
    if isinstance(node, ArrayNode):
        if node.items is not None:
            yield "items", node.items
        for index, child in enumerate(node.prefix_items):
            yield f"prefixItems/{index}", child
        if node.contains is not None:
            yield "contains", node.contains
    elif isinstance(node, ObjectNode):
        yield from _iter_named("properties", node.properties)
        if isinstance(node.additional_properties, (ReferenceNode, _TypedNodeBase)):
            yield "additionalProperties", node.additional_properties
        yield from _iter_named("patternProperties", node.pattern_properties)
        if node.property_names is not None:
            yield "propertyNames", node.property_names
        yield from _iter_named("dependentSchemas", node.dependent_schemas)
    elif not isinstance(node, (PrimitiveNode, CompositionNode)):
        raise TypeError(f"Unsupported schema node: {type(node).__name__}")

    for keyword, value in node.arms.keyword_items():
        if isinstance(value, tuple):
            for index, child in enumerate(value):
                yield f"{keyword}/{index}", child
        else:
            yield keyword, value


def _iter_named(
    keyword: str, children: Mapping[str, SchemaNode]
) -> Iterator[tuple[str, SchemaNode]]:
    for name, child in children.items():
        yield f"{keyword}/{escape_pointer_segment(name)}", child
