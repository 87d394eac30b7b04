"""Dialect registry entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum


class SchemaVariant(str, Enum):
    """Canonical variant tags of a schema node."""

    REFERENCE = "reference"
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    FILE = "file"
    NULL = "null"
    ARRAY = "array"
    OBJECT = "object"
    COMPOSITION = "composition"


PRIMITIVE_VARIANTS: frozenset[SchemaVariant] = frozenset(
    {
        SchemaVariant.STRING,
        SchemaVariant.NUMBER,
        SchemaVariant.INTEGER,
        SchemaVariant.BOOLEAN,
        SchemaVariant.FILE,
        SchemaVariant.NULL,
    }
)

# Variants selected through the `type` keyword.
TYPED_VARIANTS: frozenset[SchemaVariant] = PRIMITIVE_VARIANTS | {
    SchemaVariant.ARRAY,
    SchemaVariant.OBJECT,
}


class DiscriminatorStyle(str, Enum):
    """Polymorphism vocabulary used by a dialect."""

    PROPERTY_NAME = "property-name"
    OBJECT = "object"


class BoundKind(str, Enum):
    """Value kind of exclusiveMinimum/exclusiveMaximum."""

    BOOLEAN = "boolean"
    NUMBER = "number"


@dataclass(frozen=True)
class Dialect:  # pylint: disable=too-many-instance-attributes
    """Immutable rule set describing legal schema shapes for one specification version."""

    version_id: str
    aliases: tuple[str, ...]
    variants: frozenset[SchemaVariant]
    annotation_keywords: frozenset[str]
    type_keywords: Mapping[SchemaVariant, frozenset[str]]
    composition_keywords: frozenset[str]
    composable_variants: frozenset[SchemaVariant]
    untyped_variant: SchemaVariant
    reference_siblings: frozenset[str]
    discriminator_style: DiscriminatorStyle
    xml_keywords: frozenset[str]
    exclusive_bound_kind: BoundKind
    array_items_required: bool
    reference_collections: Mapping[str, str]
    default_components: tuple[str, ...]
    root_name: str = "Specification"

    def supports(self, variant: SchemaVariant) -> bool:
        """Return True when the variant is legal in this dialect."""
        return variant in self.variants

    def keywords_for(self, variant: SchemaVariant) -> frozenset[str]:
        """Return every keyword (besides `type` and extensions) licensed for the variant."""
        if variant == SchemaVariant.REFERENCE:
            return self.reference_siblings
        allowed = set(self.annotation_keywords) | set(self.type_keywords.get(variant, ()))
        if variant in self.composable_variants:
            allowed |= self.composition_keywords
            if self.discriminator_style == DiscriminatorStyle.OBJECT:
                allowed.add("discriminator")
        return frozenset(allowed)

    def licensing_variants(self, keyword: str) -> tuple[SchemaVariant, ...]:
        """Return the variants whose type-scoped keyword set contains the keyword."""
        return tuple(
            variant
            for variant in SchemaVariant
            if keyword in self.type_keywords.get(variant, frozenset())
        )
