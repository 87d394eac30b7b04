"""Static catalog of supported specification dialects."""

from __future__ import annotations

from types import MappingProxyType

from .dialect_models import BoundKind, Dialect, DiscriminatorStyle, SchemaVariant


class UnknownDialectError(Exception):
    """Raised when a version identifier does not match a registered dialect."""


_NUMERIC_KEYWORDS = frozenset(
    {"format", "multipleOf", "maximum", "exclusiveMaximum", "minimum", "exclusiveMinimum"}
)
_STRING_KEYWORDS = frozenset({"format", "maxLength", "minLength", "pattern"})
_FORMAT_ONLY = frozenset({"format"})

_ARRAY_KEYWORDS = frozenset({"items", "maxItems", "minItems", "uniqueItems"})
_ARRAY_KEYWORDS_2020 = _ARRAY_KEYWORDS | {"prefixItems", "contains", "minContains", "maxContains"}

_OBJECT_KEYWORDS_SWAGGER = frozenset(
    {
        "properties",
        "required",
        "additionalProperties",
        "maxProperties",
        "minProperties",
        "discriminator",
    }
)
_OBJECT_KEYWORDS_30 = (_OBJECT_KEYWORDS_SWAGGER - {"discriminator"}) | {
    "patternProperties",
    "propertyNames",
}
_OBJECT_KEYWORDS_2020 = _OBJECT_KEYWORDS_30 | {"dependentRequired", "dependentSchemas"}

_ANNOTATIONS_20 = frozenset(
    {"title", "description", "default", "example", "enum", "readOnly", "xml", "externalDocs"}
)
_ANNOTATIONS_30 = _ANNOTATIONS_20 | {"writeOnly", "deprecated"}
_ANNOTATIONS_31 = _ANNOTATIONS_30 | {"examples", "const"}
_ANNOTATIONS_32 = _ANNOTATIONS_31 - {"example"}

_COMPOSITION_30 = frozenset({"allOf", "anyOf", "oneOf", "not"})
_COMPOSITION_31 = _COMPOSITION_30 | {"if", "then", "else"}

_XML_LEGACY = frozenset({"name", "namespace", "prefix", "attribute", "wrapped"})
_XML_NODE_TYPE = frozenset({"nodeType", "name", "namespace", "prefix"})

_BASE_VARIANTS = frozenset(
    {
        SchemaVariant.REFERENCE,
        SchemaVariant.STRING,
        SchemaVariant.NUMBER,
        SchemaVariant.INTEGER,
        SchemaVariant.BOOLEAN,
        SchemaVariant.ARRAY,
        SchemaVariant.OBJECT,
    }
)

_COMPONENTS_30 = (
    "Schema",
    "Response",
    "Parameter",
    "Example",
    "RequestBody",
    "Header",
    "SecurityScheme",
    "Link",
    "Callback",
)
_COMPONENTS_31 = _COMPONENTS_30 + ("PathItem",)
_COMPONENTS_32 = _COMPONENTS_31 + ("MediaType",)

_COMPONENT_COLLECTIONS_30 = (
    "parameters",
    "responses",
    "examples",
    "requestBodies",
    "headers",
    "securitySchemes",
    "links",
    "callbacks",
)


def _type_keywords(
    *, array: frozenset[str], object_keywords: frozenset[str], with_null: bool, with_file: bool
) -> MappingProxyType:
    table = {
        SchemaVariant.STRING: _STRING_KEYWORDS,
        SchemaVariant.NUMBER: _NUMERIC_KEYWORDS,
        SchemaVariant.INTEGER: _NUMERIC_KEYWORDS,
        SchemaVariant.BOOLEAN: _FORMAT_ONLY,
        SchemaVariant.ARRAY: array,
        SchemaVariant.OBJECT: object_keywords,
        SchemaVariant.COMPOSITION: frozenset(),
    }
    if with_null:
        table[SchemaVariant.NULL] = frozenset()
    if with_file:
        table[SchemaVariant.FILE] = _FORMAT_ONLY
    return MappingProxyType(table)


def _component_collections(*extra: str) -> MappingProxyType:
    collections = {"#/definitions/": "definitions", "#/components/schemas/": "definitions"}
    for collection in _COMPONENT_COLLECTIONS_30 + extra:
        collections[f"#/components/{collection}/"] = collection
    return MappingProxyType(collections)


SWAGGER_20 = Dialect(
    version_id="2.0",
    aliases=("2.0.0",),
    variants=_BASE_VARIANTS | {SchemaVariant.FILE},
    annotation_keywords=_ANNOTATIONS_20,
    type_keywords=_type_keywords(
        array=_ARRAY_KEYWORDS,
        object_keywords=_OBJECT_KEYWORDS_SWAGGER,
        with_null=False,
        with_file=True,
    ),
    composition_keywords=frozenset({"allOf"}),
    composable_variants=frozenset({SchemaVariant.OBJECT}),
    untyped_variant=SchemaVariant.OBJECT,
    reference_siblings=frozenset(),
    discriminator_style=DiscriminatorStyle.PROPERTY_NAME,
    xml_keywords=_XML_LEGACY,
    exclusive_bound_kind=BoundKind.BOOLEAN,
    array_items_required=True,
    reference_collections=MappingProxyType(
        {
            "#/definitions/": "definitions",
            "#/parameters/": "parameters",
            "#/responses/": "responses",
        }
    ),
    default_components=("Schema", "Parameter", "Response", "PathItem"),
)

OPENAPI_30 = Dialect(
    version_id="3.0",
    aliases=("3.0.0", "3.0.1", "3.0.2", "3.0.3", "3.0.4"),
    variants=_BASE_VARIANTS | {SchemaVariant.COMPOSITION},
    annotation_keywords=_ANNOTATIONS_30,
    type_keywords=_type_keywords(
        array=_ARRAY_KEYWORDS,
        object_keywords=_OBJECT_KEYWORDS_30,
        with_null=False,
        with_file=False,
    ),
    composition_keywords=_COMPOSITION_30,
    composable_variants=(_BASE_VARIANTS - {SchemaVariant.REFERENCE})
    | {SchemaVariant.COMPOSITION},
    untyped_variant=SchemaVariant.COMPOSITION,
    reference_siblings=frozenset({"description"}),
    discriminator_style=DiscriminatorStyle.OBJECT,
    xml_keywords=_XML_LEGACY,
    exclusive_bound_kind=BoundKind.NUMBER,
    array_items_required=True,
    reference_collections=_component_collections(),
    default_components=_COMPONENTS_30,
)

OPENAPI_31 = Dialect(
    version_id="3.1",
    aliases=("3.1.0", "3.1.1"),
    variants=_BASE_VARIANTS | {SchemaVariant.COMPOSITION, SchemaVariant.NULL},
    annotation_keywords=_ANNOTATIONS_31,
    type_keywords=_type_keywords(
        array=_ARRAY_KEYWORDS_2020,
        object_keywords=_OBJECT_KEYWORDS_2020,
        with_null=True,
        with_file=False,
    ),
    composition_keywords=_COMPOSITION_31,
    composable_variants=(_BASE_VARIANTS - {SchemaVariant.REFERENCE})
    | {SchemaVariant.COMPOSITION, SchemaVariant.NULL},
    untyped_variant=SchemaVariant.COMPOSITION,
    reference_siblings=frozenset({"description", "summary"}),
    discriminator_style=DiscriminatorStyle.OBJECT,
    xml_keywords=_XML_LEGACY,
    exclusive_bound_kind=BoundKind.NUMBER,
    array_items_required=False,
    reference_collections=_component_collections("pathItems"),
    default_components=_COMPONENTS_31,
)

OPENAPI_32 = Dialect(
    version_id="3.2",
    aliases=("3.2.0",),
    variants=OPENAPI_31.variants,
    annotation_keywords=_ANNOTATIONS_32,
    type_keywords=OPENAPI_31.type_keywords,
    composition_keywords=_COMPOSITION_31,
    composable_variants=OPENAPI_31.composable_variants,
    untyped_variant=SchemaVariant.COMPOSITION,
    reference_siblings=frozenset({"description", "summary"}),
    discriminator_style=DiscriminatorStyle.OBJECT,
    xml_keywords=_XML_NODE_TYPE,
    exclusive_bound_kind=BoundKind.NUMBER,
    array_items_required=False,
    reference_collections=_component_collections("pathItems", "mediaTypes"),
    default_components=_COMPONENTS_32,
)

_REGISTERED: tuple[Dialect, ...] = (SWAGGER_20, OPENAPI_30, OPENAPI_31, OPENAPI_32)

_BY_IDENTIFIER: MappingProxyType = MappingProxyType(
    {
        identifier: dialect
        for dialect in _REGISTERED
        for identifier in (dialect.version_id, *dialect.aliases)
    }
)


def registered_dialects() -> tuple[Dialect, ...]:
    """Return every registered dialect in version order."""
    return _REGISTERED


def lookup_dialect(version_id: str) -> Dialect:
    """Return the dialect registered for a version identifier or alias.

    Raises:
      UnknownDialectError: If no dialect matches the identifier.
    """
    key = version_id.strip() if isinstance(version_id, str) else version_id
    dialect = _BY_IDENTIFIER.get(key)
    if dialect is None:
        known = ", ".join(d.version_id for d in _REGISTERED)
        raise UnknownDialectError(f"Unknown dialect '{version_id}'. Registered dialects: {known}.")
    return dialect
