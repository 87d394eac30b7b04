"""Schema node construction and shape validation service."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from oas_schema_compiler.dialect_registry import (
    TYPED_VARIANTS,
    Dialect,
    DiscriminatorStyle,
    SchemaVariant,
)

from .keyword_catalog import (
    STRUCTURAL_KEYWORDS,
    ValueKind,
    is_extension_key,
    is_json_value,
    matches_kind,
    value_kind,
)
from .schema_nodes import (
    NO_ARMS,
    ArrayNode,
    CompositionArms,
    CompositionNode,
    Discriminator,
    ObjectNode,
    PrimitiveNode,
    ReferenceNode,
    SchemaNode,
    escape_pointer_segment,
)

_XML_NODE_TYPES = frozenset({"element", "attribute", "text", "cdata", "none"})
_XML_BOOLEAN_KEYS = frozenset({"attribute", "wrapped"})


class InvalidSchemaShapeError(Exception):
    """Raised when a raw schema violates the shape rules of the active dialect."""

    def __init__(
        self,
        message: str,
        *,
        keyword: str | None,
        variant: SchemaVariant | None,
        path: str,
    ) -> None:
        super().__init__(f"{message} (at {path})")
        self.keyword = keyword
        self.variant = variant
        self.path = path


def build_node(raw: Any, dialect: Dialect, *, path: str = "#") -> SchemaNode:
    """Build a typed schema node from an untyped JSON-like value.

    Args:
      raw: Decoded JSON/YAML value describing one schema.
      dialect: Rule set the schema must conform to.
      path: JSON pointer of the node, used in error messages.

    Returns:
      The schema node for the variant selected by keyword presence.

    Raises:
      InvalidSchemaShapeError: If the value is not a legal schema for the dialect.
    """
    _reject_cycles(raw, path, set())
    return _build_node(raw, dialect, path)


def _reject_cycles(raw: Any, path: str, active: set[int]) -> None:
    if isinstance(raw, Mapping):
        children = [(escape_pointer_segment(str(key)), value) for key, value in raw.items()]
    elif isinstance(raw, list):
        children = [(str(index), value) for index, value in enumerate(raw)]
    else:
        return
    if id(raw) in active:
        raise InvalidSchemaShapeError(
            "Schema value is cyclic", keyword=None, variant=None, path=path
        )
    active.add(id(raw))
    for segment, value in children:
        _reject_cycles(value, f"{path}/{segment}", active)
    active.discard(id(raw))


def _build_node(raw: Any, dialect: Dialect, path: str) -> SchemaNode:
    if not isinstance(raw, Mapping):
        raise InvalidSchemaShapeError(
            f"Schema must be an object, got {type(raw).__name__}",
            keyword=None,
            variant=None,
            path=path,
        )

    extensions = {key: value for key, value in raw.items() if is_extension_key(str(key))}
    keywords = {key: value for key, value in raw.items() if not is_extension_key(str(key))}
    _check_extensions(extensions, None, path)
    variant = _select_variant(keywords, dialect, path)

    if variant == SchemaVariant.REFERENCE:
        return _build_reference(keywords, extensions, dialect, path)

    _check_licensed_keywords(keywords, variant, dialect, path)
    scalars = _collect_scalars(keywords, variant, dialect, path)
    arms = _build_arms(keywords, dialect, path)
    common: dict[str, Any] = {
        "annotations": scalars["annotations"],
        "validations": scalars["validations"],
        "arms": arms,
        "discriminator": _build_discriminator(keywords, variant, arms, dialect, path),
        "xml": _build_xml(keywords.get("xml"), dialect, variant, path),
        "extensions": extensions,
    }

    if variant == SchemaVariant.ARRAY:
        return _build_array(keywords, dialect, path, common)
    if variant == SchemaVariant.OBJECT:
        return _build_object(keywords, dialect, path, common)
    if variant == SchemaVariant.COMPOSITION:
        return CompositionNode(**common)
    return PrimitiveNode(variant=variant, **common)


def _check_extensions(
    extensions: Mapping[str, Any], variant: SchemaVariant | None, path: str
) -> None:
    for key, value in extensions.items():
        if not is_json_value(value):
            raise InvalidSchemaShapeError(
                f"Extension '{key}' must be a JSON value",
                keyword=str(key),
                variant=variant,
                path=path,
            )


def _select_variant(keywords: Mapping[str, Any], dialect: Dialect, path: str) -> SchemaVariant:
    if "$ref" in keywords:
        return SchemaVariant.REFERENCE

    declared = keywords.get("type")
    if declared is None:
        return dialect.untyped_variant
    if not isinstance(declared, str):
        raise InvalidSchemaShapeError(
            "Keyword 'type' must be a single type name",
            keyword="type",
            variant=None,
            path=path,
        )
    try:
        variant = SchemaVariant(declared)
    except ValueError:
        variant = None
    if variant is None or variant not in TYPED_VARIANTS or not dialect.supports(variant):
        raise InvalidSchemaShapeError(
            f"Type '{declared}' is not available in dialect {dialect.version_id}",
            keyword="type",
            variant=None,
            path=path,
        )
    return variant


def _build_reference(
    keywords: Mapping[str, Any],
    extensions: Mapping[str, Any],
    dialect: Dialect,
    path: str,
) -> ReferenceNode:
    for keyword in keywords:
        if keyword != "$ref" and keyword not in dialect.reference_siblings:
            raise InvalidSchemaShapeError(
                f"Keyword '{keyword}' cannot appear beside '$ref' in dialect {dialect.version_id}",
                keyword=keyword,
                variant=SchemaVariant.REFERENCE,
                path=path,
            )
    ref = keywords["$ref"]
    if not isinstance(ref, str) or not ref:
        raise InvalidSchemaShapeError(
            "Keyword '$ref' must be a non-empty string",
            keyword="$ref",
            variant=SchemaVariant.REFERENCE,
            path=path,
        )
    for sibling in ("description", "summary"):
        if sibling in keywords and not isinstance(keywords[sibling], str):
            raise InvalidSchemaShapeError(
                f"Keyword '{sibling}' must be a string",
                keyword=sibling,
                variant=SchemaVariant.REFERENCE,
                path=path,
            )
    return ReferenceNode(
        ref=ref,
        description=keywords.get("description"),
        summary=keywords.get("summary"),
        extensions=dict(extensions),
    )


def _check_licensed_keywords(
    keywords: Mapping[str, Any], variant: SchemaVariant, dialect: Dialect, path: str
) -> None:
    allowed = dialect.keywords_for(variant)
    for keyword in keywords:
        if keyword == "type" or keyword in allowed:
            continue
        licensing = dialect.licensing_variants(keyword)
        if licensing:
            names = ", ".join(item.value for item in licensing)
            detail = f"licensed only for {names} schemas"
        elif keyword in dialect.composition_keywords:
            detail = "composition is not allowed on this variant"
        else:
            detail = f"unknown keyword in dialect {dialect.version_id}"
        raise InvalidSchemaShapeError(
            f"Keyword '{keyword}' is not allowed on {variant.value} schemas ({detail})",
            keyword=keyword,
            variant=variant,
            path=path,
        )


def _collect_scalars(
    keywords: Mapping[str, Any], variant: SchemaVariant, dialect: Dialect, path: str
) -> dict[str, dict[str, Any]]:
    annotations: dict[str, Any] = {}
    validations: dict[str, Any] = {}
    type_scoped = dialect.type_keywords.get(variant, frozenset())
    for keyword, value in keywords.items():
        if keyword in STRUCTURAL_KEYWORDS or keyword in dialect.composition_keywords:
            continue
        if not is_json_value(value):
            raise InvalidSchemaShapeError(
                f"Keyword '{keyword}' must be a JSON value",
                keyword=keyword,
                variant=variant,
                path=path,
            )
        expected = value_kind(keyword, dialect)
        if not matches_kind(value, expected):
            raise InvalidSchemaShapeError(
                f"Keyword '{keyword}' must be a {expected.value}",
                keyword=keyword,
                variant=variant,
                path=path,
            )
        if keyword in type_scoped:
            validations[keyword] = value
        else:
            annotations[keyword] = value
    return {"annotations": annotations, "validations": validations}


def _build_child(raw: Any, dialect: Dialect, path: str) -> SchemaNode:
    return _build_node(raw, dialect, path)


def _build_child_list(
    keyword: str, raw: Any, variant: SchemaVariant | None, dialect: Dialect, path: str
) -> tuple[SchemaNode, ...]:
    if not isinstance(raw, list) or not raw:
        raise InvalidSchemaShapeError(
            f"Keyword '{keyword}' must be a non-empty list of schemas",
            keyword=keyword,
            variant=variant,
            path=path,
        )
    return tuple(
        _build_child(item, dialect, f"{path}/{keyword}/{index}") for index, item in enumerate(raw)
    )


def _build_child_map(
    keyword: str, raw: Any, variant: SchemaVariant, dialect: Dialect, path: str
) -> dict[str, SchemaNode]:
    if not isinstance(raw, Mapping):
        raise InvalidSchemaShapeError(
            f"Keyword '{keyword}' must map names to schemas",
            keyword=keyword,
            variant=variant,
            path=path,
        )
    children: dict[str, SchemaNode] = {}
    for name, child in raw.items():
        child_path = f"{path}/{keyword}/{escape_pointer_segment(str(name))}"
        children[str(name)] = _build_child(child, dialect, child_path)
    return children


def _build_arms(keywords: Mapping[str, Any], dialect: Dialect, path: str) -> CompositionArms:
    present = [keyword for keyword in keywords if keyword in dialect.composition_keywords]
    if not present:
        return NO_ARMS

    def single(keyword: str) -> SchemaNode | None:
        if keyword not in keywords:
            return None
        return _build_child(keywords[keyword], dialect, f"{path}/{keyword}")

    def several(keyword: str) -> tuple[SchemaNode, ...]:
        if keyword not in keywords:
            return ()
        return _build_child_list(keyword, keywords[keyword], None, dialect, path)

    return CompositionArms(
        all_of=several("allOf"),
        any_of=several("anyOf"),
        one_of=several("oneOf"),
        not_=single("not"),
        if_=single("if"),
        then=single("then"),
        else_=single("else"),
    )


def _build_discriminator(
    keywords: Mapping[str, Any],
    variant: SchemaVariant,
    arms: CompositionArms,
    dialect: Dialect,
    path: str,
) -> Discriminator | str | None:
    if "discriminator" not in keywords:
        return None
    raw = keywords["discriminator"]

    if dialect.discriminator_style == DiscriminatorStyle.PROPERTY_NAME:
        if not isinstance(raw, str) or not raw:
            raise InvalidSchemaShapeError(
                "Keyword 'discriminator' must be a property name",
                keyword="discriminator",
                variant=variant,
                path=path,
            )
        required = keywords.get("required", [])
        if not matches_kind(required, ValueKind.UNIQUE_STRING_LIST):
            raise InvalidSchemaShapeError(
                "Keyword 'required' must be a list of unique strings",
                keyword="required",
                variant=variant,
                path=path,
            )
        if raw not in required:
            raise InvalidSchemaShapeError(
                f"Discriminator property '{raw}' must be listed in 'required'",
                keyword="discriminator",
                variant=variant,
                path=path,
            )
        return raw

    if not arms.selects_subschemas:
        raise InvalidSchemaShapeError(
            "Keyword 'discriminator' requires 'allOf', 'anyOf' or 'oneOf' on the same schema",
            keyword="discriminator",
            variant=variant,
            path=path,
        )
    if not isinstance(raw, Mapping):
        raise InvalidSchemaShapeError(
            "Keyword 'discriminator' must be an object",
            keyword="discriminator",
            variant=variant,
            path=path,
        )
    extensions = {key: value for key, value in raw.items() if is_extension_key(str(key))}
    _check_extensions(extensions, variant, path)
    unknown = [
        key for key in raw if key not in ("propertyName", "mapping") and key not in extensions
    ]
    property_name = raw.get("propertyName")
    mapping = raw.get("mapping", {})
    valid_mapping = isinstance(mapping, Mapping) and all(
        isinstance(value, str) for value in mapping.values()
    )
    if unknown or not isinstance(property_name, str) or not property_name or not valid_mapping:
        raise InvalidSchemaShapeError(
            "Discriminator requires a 'propertyName' string and an optional string 'mapping'",
            keyword="discriminator",
            variant=variant,
            path=path,
        )
    return Discriminator(
        property_name=property_name,
        mapping={str(key): value for key, value in mapping.items()},
        extensions=extensions,
    )


def _build_xml(
    raw: Any, dialect: Dialect, variant: SchemaVariant, path: str
) -> Mapping[str, Any] | None:
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise InvalidSchemaShapeError(
            "Keyword 'xml' must be an object", keyword="xml", variant=variant, path=path
        )
    for key, value in raw.items():
        if is_extension_key(str(key)):
            valid = is_json_value(value)
        elif key not in dialect.xml_keywords:
            raise InvalidSchemaShapeError(
                f"XML keyword '{key}' is not part of dialect {dialect.version_id}",
                keyword="xml",
                variant=variant,
                path=path,
            )
        elif key == "nodeType":
            valid = isinstance(value, str) and value in _XML_NODE_TYPES
        elif key in _XML_BOOLEAN_KEYS:
            valid = isinstance(value, bool)
        else:
            valid = isinstance(value, str)
        if not valid:
            raise InvalidSchemaShapeError(
                f"XML keyword '{key}' has an invalid value",
                keyword="xml",
                variant=variant,
                path=path,
            )
    return dict(raw)


def _build_array(
    keywords: Mapping[str, Any], dialect: Dialect, path: str, common: dict[str, Any]
) -> ArrayNode:
    if dialect.array_items_required and "items" not in keywords:
        raise InvalidSchemaShapeError(
            f"Array schemas require 'items' in dialect {dialect.version_id}",
            keyword="items",
            variant=SchemaVariant.ARRAY,
            path=path,
        )
    items = keywords.get("items")
    contains = keywords.get("contains")
    return ArrayNode(
        items=None if items is None else _build_child(items, dialect, f"{path}/items"),
        prefix_items=(
            _build_child_list(
                "prefixItems", keywords["prefixItems"], SchemaVariant.ARRAY, dialect, path
            )
            if "prefixItems" in keywords
            else ()
        ),
        contains=None if contains is None else _build_child(contains, dialect, f"{path}/contains"),
        **common,
    )


def _build_object(
    keywords: Mapping[str, Any], dialect: Dialect, path: str, common: dict[str, Any]
) -> ObjectNode:
    variant = SchemaVariant.OBJECT
    required = keywords.get("required", [])
    if not matches_kind(required, value_kind("required", dialect)):
        raise InvalidSchemaShapeError(
            "Keyword 'required' must be a list of unique strings",
            keyword="required",
            variant=variant,
            path=path,
        )

    additional: bool | SchemaNode | None
    raw_additional = keywords.get("additionalProperties")
    if raw_additional is None or isinstance(raw_additional, bool):
        additional = raw_additional
    else:
        additional = _build_child(raw_additional, dialect, f"{path}/additionalProperties")

    property_names = keywords.get("propertyNames")
    return ObjectNode(
        properties=_build_child_map(
            "properties", keywords.get("properties", {}), variant, dialect, path
        ),
        required=tuple(required),
        additional_properties=additional,
        pattern_properties=_build_child_map(
            "patternProperties", keywords.get("patternProperties", {}), variant, dialect, path
        ),
        property_names=(
            None
            if property_names is None
            else _build_child(property_names, dialect, f"{path}/propertyNames")
        ),
        dependent_schemas=_build_child_map(
            "dependentSchemas", keywords.get("dependentSchemas", {}), variant, dialect, path
        ),
        declares_type="type" in keywords,
        **common,
    )
