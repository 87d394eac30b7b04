"""Keyword value kinds shared by every dialect."""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from enum import Enum

from oas_schema_compiler.dialect_registry import BoundKind, Dialect

EXTENSION_PATTERN = re.compile(r"^x-")


class ValueKind(str, Enum):
    """Expected JSON value kind of a schema keyword."""

    ANY = "any"
    STRING = "string"
    BOOLEAN = "boolean"
    NUMBER = "number"
    POSITIVE_NUMBER = "positive number"
    NON_NEGATIVE_INTEGER = "non-negative integer"
    NON_EMPTY_LIST = "non-empty list"
    LIST = "list"
    UNIQUE_STRING_LIST = "list of unique strings"
    STRING_LIST_MAP = "mapping of string lists"
    EXTERNAL_DOCS = "external documentation object"


# Keywords holding nested schemas are handled structurally by the builder.
SCHEMA_KEYWORDS = frozenset({"items", "contains", "not", "if", "then", "else", "propertyNames"})
SCHEMA_LIST_KEYWORDS = frozenset({"allOf", "anyOf", "oneOf", "prefixItems"})
SCHEMA_MAP_KEYWORDS = frozenset({"properties", "patternProperties", "dependentSchemas"})
STRUCTURAL_KEYWORDS = (
    SCHEMA_KEYWORDS
    | SCHEMA_LIST_KEYWORDS
    | SCHEMA_MAP_KEYWORDS
    | {"required", "additionalProperties", "discriminator", "xml", "type"}
)

_VALUE_KINDS: dict[str, ValueKind] = {
    "title": ValueKind.STRING,
    "description": ValueKind.STRING,
    "summary": ValueKind.STRING,
    "format": ValueKind.STRING,
    "pattern": ValueKind.STRING,
    "default": ValueKind.ANY,
    "example": ValueKind.ANY,
    "const": ValueKind.ANY,
    "examples": ValueKind.LIST,
    "enum": ValueKind.NON_EMPTY_LIST,
    "readOnly": ValueKind.BOOLEAN,
    "writeOnly": ValueKind.BOOLEAN,
    "deprecated": ValueKind.BOOLEAN,
    "uniqueItems": ValueKind.BOOLEAN,
    "externalDocs": ValueKind.EXTERNAL_DOCS,
    "multipleOf": ValueKind.POSITIVE_NUMBER,
    "maximum": ValueKind.NUMBER,
    "minimum": ValueKind.NUMBER,
    "maxLength": ValueKind.NON_NEGATIVE_INTEGER,
    "minLength": ValueKind.NON_NEGATIVE_INTEGER,
    "maxItems": ValueKind.NON_NEGATIVE_INTEGER,
    "minItems": ValueKind.NON_NEGATIVE_INTEGER,
    "maxContains": ValueKind.NON_NEGATIVE_INTEGER,
    "minContains": ValueKind.NON_NEGATIVE_INTEGER,
    "maxProperties": ValueKind.NON_NEGATIVE_INTEGER,
    "minProperties": ValueKind.NON_NEGATIVE_INTEGER,
    "required": ValueKind.UNIQUE_STRING_LIST,
    "dependentRequired": ValueKind.STRING_LIST_MAP,
}

_BOUND_KEYWORDS = frozenset({"exclusiveMaximum", "exclusiveMinimum"})


def is_extension_key(key: str) -> bool:
    """Return True for vendor extension keys (`x-` prefixed)."""
    return bool(EXTENSION_PATTERN.match(key))


def is_json_value(value: object) -> bool:
    """Return True when a value can be written as JSON without loss."""
    if value is None or isinstance(value, (str, bool, int)):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, list):
        return all(is_json_value(item) for item in value)
    if isinstance(value, Mapping):
        return all(isinstance(key, str) and is_json_value(item) for key, item in value.items())
    return False


def value_kind(keyword: str, dialect: Dialect) -> ValueKind:
    """Return the expected value kind of a scalar keyword for the dialect."""
    if keyword in _BOUND_KEYWORDS:
        if dialect.exclusive_bound_kind == BoundKind.BOOLEAN:
            return ValueKind.BOOLEAN
        return ValueKind.NUMBER
    return _VALUE_KINDS.get(keyword, ValueKind.ANY)


def matches_kind(value: object, kind: ValueKind) -> bool:
    """Return True when a JSON value satisfies the expected kind."""
    if kind == ValueKind.ANY:
        return True
    if kind == ValueKind.STRING:
        return isinstance(value, str)
    if kind == ValueKind.BOOLEAN:
        return isinstance(value, bool)
    if kind == ValueKind.NUMBER:
        return _is_number(value)
    if kind == ValueKind.POSITIVE_NUMBER:
        return _is_number(value) and value > 0  # type: ignore[operator]
    if kind == ValueKind.NON_NEGATIVE_INTEGER:
        return _is_integer(value) and value >= 0  # type: ignore[operator]
    if kind == ValueKind.LIST:
        return isinstance(value, list)
    if kind == ValueKind.NON_EMPTY_LIST:
        return isinstance(value, list) and bool(value)
    if kind == ValueKind.UNIQUE_STRING_LIST:
        return (
            isinstance(value, list)
            and all(isinstance(item, str) for item in value)
            and len(set(value)) == len(value)
        )
    if kind == ValueKind.STRING_LIST_MAP:
        return isinstance(value, Mapping) and all(
            matches_kind(item, ValueKind.UNIQUE_STRING_LIST) for item in value.values()
        )
    if kind == ValueKind.EXTERNAL_DOCS:
        return isinstance(value, Mapping) and isinstance(value.get("url"), str)
    raise ValueError(f"Unsupported value kind: {kind}")


def _is_number(value: object) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def _is_integer(value: object) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()
