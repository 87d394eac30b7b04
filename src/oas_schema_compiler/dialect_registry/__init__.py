"""Dialect registry exports."""

from .dialect_catalog import (
    OPENAPI_30,
    OPENAPI_31,
    OPENAPI_32,
    SWAGGER_20,
    UnknownDialectError,
    lookup_dialect,
    registered_dialects,
)
from .dialect_models import (
    PRIMITIVE_VARIANTS,
    TYPED_VARIANTS,
    BoundKind,
    Dialect,
    DiscriminatorStyle,
    SchemaVariant,
)

__all__ = [
    "BoundKind",
    "Dialect",
    "DiscriminatorStyle",
    "SchemaVariant",
    "PRIMITIVE_VARIANTS",
    "TYPED_VARIANTS",
    "SWAGGER_20",
    "OPENAPI_30",
    "OPENAPI_31",
    "OPENAPI_32",
    "UnknownDialectError",
    "lookup_dialect",
    "registered_dialects",
]
