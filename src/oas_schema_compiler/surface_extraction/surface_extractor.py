"""Surface extraction service."""

from __future__ import annotations

import logging

from oas_schema_compiler.dialect_registry import Dialect
from oas_schema_compiler.schema_model import (
    DefinitionsTable,
    InvalidSchemaShapeError,
    SchemaNode,
    build_node,
    escape_pointer_segment,
)

from .surface_models import DialectSource, ShapeDefect, Surface

_LOGGER = logging.getLogger("oas_schema_compiler.surface")
_LOGGER.addHandler(logging.NullHandler())


class SurfaceExtractionError(Exception):
    """Raised when a dialect source is structurally unusable."""


def extract_surface(source: DialectSource, dialect: Dialect) -> Surface:
    """Build every declaration and classify the root and allow-listed components.

    Declarations that violate the dialect's shape rules are recorded as
    defects and left out of the definitions table; they never stop the
    remaining declarations from being built.
    """
    built: dict[str, SchemaNode] = {}
    defects: list[ShapeDefect] = []
    for raw_name, raw_schema in source.declarations.items():
        name = str(raw_name)
        if name in built or any(defect.name == name for defect in defects):
            raise SurfaceExtractionError(f"Duplicate declaration name: {name}")
        try:
            built[name] = build_node(
                raw_schema, dialect, path=f"#/definitions/{escape_pointer_segment(name)}"
            )
        except InvalidSchemaShapeError as exc:
            _LOGGER.warning("Declaration %s/%s is malformed: %s", dialect.version_id, name, exc)
            defects.append(
                ShapeDefect(name=name, message=str(exc), keyword=exc.keyword, path=exc.path)
            )

    declared = set(built) | {defect.name for defect in defects}
    allow_list = (
        source.allow_list if source.allow_list is not None else dialect.default_components
    )
    component_names = tuple(
        sorted(name for name in set(allow_list) if name in declared and name != dialect.root_name)
    )
    missing = tuple(sorted(name for name in set(allow_list) if name not in declared))
    for name in missing:
        _LOGGER.warning(
            "Component %s/%s is allow-listed but not declared", dialect.version_id, name
        )

    return Surface(
        dialect=dialect,
        definitions=DefinitionsTable(built),
        root_name=dialect.root_name,
        root=built.get(dialect.root_name),
        component_names=component_names,
        components={name: built[name] for name in component_names if name in built},
        defects=tuple(defects),
        missing_components=missing,
    )
