"""Surface extraction entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from oas_schema_compiler.dialect_registry import Dialect
from oas_schema_compiler.schema_model import DefinitionsTable, SchemaNode


@dataclass(frozen=True)
class DialectSource:
    """Named schema declarations supplied for one dialect."""

    version_id: str
    declarations: Mapping[str, Any]
    allow_list: tuple[str, ...] | None = None
    collections: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)


@dataclass(frozen=True)
class ShapeDefect:
    """Declaration that could not be built into a schema node."""

    name: str
    message: str
    keyword: str | None
    path: str


@dataclass(frozen=True)
class Surface:  # pylint: disable=too-many-instance-attributes
    """Everything a dialect exposes for emission."""

    dialect: Dialect
    definitions: DefinitionsTable
    root_name: str
    root: SchemaNode | None
    component_names: tuple[str, ...]
    components: Mapping[str, SchemaNode]
    defects: tuple[ShapeDefect, ...] = ()
    missing_components: tuple[str, ...] = ()

    @property
    def has_root(self) -> bool:
        """Return True when the root declaration exists, built or defective."""
        return self.root is not None or self.defect_for(self.root_name) is not None

    def defect_for(self, name: str) -> ShapeDefect | None:
        """Return the shape defect recorded for a declaration, if any."""
        for defect in self.defects:
            if defect.name == name:
                return defect
        return None
