"""Index manifest entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

INDEX_FILENAME = "index.json"
SPECIFICATION_KEY = "specification"


@dataclass(frozen=True)
class IndexManifest:
    """Artifacts written for one version, keyed by artifact name."""

    version_id: str
    specification: str | None = None
    components: Mapping[str, str] = field(default_factory=dict)

    @property
    def schemas(self) -> dict[str, str]:
        """Return the specification and every component in one mapping."""
        combined: dict[str, str] = {}
        if self.specification is not None:
            combined[SPECIFICATION_KEY] = self.specification
        combined.update(self.components)
        return combined

    def to_document(self) -> dict[str, Any]:
        """Return the JSON document written as the version index."""
        return {
            "version": self.version_id,
            SPECIFICATION_KEY: self.specification,
            "components": dict(self.components),
            "schemas": self.schemas,
        }
