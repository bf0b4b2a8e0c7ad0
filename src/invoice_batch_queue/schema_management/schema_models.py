"""Schema management entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class SchemaDocument:
    """Parsed JSON schema together with where it came from."""

    root: Mapping[str, Any]
    source_path: Path | None

    @property
    def definition_names(self) -> tuple[str, ...]:
        definitions = self.root.get("definitions") or {}
        return tuple(definitions)


@dataclass(frozen=True)
class SchemaViolation:
    """One schema check failure, addressed by dotted field path."""

    path: str
    message: str
