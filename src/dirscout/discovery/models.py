"""Data models produced by directory discovery."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict

from .types import FileType


class Descriptor(BaseModel):
    """Immutable record describing one file found during a walk.

    Attributes:
        path: Full traversal path of the entry.
        name: Base name of the entry.
        type: Category assigned from the entry's extension.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: Path
    name: str
    type: FileType = FileType.UNKNOWN

    @property
    def directory(self) -> Path:
        """Return the directory holding this entry."""
        if self.type.is_directory:
            return self.path
        return self.path.parent

    def to_record(self) -> dict[str, Any]:
        """Return a JSON-safe mapping of the descriptor fields."""
        return {"path": str(self.path), "name": self.name, "type": self.type.value}


__all__ = ["Descriptor"]
