"""File type classification for discovered entries."""

from __future__ import annotations

from enum import Enum
from typing import Any


class FileType(str, Enum):
    """Closed set of content categories assigned to discovered entries."""

    DIRECTORY = "Directory"
    FILE = "File"
    YAML = "YAML"
    JSON = "JSON"
    TEXT = "Text"
    UNKNOWN = "Unknown"

    @classmethod
    def from_extension(cls, extension: str | None) -> "FileType":
        """Return the category for ``extension``; see :func:`classify`."""
        return classify(extension)

    @property
    def is_directory(self) -> bool:
        return self is FileType.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self is FileType.FILE

    @property
    def is_yaml(self) -> bool:
        return self is FileType.YAML

    @property
    def is_json(self) -> bool:
        return self is FileType.JSON

    @property
    def is_text(self) -> bool:
        return self is FileType.TEXT

    @property
    def is_unknown(self) -> bool:
        return self is FileType.UNKNOWN

    def __str__(self) -> str:
        return self.value


# "directory" intentionally maps to UNKNOWN; DIRECTORY is never produced from an extension.
_EXTENSIONS: dict[str, FileType] = {
    "yaml": FileType.YAML,
    "yml": FileType.YAML,
    "json": FileType.JSON,
    "json5": FileType.JSON,
    "text": FileType.TEXT,
    "txt": FileType.TEXT,
    "file": FileType.FILE,
    "directory": FileType.UNKNOWN,
    "unknown": FileType.UNKNOWN,
}


def classify(extension: str | None) -> FileType:
    """Map a file extension to a :class:`FileType`.

    A single leading ``.`` is ignored and matching is case-insensitive, so
    ``".YML"``, ``"yml"`` and ``"yaml"`` all classify as YAML.

    Args:
        extension: Extension with or without its leading dot.

    Returns:
        FileType: Exactly one category; ``UNKNOWN`` for anything unrecognized.
    """
    if not extension:
        return FileType.UNKNOWN
    if extension.startswith("."):
        extension = extension[1:]
    return _EXTENSIONS.get(extension.lower(), FileType.UNKNOWN)


def type_name(value: Any) -> str:
    """Return the display name of ``value``, falling back to ``"Unknown"``."""
    if isinstance(value, FileType):
        return value.value
    return FileType.UNKNOWN.value


__all__ = ["FileType", "classify", "type_name"]
