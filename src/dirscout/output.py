"""Serialize command results as JSON or YAML."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from dirscout.discovery import Descriptor


class OutputFormat(str, Enum):
    """Supported serialization formats."""

    JSON = "json"
    YAML = "yaml"


def render(output_format: OutputFormat | str, datum: Any) -> str:
    """Return ``datum`` encoded in ``output_format`` with four-space indentation.

    Raises:
        ValueError: If ``output_format`` is not a supported format.
    """
    fmt = OutputFormat(output_format)
    payload = to_plain(datum)
    if fmt is OutputFormat.JSON:
        return json.dumps(payload, indent=4) + "\n"
    return yaml.safe_dump(payload, indent=4, sort_keys=False)


def to_plain(value: Any) -> Any:
    """Convert paths, enums and descriptors into JSON/YAML-safe values."""
    if isinstance(value, Descriptor):
        return value.to_record()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, dict):
        return {str(key): to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value]
    return value


__all__ = ["OutputFormat", "render", "to_plain"]
