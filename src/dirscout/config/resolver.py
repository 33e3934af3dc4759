"""Merge configuration sources into a validated :class:`DirscoutConfig`."""

from __future__ import annotations

from collections.abc import Mapping as MappingABC
from copy import deepcopy
from typing import Any, Dict, Mapping

import yaml
from pydantic import ValidationError

from .exceptions import ConfigError
from .models import DirscoutConfig

ENV_PREFIX = "DIRSCOUT__"


def resolve_with_precedence(
    *,
    defaults: DirscoutConfig,
    file_overrides: Mapping[str, Any] | None = None,
    env_overrides: Mapping[str, Any] | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> DirscoutConfig:
    """Layer file, environment and CLI overrides on top of ``defaults``.

    Later sources win. Override keys may be nested mappings or dotted paths
    such as ``"search.candidates"``.

    Raises:
        ConfigError: If an override is malformed or the merged values are invalid.
    """
    merged = defaults.model_dump(mode="python")
    for name, source in (
        ("file", file_overrides),
        ("environment", env_overrides),
        ("cli", cli_overrides),
    ):
        if source is None:
            continue
        merged = _deep_merge(merged, _expand(source, source_name=name))

    try:
        return DirscoutConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration values: {exc}") from exc


def flatten_for_env(config: DirscoutConfig) -> Dict[str, str]:
    """Render ``config`` as ``DIRSCOUT__SECTION__KEY`` environment variables."""
    flat: Dict[str, str] = {}

    def _visit(path: list[str], value: Any) -> None:
        if isinstance(value, dict):
            for key, child in value.items():
                _visit([*path, str(key)], child)
            return
        key = ENV_PREFIX + "__".join(part.upper() for part in path)
        if isinstance(value, list):
            flat[key] = yaml.safe_dump(value, default_flow_style=True).strip()
        elif isinstance(value, bool):
            flat[key] = "true" if value else "false"
        else:
            flat[key] = "null" if value is None else str(value)

    for section, value in config.model_dump(mode="python").items():
        _visit([section], value)
    return flat


def parse_env(env: Mapping[str, str]) -> dict[str, Any]:
    """Extract nested overrides from ``DIRSCOUT__`` prefixed variables.

    Values are parsed as YAML scalars so ``"true"`` and ``"[a, b]"`` become a
    bool and a list respectively.
    """
    overrides: dict[str, Any] = {}
    for key, raw_value in env.items():
        if not key.startswith(ENV_PREFIX):
            continue
        path = [segment.lower() for segment in key[len(ENV_PREFIX) :].split("__") if segment]
        if not path:
            continue
        try:
            value: Any = yaml.safe_load(raw_value)
        except yaml.YAMLError:
            value = raw_value
        assign_path(overrides, path, value, source_name="environment")
    return overrides


def assign_path(
    target: dict[str, Any],
    path: list[str],
    value: Any,
    *,
    source_name: str = "cli",
) -> None:
    """Set ``value`` at the nested ``path`` inside ``target``.

    Raises:
        ConfigError: If a non-mapping value sits on the path.
    """
    node = target
    for segment in path[:-1]:
        existing = node.setdefault(segment, {})
        if not isinstance(existing, dict):
            raise ConfigError(
                f"{source_name.capitalize()} override for {'.'.join(path)} conflicts with "
                f"existing value at '{segment}'."
            )
        node = existing
    node[path[-1]] = value


def _expand(source: Mapping[str, Any], *, source_name: str) -> dict[str, Any]:
    if not isinstance(source, MappingABC):
        raise ConfigError(f"{source_name.capitalize()} overrides must be a mapping.")

    result: dict[str, Any] = {}
    for key, value in source.items():
        if not isinstance(key, str):
            raise ConfigError(f"{source_name.capitalize()} override keys must be strings.")
        if isinstance(value, MappingABC):
            value = _expand(value, source_name=source_name)
        nested: dict[str, Any] = {}
        assign_path(nested, key.split("."), value, source_name=source_name)
        result = _deep_merge(result, nested)
    return result


def _deep_merge(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    merged = {key: deepcopy(value) for key, value in base.items()}
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(value, MappingABC) and isinstance(current, MappingABC):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = deepcopy(value)
    return merged


__all__ = ["ENV_PREFIX", "assign_path", "flatten_for_env", "parse_env", "resolve_with_precedence"]
