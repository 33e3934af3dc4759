"""Configuration models describing dirscout settings."""

from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dirscout.discovery.locator import DEFAULT_CANDIDATE

LogLevelName = Literal["TRACE", "DEBUG", "INFO", "NOTICE", "WARNING", "ERROR"]


class DirscoutBaseModel(BaseModel):
    """Shared configuration for dirscout Pydantic models."""

    model_config = ConfigDict(extra="forbid")


class SearchSettings(DirscoutBaseModel):
    """Directory search options.

    Attributes:
        candidates: Directory names to search for, in priority order.
    """

    candidates: List[str] = Field(default_factory=lambda: [DEFAULT_CANDIDATE])


class WalkSettings(DirscoutBaseModel):
    """Traversal options.

    Attributes:
        follow_symlinks: Whether symlinked directories are descended into.
        sort: Whether walk output is sorted by path.
    """

    follow_symlinks: bool = False
    sort: bool = False


class LoggingSettings(DirscoutBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level.
    """

    level: LogLevelName = "WARNING"

    @field_validator("level", mode="before")
    @classmethod
    def _upper(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value


class CLIOptions(DirscoutBaseModel):
    """CLI presentation defaults.

    Attributes:
        output_format: Serialization format for command output.
    """

    output_format: Literal["json", "yaml"] = "json"


class DirscoutConfig(DirscoutBaseModel):
    """Top-level configuration for dirscout.

    Attributes:
        search: Directory search settings.
        walk: Traversal settings.
        logging: Logging configuration.
        cli: CLI presentation defaults.
    """

    search: SearchSettings = Field(default_factory=SearchSettings)
    walk: WalkSettings = Field(default_factory=WalkSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cli: CLIOptions = Field(default_factory=CLIOptions)


__all__ = [
    "DirscoutBaseModel",
    "SearchSettings",
    "WalkSettings",
    "LoggingSettings",
    "CLIOptions",
    "DirscoutConfig",
    "LogLevelName",
]
