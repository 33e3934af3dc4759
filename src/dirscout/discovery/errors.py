"""Exceptions raised while locating and walking directories."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class DiscoveryError(Exception):
    """Base exception for discovery operations."""


class InvalidCandidateError(DiscoveryError, ValueError):
    """Raised when a candidate directory name is blank or malformed."""


class WorkingDirectoryUnavailableError(DiscoveryError, OSError):
    """Raised when the current working directory cannot be determined."""


class RepoRootUnavailableError(DiscoveryError):
    """Raised when no enclosing repository can be found or read."""


class DirectoryNotFoundError(DiscoveryError, FileNotFoundError):
    """Raised when no candidate directory matches from any search anchor."""

    def __init__(self, candidates: Sequence[str], anchors: Sequence[Path]) -> None:
        self.candidates = tuple(candidates)
        self.anchors = tuple(anchors)
        names = ", ".join(repr(name) for name in self.candidates) or "<none>"
        searched = ", ".join(str(anchor) for anchor in self.anchors) or "<none>"
        super().__init__(f"No directory named {names} found searching upward from {searched}")

    def __str__(self) -> str:
        return str(self.args[0])


__all__ = [
    "DiscoveryError",
    "InvalidCandidateError",
    "WorkingDirectoryUnavailableError",
    "RepoRootUnavailableError",
    "DirectoryNotFoundError",
]
