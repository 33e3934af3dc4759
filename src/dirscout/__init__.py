"""Locate fixtures directories and inventory their files."""

from importlib import metadata as _metadata

from dirscout.discovery import (
    DEFAULT_CANDIDATE,
    Descriptor,
    DirectoryNotFoundError,
    DiscoveryError,
    FileType,
    InvalidCandidateError,
    Locator,
    RepoRootUnavailableError,
    Walker,
    WorkingDirectoryUnavailableError,
    ancestor_search,
    classify,
    resolve_repo_root,
    type_name,
)

__all__ = [
    "DEFAULT_CANDIDATE",
    "Descriptor",
    "DirectoryNotFoundError",
    "DiscoveryError",
    "FileType",
    "InvalidCandidateError",
    "Locator",
    "RepoRootUnavailableError",
    "Walker",
    "WorkingDirectoryUnavailableError",
    "__version__",
    "ancestor_search",
    "classify",
    "resolve_repo_root",
    "type_name",
]


def __getattr__(name: str):
    if name == "__version__":
        return _metadata.version("dirscout")
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__():
    return sorted(list(globals().keys()) + ["__version__"])
