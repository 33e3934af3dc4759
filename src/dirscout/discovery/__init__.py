"""Directory location and classified traversal."""

from .errors import (
    DirectoryNotFoundError,
    DiscoveryError,
    InvalidCandidateError,
    RepoRootUnavailableError,
    WorkingDirectoryUnavailableError,
)
from .locator import DEFAULT_CANDIDATE, Locator, ancestor_search, normalize_candidate
from .models import Descriptor
from .repository import resolve_repo_root
from .types import FileType, classify, type_name
from .walker import Walker

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
    "ancestor_search",
    "classify",
    "normalize_candidate",
    "resolve_repo_root",
    "type_name",
]
