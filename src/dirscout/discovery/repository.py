"""Locate the root of the enclosing git working tree."""

from __future__ import annotations

import stat
from pathlib import Path

from .errors import RepoRootUnavailableError

GIT_MARKER = ".git"
_GITDIR_PREFIX = "gitdir:"


def resolve_repo_root(start: Path) -> Path:
    """Return the working tree root of the repository enclosing ``start``.

    Walks from ``start`` (inclusive) toward the filesystem root looking for a
    ``.git`` marker. A ``.git`` directory marks a regular checkout; a ``.git``
    file must contain a ``gitdir:`` pointer, as written for linked worktrees
    and submodules.

    Args:
        start: Directory to begin searching from.

    Returns:
        Path: Absolute path of the working tree root.

    Raises:
        RepoRootUnavailableError: If no marker is found or a marker is unreadable.
    """
    current = Path(start).expanduser().resolve()
    while True:
        marker = current / GIT_MARKER
        try:
            mode = marker.stat().st_mode
        except (FileNotFoundError, NotADirectoryError):
            mode = 0
        except OSError as exc:
            raise RepoRootUnavailableError(f"Unable to inspect {marker}: {exc}") from exc
        if stat.S_ISDIR(mode):
            return current
        if stat.S_ISREG(mode):
            _read_gitdir(marker)
            return current
        parent = current.parent
        if parent == current:
            break
        current = parent

    raise RepoRootUnavailableError(f"No git repository found enclosing {start}")


def _read_gitdir(marker: Path) -> Path:
    """Return the metadata directory referenced by a ``.git`` file."""
    try:
        text = marker.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise RepoRootUnavailableError(f"Unable to read {marker}: {exc}") from exc

    for line in text.splitlines():
        line = line.strip()
        if not line.startswith(_GITDIR_PREFIX):
            continue
        target = Path(line[len(_GITDIR_PREFIX) :].strip())
        if not target.is_absolute():
            target = marker.parent / target
        if not target.is_dir():
            raise RepoRootUnavailableError(f"{marker} points at missing git directory {target}")
        return target.resolve()

    raise RepoRootUnavailableError(f"{marker} does not contain a gitdir pointer")


__all__ = ["GIT_MARKER", "resolve_repo_root"]
