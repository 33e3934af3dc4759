"""Locate a named fixtures directory near the working directory.

The :class:`Locator` searches upward from the current working directory for
the first existing directory matching one of its candidate names. When that
fails it repeats the search from the root of the enclosing git working tree.
Once a directory is found it is cached on the instance and reused by
:meth:`Locator.walk`.
"""

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path
from typing import Iterable, Iterator

from .errors import (
    DirectoryNotFoundError,
    InvalidCandidateError,
    RepoRootUnavailableError,
    WorkingDirectoryUnavailableError,
)
from .models import Descriptor
from .repository import resolve_repo_root
from .walker import Walker

LOGGER = logging.getLogger(__name__)

DEFAULT_CANDIDATE = "testdata"


def _has_separator(value: str) -> bool:
    return os.sep in value or (os.altsep is not None and os.altsep in value)


def _base_name(value: str) -> str:
    return os.path.basename(value.rstrip(os.sep + (os.altsep or ""))).strip()


def normalize_candidate(value: str) -> str:
    """Return ``value`` reduced to a trimmed directory base name.

    Raises:
        InvalidCandidateError: If nothing usable remains.
    """
    name = value.strip()
    if _has_separator(name):
        name = _base_name(name)
    if not name or name in (".", ".."):
        raise InvalidCandidateError(f"Invalid search directory name {value!r}")
    return name


def ancestor_search(
    start: Path,
    name: str,
    *,
    logger: logging.Logger | logging.LoggerAdapter | None = None,
) -> Path | None:
    """Return the nearest ``<ancestor>/<name>`` directory, innermost first.

    Tests ``start`` itself and then each parent in turn, stopping once a
    parent step no longer changes the path.

    Args:
        start: Directory to begin the search from.
        name: Directory base name to look for at each level.
        logger: Destination for diagnostics about unreadable candidates.

    Returns:
        Path | None: The matching directory, or None when nothing matches.
    """
    log = logger or LOGGER
    current = start
    while True:
        candidate = current / name
        context = {"dirscout": {"literal": name, "path": str(candidate)}}
        try:
            mode = candidate.stat().st_mode
        except (FileNotFoundError, NotADirectoryError):
            mode = None
        except OSError as exc:
            log.warning("Error while evaluating search directory %s: %s", candidate, exc, extra=context)
            mode = None
        if mode is not None:
            if stat.S_ISDIR(mode):
                return candidate
            log.error("Invalid search directory %s: not a directory", candidate, extra=context)

        parent = current.parent
        if parent == current:
            return None
        current = parent


class Locator:
    """Resolve and walk the first existing directory named by a candidate.

    Candidates are tried in the order given. For each one the search climbs
    from the working directory to the filesystem root (phase A) before moving
    on to the next candidate; only when every candidate misses is the same
    search repeated from the repository root (phase B).

    Instances cache their first successful resolution and are not safe to
    share between threads.
    """

    def __init__(
        self,
        *candidates: str,
        logger: logging.Logger | None = None,
        cwd: Path | str | None = None,
        repository_root: Path | str | None = None,
        walker: Walker | None = None,
    ) -> None:
        self._logger = logger or LOGGER
        self._cwd = Path(cwd) if cwd is not None else None
        self._repository_root = Path(repository_root) if repository_root is not None else None
        self._walker = walker or Walker(logger=self._logger)
        self._candidates = self._prepare(candidates or (DEFAULT_CANDIDATE,))
        self._resolved: Path | None = None

    @property
    def candidates(self) -> tuple[str, ...]:
        """Return the effective candidate names in search order."""
        return self._candidates

    @property
    def resolved(self) -> Path | None:
        """Return the cached resolution, if any."""
        return self._resolved

    def invalidate(self) -> None:
        """Forget the cached resolution so the next call searches again."""
        self._resolved = None

    def resolve(self) -> Path:
        """Return the first matching directory, searching on first use only.

        Returns:
            Path: Absolute path of the matched directory.

        Raises:
            WorkingDirectoryUnavailableError: If the working directory is unavailable.
            DirectoryNotFoundError: If no candidate matches from any anchor.
        """
        if self._resolved is not None:
            return self._resolved

        cwd = self._working_directory()
        log = _ContextAdapter(self._logger, {"input": list(self._candidates), "cwd": str(cwd)})

        repository = self._repository(cwd, log)
        names = self._searchable(log)

        match = self._search(cwd, names, log)
        if match is None:
            log.warning("No search directory found from the working directory %s", cwd)
            if repository is not None:
                match = self._search(repository, names, log)

        if match is None:
            anchors = [cwd] if repository is None else [cwd, repository]
            log.error("No search directory found for %s", ", ".join(self._candidates))
            raise DirectoryNotFoundError(self._candidates, anchors)

        log.debug("Found search directory %s", match)
        self._resolved = match
        return match

    def walk(self, root: Path | str | None = None) -> list[Descriptor]:
        """Return descriptors for every file under ``root`` or the resolved directory.

        Raises:
            DirectoryNotFoundError: If ``root`` is omitted and resolution fails.
            OSError: The first traversal error, unchanged.
        """
        return self._walker.walk(self._walk_root(root))

    def iter_walk(self, root: Path | str | None = None) -> Iterator[Descriptor]:
        """Yield descriptors lazily; see :meth:`walk`."""
        return self._walker.iter_walk(self._walk_root(root))

    # Internal helpers -------------------------------------------------

    def _walk_root(self, root: Path | str | None) -> Path:
        if root is not None:
            return Path(root)
        return self.resolve()

    def _prepare(self, values: Iterable[str]) -> tuple[str, ...]:
        prepared: list[str] = []
        for value in values:
            trimmed = value.strip()
            if _has_separator(trimmed):
                replacement = _base_name(trimmed)
                self._logger.warning(
                    "Base name not provided; replacing %r with %r",
                    value,
                    replacement,
                    extra={"dirscout": {"original": value, "replacement": replacement}},
                )
                trimmed = replacement
            prepared.append(trimmed)
        return tuple(prepared)

    def _searchable(self, log: logging.LoggerAdapter) -> list[str]:
        names: list[str] = []
        for index, value in enumerate(self._candidates):
            try:
                names.append(normalize_candidate(value))
            except InvalidCandidateError as exc:
                log.warning("Invalid search directory at index %d: %s", index, exc)
        return names

    def _working_directory(self) -> Path:
        if self._cwd is not None:
            return self._cwd.expanduser().resolve()
        try:
            return Path.cwd().resolve()
        except OSError as exc:
            raise WorkingDirectoryUnavailableError(
                f"Unable to determine the current working directory: {exc}"
            ) from exc

    def _repository(self, cwd: Path, log: logging.LoggerAdapter) -> Path | None:
        if self._repository_root is not None:
            return self._repository_root.expanduser().resolve()
        try:
            return resolve_repo_root(cwd)
        except RepoRootUnavailableError as exc:
            log.warning("Git directory not found: %s", exc)
            return None

    def _search(self, anchor: Path, names: list[str], log: logging.LoggerAdapter) -> Path | None:
        for name in names:
            match = ancestor_search(anchor, name, logger=log)
            if match is not None:
                return match
        return None


class _ContextAdapter(logging.LoggerAdapter):
    """Attach search context to every record under the ``dirscout`` extra key."""

    def process(self, msg, kwargs):
        extra = dict(kwargs.get("extra") or {})
        context = dict(self.extra or {})
        context.update(extra.get("dirscout", {}))
        extra["dirscout"] = context
        kwargs["extra"] = extra
        return msg, kwargs


__all__ = ["DEFAULT_CANDIDATE", "Locator", "ancestor_search", "normalize_candidate"]
