"""Recursive directory traversal producing file descriptors."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator

from .models import Descriptor
from .types import classify

LOGGER = logging.getLogger(__name__)


def extension_of(name: str) -> str:
    """Return the suffix of ``name`` from its last dot, dotfiles included.

    Unlike :func:`os.path.splitext`, ``".json"`` yields ``".json"``.
    """
    index = name.rfind(".")
    if index < 0:
        return ""
    return name[index:]


class Walker:
    """Depth-first traversal that describes every non-directory entry under a root."""

    def __init__(
        self,
        *,
        logger: logging.Logger | None = None,
        follow_symlinks: bool = False,
    ) -> None:
        self._logger = logger or LOGGER
        self.follow_symlinks = follow_symlinks

    def walk(self, root: Path | str) -> list[Descriptor]:
        """Return descriptors for every file beneath ``root``.

        Entries appear in the filesystem's enumeration order; callers needing
        a stable order should sort the result.

        Args:
            root: Directory to traverse.

        Returns:
            list[Descriptor]: One descriptor per non-directory entry.

        Raises:
            OSError: The first enumeration error, unchanged.
        """
        return list(self.iter_walk(root))

    def iter_walk(self, root: Path | str) -> Iterator[Descriptor]:
        """Yield descriptors lazily so partial results survive a traversal error."""
        root_path = Path(root)
        self._logger.debug("Walking directory %s", root_path, extra={"dirscout": {"root": str(root_path)}})
        try:
            yield from self._scan(root_path)
        except OSError as exc:
            self._logger.warning(
                "Error while walking directory %s: %s",
                exc.filename or root_path,
                exc.strerror or exc,
                extra={"dirscout": {"root": str(root_path), "path": exc.filename}},
            )
            raise

    def _scan(self, directory: Path) -> Iterator[Descriptor]:
        with os.scandir(directory) as entries:
            for entry in entries:
                path = directory / entry.name
                if entry.is_dir(follow_symlinks=self.follow_symlinks):
                    yield from self._scan(path)
                    continue
                yield Descriptor(
                    path=path,
                    name=entry.name,
                    type=classify(extension_of(entry.name)),
                )


__all__ = ["Walker", "extension_of"]
