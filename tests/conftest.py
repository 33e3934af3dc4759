"""Shared fixtures for the dirscout test suite."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Undo handler and level changes made by ``configure_logging``."""
    yield
    logger = logging.getLogger("dirscout")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def diagnostics(caplog: pytest.LogCaptureFixture) -> logging.Logger:
    """Return an injectable logger whose records are captured by ``caplog``."""
    caplog.set_level(logging.DEBUG, logger="tests.diagnostics")
    return logging.getLogger("tests.diagnostics")


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    """Return a fake checkout with a `.git` directory, a `src` package and fixtures.

    Layout::

        repo/.git/
        repo/src/
        repo/testdata/x.json
    """
    root = (tmp_path / "repo").resolve()
    (root / ".git").mkdir(parents=True)
    (root / "src").mkdir()
    (root / "testdata").mkdir()
    (root / "testdata" / "x.json").write_text("{}", encoding="utf-8")
    return root
