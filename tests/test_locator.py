"""Tests for locating candidate directories."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from dirscout.discovery import (
    DEFAULT_CANDIDATE,
    DirectoryNotFoundError,
    FileType,
    Locator,
    WorkingDirectoryUnavailableError,
    ancestor_search,
)
from dirscout.discovery.errors import InvalidCandidateError
from dirscout.discovery.locator import normalize_candidate


def _messages(caplog: pytest.LogCaptureFixture, level: int) -> list[str]:
    return [record.getMessage() for record in caplog.records if record.levelno == level]


def test_default_candidate_is_testdata() -> None:
    locator = Locator()

    assert locator.candidates == (DEFAULT_CANDIDATE,)
    assert DEFAULT_CANDIDATE == "testdata"
    assert locator.resolved is None


def test_path_candidate_is_reduced_to_base_name(
    diagnostics: logging.Logger, caplog: pytest.LogCaptureFixture
) -> None:
    locator = Locator("a/b", logger=diagnostics)

    assert locator.candidates == ("b",)
    warnings = _messages(caplog, logging.WARNING)
    assert any("'a/b'" in message and "'b'" in message for message in warnings)
    record = next(record for record in caplog.records if record.levelno == logging.WARNING)
    assert record.dirscout == {"original": "a/b", "replacement": "b"}


def test_candidates_are_trimmed_and_keep_order() -> None:
    locator = Locator("  fixtures ", "testdata", "fixtures")

    assert locator.candidates == ("fixtures", "testdata", "fixtures")


@pytest.mark.parametrize("value", ["", "   ", ".", "/"])
def test_normalize_candidate_rejects_blank_names(value: str) -> None:
    with pytest.raises(InvalidCandidateError):
        normalize_candidate(value)


def test_resolves_fixtures_from_subdirectory_of_repository(
    repo: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(repo / "src")

    assert Locator().resolve() == repo / "testdata"


def test_working_directory_search_precedes_repository_root(tmp_path: Path) -> None:
    work = tmp_path / "work"
    (work / "pkg").mkdir(parents=True)
    (work / "scout-fixtures").mkdir()
    elsewhere = tmp_path / "elsewhere"
    (elsewhere / "scout-fixtures").mkdir(parents=True)

    locator = Locator("scout-fixtures", cwd=work / "pkg", repository_root=elsewhere)

    assert locator.resolve() == (work / "scout-fixtures").resolve()


def test_falls_back_to_repository_root(
    tmp_path: Path, diagnostics: logging.Logger, caplog: pytest.LogCaptureFixture
) -> None:
    work = tmp_path / "work"
    work.mkdir()
    checkout = tmp_path / "checkout"
    (checkout / "scout-fixtures-b").mkdir(parents=True)

    locator = Locator("scout-fixtures-b", cwd=work, repository_root=checkout, logger=diagnostics)

    assert locator.resolve() == (checkout / "scout-fixtures-b").resolve()
    assert any("working directory" in message for message in _messages(caplog, logging.WARNING))
    assert any("Found search directory" in message for message in _messages(caplog, logging.DEBUG))


def test_not_found_without_repository(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    diagnostics: logging.Logger,
    caplog: pytest.LogCaptureFixture,
) -> None:
    empty = tmp_path / "empty"
    empty.mkdir()
    monkeypatch.chdir(empty)

    with pytest.raises(DirectoryNotFoundError) as exc_info:
        Locator(logger=diagnostics).resolve()

    assert isinstance(exc_info.value, FileNotFoundError)
    assert exc_info.value.candidates == ("testdata",)
    assert exc_info.value.anchors == (empty.resolve(),)
    assert any("Git directory not found" in message for message in _messages(caplog, logging.WARNING))
    assert _messages(caplog, logging.ERROR)


def test_candidate_order_beats_proximity(tmp_path: Path) -> None:
    start = tmp_path / "a" / "b"
    start.mkdir(parents=True)
    (start / "second").mkdir()
    (tmp_path / "first").mkdir()

    locator = Locator("first", "second", cwd=start, repository_root=tmp_path)

    assert locator.resolve() == (tmp_path / "first").resolve()


def test_innermost_ancestor_wins(tmp_path: Path) -> None:
    start = tmp_path / "a" / "b"
    start.mkdir(parents=True)
    (tmp_path / "scout-fixtures").mkdir()
    (tmp_path / "a" / "scout-fixtures").mkdir()

    locator = Locator("scout-fixtures", cwd=start, repository_root=tmp_path)

    assert locator.resolve() == (tmp_path / "a" / "scout-fixtures").resolve()


def test_files_named_like_candidates_are_skipped(
    tmp_path: Path, diagnostics: logging.Logger, caplog: pytest.LogCaptureFixture
) -> None:
    start = tmp_path / "inner"
    start.mkdir()
    (start / "scout-fixtures").write_text("not a directory", encoding="utf-8")
    (tmp_path / "scout-fixtures").mkdir()

    locator = Locator("scout-fixtures", cwd=start, repository_root=tmp_path, logger=diagnostics)

    assert locator.resolve() == (tmp_path / "scout-fixtures").resolve()
    assert any("not a directory" in message for message in _messages(caplog, logging.ERROR))


def test_blank_candidates_are_skipped(
    tmp_path: Path, diagnostics: logging.Logger, caplog: pytest.LogCaptureFixture
) -> None:
    (tmp_path / "scout-fixtures").mkdir()

    locator = Locator("  ", "scout-fixtures", cwd=tmp_path, repository_root=tmp_path, logger=diagnostics)

    assert locator.resolve() == (tmp_path / "scout-fixtures").resolve()
    assert any("index 0" in message for message in _messages(caplog, logging.WARNING))


def test_resolution_is_cached(tmp_path: Path) -> None:
    fixtures = tmp_path / "scout-fixtures"
    fixtures.mkdir()
    locator = Locator("scout-fixtures", cwd=tmp_path, repository_root=tmp_path)

    first = locator.resolve()
    fixtures.rmdir()

    assert locator.resolve() == first
    assert locator.resolved == first

    locator.invalidate()
    with pytest.raises(DirectoryNotFoundError):
        locator.resolve()


def test_unavailable_working_directory_is_fatal(monkeypatch: pytest.MonkeyPatch) -> None:
    def _broken_cwd() -> Path:
        raise FileNotFoundError("working directory was removed")

    monkeypatch.setattr(Path, "cwd", staticmethod(_broken_cwd))

    with pytest.raises(WorkingDirectoryUnavailableError) as exc_info:
        Locator().resolve()

    assert isinstance(exc_info.value, OSError)
    assert not isinstance(exc_info.value, DirectoryNotFoundError)


def test_walk_resolves_lazily(repo: Path) -> None:
    locator = Locator(cwd=repo / "src")

    descriptors = locator.walk()

    assert locator.resolved == repo / "testdata"
    assert [(item.name, item.type) for item in descriptors] == [("x.json", FileType.JSON)]
    assert descriptors[0].path == repo / "testdata" / "x.json"


def test_walk_with_explicit_root_skips_resolution(tmp_path: Path) -> None:
    (tmp_path / "notes.txt").write_text("hi", encoding="utf-8")
    locator = Locator("scout-missing", cwd=tmp_path, repository_root=tmp_path)

    descriptors = list(locator.iter_walk(tmp_path))

    assert [item.name for item in descriptors] == ["notes.txt"]
    assert locator.resolved is None


def test_walk_propagates_not_found(tmp_path: Path) -> None:
    locator = Locator("scout-missing", cwd=tmp_path, repository_root=tmp_path)

    with pytest.raises(DirectoryNotFoundError):
        locator.walk()


def test_ancestor_search_stops_at_filesystem_root(tmp_path: Path) -> None:
    assert ancestor_search(tmp_path, "scout-never-created-anywhere") is None


def _deny_stat(monkeypatch: pytest.MonkeyPatch, denied) -> None:
    real_stat = Path.stat

    def _stat(self, *, follow_symlinks: bool = True):
        if denied(self):
            raise PermissionError(13, "Permission denied", str(self))
        return real_stat(self, follow_symlinks=follow_symlinks)

    monkeypatch.setattr(Path, "stat", _stat)


def test_unreadable_git_marker_is_not_fatal(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    diagnostics: logging.Logger,
    caplog: pytest.LogCaptureFixture,
) -> None:
    (tmp_path / "scout-fx").mkdir()
    _deny_stat(monkeypatch, lambda path: path.name == ".git")

    locator = Locator("scout-fx", cwd=tmp_path, logger=diagnostics)

    assert locator.resolve() == tmp_path.resolve() / "scout-fx"
    assert any("Git directory not found" in message for message in _messages(caplog, logging.WARNING))


def test_unreadable_candidate_is_logged_and_search_continues(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    diagnostics: logging.Logger,
    caplog: pytest.LogCaptureFixture,
) -> None:
    start = tmp_path / "inner"
    start.mkdir()
    blocked = start / "scout-fx"
    (tmp_path / "scout-fx").mkdir()
    _deny_stat(monkeypatch, lambda path: path == blocked)

    assert ancestor_search(start, "scout-fx", logger=diagnostics) == tmp_path / "scout-fx"
    warnings = [record for record in caplog.records if record.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "Permission denied" in warnings[0].getMessage()
    assert warnings[0].dirscout == {"literal": "scout-fx", "path": str(blocked)}
