"""Tests for the descriptor model."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from dirscout.discovery import Descriptor, FileType


def test_descriptor_is_frozen() -> None:
    descriptor = Descriptor(path=Path("/data/testdata/a.yaml"), name="a.yaml", type=FileType.YAML)

    with pytest.raises(ValidationError):
        descriptor.name = "b.yaml"  # type: ignore[misc]


def test_descriptor_directory_is_parent_for_files() -> None:
    descriptor = Descriptor(path=Path("/data/testdata/a.yaml"), name="a.yaml", type=FileType.YAML)

    assert descriptor.directory == Path("/data/testdata")


def test_descriptor_directory_is_self_for_directories() -> None:
    descriptor = Descriptor(path=Path("/data/testdata"), name="testdata", type=FileType.DIRECTORY)

    assert descriptor.directory == Path("/data/testdata")


def test_to_record_is_plain_data() -> None:
    descriptor = Descriptor(path=Path("fixtures/b.txt"), name="b.txt", type=FileType.TEXT)

    assert descriptor.to_record() == {
        "path": str(Path("fixtures/b.txt")),
        "name": "b.txt",
        "type": "Text",
    }


def test_type_defaults_to_unknown() -> None:
    assert Descriptor(path=Path("x"), name="x").type is FileType.UNKNOWN
