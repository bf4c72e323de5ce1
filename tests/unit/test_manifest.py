"""Unit tests for component_builder.manifest.load_section."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from component_builder.exceptions import MissingSectionError, NotFoundError, ParseError
from component_builder.manifest import load_section
from component_builder.models import ManifestRow


def test_load_section_returns_rows(tmp_path: Path, write_hda: Callable[..., Path]) -> None:
    path = write_hda(
        tmp_path / "manifest.hda",
        {"Manifest": (["entryType", "location"], [["component", "C/C.hda"]])},
    )
    rows = load_section(path, "Manifest")
    assert rows == [ManifestRow({"entryType": "component", "location": "C/C.hda"})]
    assert rows[0].is_component
    assert rows[0].location == "C/C.hda"


def test_rows_are_immutable(tmp_path: Path, write_hda: Callable[..., Path]) -> None:
    path = write_hda(
        tmp_path / "manifest.hda",
        {"Manifest": (["entryType", "location"], [["", "C/readme.txt"]])},
    )
    row = load_section(path, "Manifest")[0]
    with pytest.raises(TypeError):
        row.values["location"] = "elsewhere"  # type: ignore[index]
    assert row.entry_type == ""
    assert not row.is_component


def test_missing_columns_read_as_empty(tmp_path: Path, write_hda: Callable[..., Path]) -> None:
    path = write_hda(
        tmp_path / "C.hda",
        {"ResourceDefinition": (["filename"], [["resources/x.htm"]])},
    )
    row = load_section(path, "ResourceDefinition")[0]
    assert row.resource_type == ""
    assert row.filename == "resources/x.htm"


def test_missing_section(tmp_path: Path, write_hda: Callable[..., Path]) -> None:
    path = write_hda(tmp_path / "manifest.hda", {"Other": (["a"], [["1"]])})
    with pytest.raises(MissingSectionError, match="Resultset Manifest doesn't exist") as exc_info:
        load_section(path, "Manifest")
    assert exc_info.value.section == "Manifest"
    assert exc_info.value.path == str(path)


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(NotFoundError):
        load_section(tmp_path / "nope.hda", "Manifest")


def test_malformed_file(tmp_path: Path) -> None:
    path = tmp_path / "manifest.hda"
    path.write_text("@ResultSet Manifest\nnot-a-count\n", encoding="utf-8")
    with pytest.raises(ParseError):
        load_section(path, "Manifest")
