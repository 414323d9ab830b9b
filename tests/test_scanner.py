"""Tests for myragen.scanner."""

from __future__ import annotations

from pathlib import Path

import pytest

from myragen.scanner import ProjectScanner


def test_scan_returns_sorted_relative_posix_paths(project_builder) -> None:
    project_builder.write(
        {
            "Content/UI/TitleScreen.xml": "<Project />",
            "Content/UI/Menus/Main.xml": "<Project />",
            "Game.csproj": "<Project />",
        }
    )

    inputs = project_builder.scan()

    assert [item.path for item in inputs] == [
        "Content/UI/Menus/Main.xml",
        "Content/UI/TitleScreen.xml",
        "Game.csproj",
    ]


def test_scan_skips_build_and_vcs_directories(project_builder) -> None:
    project_builder.write(
        {
            "Content/UI/Title.xml": "<Project />",
            "bin/Debug/Content/UI/Title.xml": "<Project />",
            "obj/Content/UI/Title.xml": "<Project />",
            ".git/config.xml": "<x />",
        }
    )

    assert [item.path for item in project_builder.scan()] == ["Content/UI/Title.xml"]


def test_scan_honours_exclude_paths(project_builder) -> None:
    project_builder.write(
        {
            "Content/UI/Title.xml": "<Project />",
            "Content/UI/Drafts/Old.xml": "<Project />",
            "Content/UI/Scratch.tmp.xml": "<Project />",
        }
    )

    inputs = ProjectScanner().scan(project_builder.path(), ["Drafts/", "*.tmp.xml"])

    assert [item.path for item in inputs] == ["Content/UI/Title.xml"]


def test_scan_reads_text_lazily_and_strips_bom(project_builder) -> None:
    target = project_builder.path() / "Content" / "UI" / "Title.xml"
    target.parent.mkdir(parents=True)
    target.write_bytes(b'\xef\xbb\xbf<Project><Label Id="A" /></Project>')

    [candidate] = project_builder.scan()
    assert candidate.read_text() == '<Project><Label Id="A" /></Project>'

    target.write_bytes(b'<Project><Label Id="B" /></Project>')

    assert candidate.read_text() == '<Project><Label Id="B" /></Project>'


def test_scan_rejects_missing_directory(tmp_path: Path) -> None:
    missing = tmp_path / "missing"
    with pytest.raises(FileNotFoundError) as excinfo:
        ProjectScanner().scan(missing)
    assert str(missing) in str(excinfo.value)


def test_scan_rejects_file_root(tmp_path: Path) -> None:
    target = tmp_path / "file.xml"
    target.write_text("<Project />", encoding="utf-8")
    with pytest.raises(NotADirectoryError):
        ProjectScanner().scan(target)
