"""Tests for myragen.output."""

from __future__ import annotations

import os
from pathlib import Path

from myragen.models import GeneratedUnit
from myragen.output import write_units


def test_write_units_creates_directory_and_files(tmp_path: Path) -> None:
    output_dir = tmp_path / "Generated"
    units = [GeneratedUnit("TitleUI.g.cs", "class A {}\n"), GeneratedUnit("MenuUI.g.cs", "class B {}\n")]

    written = write_units(units, output_dir)

    assert written == [output_dir / "TitleUI.g.cs", output_dir / "MenuUI.g.cs"]
    assert (output_dir / "TitleUI.g.cs").read_text(encoding="utf-8") == "class A {}\n"


def test_write_units_dry_run_writes_nothing(tmp_path: Path) -> None:
    output_dir = tmp_path / "Generated"
    written = write_units([GeneratedUnit("TitleUI.g.cs", "x")], output_dir, dry_run=True)

    assert written == [output_dir / "TitleUI.g.cs"]
    assert not output_dir.exists()


def test_write_units_leaves_identical_files_untouched(tmp_path: Path) -> None:
    target = tmp_path / "TitleUI.g.cs"
    target.write_text("same", encoding="utf-8")
    os.utime(target, ns=(1_000_000_000, 1_000_000_000))

    write_units([GeneratedUnit("TitleUI.g.cs", "same")], tmp_path)
    assert target.stat().st_mtime_ns == 1_000_000_000

    write_units([GeneratedUnit("TitleUI.g.cs", "changed")], tmp_path)
    assert target.read_text(encoding="utf-8") == "changed"
