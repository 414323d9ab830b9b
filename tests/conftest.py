from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.layout_builder import LayoutBuilder, ProjectBuilder


@pytest.fixture
def layout() -> LayoutBuilder:
    """Provide a fresh layout document builder."""
    return LayoutBuilder()


@pytest.fixture
def project_builder(tmp_path: Path) -> ProjectBuilder:
    """Provide a reusable project builder rooted at the pytest tmp_path."""
    return ProjectBuilder(tmp_path)
