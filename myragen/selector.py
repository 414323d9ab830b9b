"""Selection of layout documents among the build inputs."""

from __future__ import annotations

from typing import Iterable, List

from .models import CandidateInput

LAYOUT_SUFFIX = ".xml"


def normalise_separators(path: str) -> str:
    return path.replace("\\", "/")


class DocumentSelector:
    """Keeps inputs that look like layout documents under the configured directory.

    Matching is a case-insensitive substring test, so a pattern of ``UI``
    also accepts ``BuildUI/Menu.xml``.
    """

    def __init__(self, suffix: str = LAYOUT_SUFFIX) -> None:
        self.suffix = suffix.lower()

    def matches(self, path: str, directory_pattern: str) -> bool:
        if not path.lower().endswith(self.suffix):
            return False
        normalised_path = normalise_separators(path).lower()
        normalised_pattern = normalise_separators(directory_pattern).lower()
        return normalised_pattern in normalised_path

    def select(
        self, inputs: Iterable[CandidateInput], directory_pattern: str
    ) -> List[CandidateInput]:
        return [candidate for candidate in inputs if self.matches(candidate.path, directory_pattern)]
