"""Extraction of identified widgets from Myra layout documents."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections import Counter
from typing import List, Sequence

from .models import WidgetRecord

ID_ATTRIBUTE = "Id"


class DocumentParseError(ValueError):
    """Raised when a layout document is not well-formed XML."""

    def __init__(self, message: str, line: int | None = None, column: int | None = None) -> None:
        super().__init__(message)
        self.line = line
        self.column = column


def _local_name(tag: str) -> str:
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag


class WidgetExtractor:
    """Collects every element carrying a non-empty ``Id`` attribute."""

    def __init__(self, id_attribute: str = ID_ATTRIBUTE) -> None:
        self.id_attribute = id_attribute

    def parse(self, text: str) -> ET.Element:
        try:
            return ET.fromstring(text)
        except ET.ParseError as exc:
            line, column = getattr(exc, "position", (None, None))
            raise DocumentParseError(str(exc), line=line, column=column) from exc

    def extract(self, root: ET.Element) -> List[WidgetRecord]:
        records: List[WidgetRecord] = []
        # iter() walks depth-first in document order and includes the root.
        for element in root.iter():
            if not isinstance(element.tag, str):
                continue
            identifier = element.get(self.id_attribute)
            if not identifier:
                continue
            records.append(
                WidgetRecord(identifier=identifier, element_name=_local_name(element.tag))
            )
        return records

    def extract_text(self, text: str) -> List[WidgetRecord]:
        return self.extract(self.parse(text))


def find_duplicates(records: Sequence[WidgetRecord]) -> List[str]:
    """Return identifiers declared more than once, in first-seen order."""
    counts = Counter(record.identifier for record in records)
    seen: List[str] = []
    for record in records:
        if counts[record.identifier] > 1 and record.identifier not in seen:
            seen.append(record.identifier)
    return seen


def apply_duplicate_policy(records: Sequence[WidgetRecord], policy: str) -> List[WidgetRecord]:
    """Apply the duplicate-Id policy: ``keep`` everything or only the ``first``."""
    if policy == "keep":
        return list(records)
    if policy == "first":
        unique: List[WidgetRecord] = []
        seen = set()
        for record in records:
            if record.identifier in seen:
                continue
            seen.add(record.identifier)
            unique.append(record)
        return unique
    raise ValueError(f"Unknown duplicate Id policy: {policy}")


__all__ = [
    "DocumentParseError",
    "WidgetExtractor",
    "apply_duplicate_policy",
    "find_duplicates",
]
