"""Core data models shared across myragen components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class CandidateInput:
    """A build input that may or may not be a layout document."""

    path: str
    loader: Callable[[], Optional[str]] = field(repr=False, compare=False)

    def read_text(self) -> Optional[str]:
        return self.loader()

    @classmethod
    def from_text(cls, path: str, text: Optional[str]) -> "CandidateInput":
        return cls(path=path, loader=lambda: text)

    @classmethod
    def from_file(cls, path: str, file_path: Path) -> "CandidateInput":
        # utf-8-sig drops the BOM editors like to prepend to XML files
        return cls(path=path, loader=lambda: file_path.read_text(encoding="utf-8-sig"))


@dataclass(frozen=True)
class WidgetRecord:
    """One identified widget declaration extracted from a layout document."""

    identifier: str
    element_name: str
    field_name: str = ""

    def __post_init__(self) -> None:
        if not self.identifier:
            raise ValueError("WidgetRecord requires a non-empty identifier")
        if not self.field_name:
            object.__setattr__(self, "field_name", self.identifier)


@dataclass(frozen=True)
class GeneratedUnit:
    """Generated source file ready to hand to the host build."""

    filename: str
    text: str


@dataclass(frozen=True)
class ResolvedConfig:
    """Configuration values computed once per generation run."""

    namespace: str
    directory_pattern: str
    duplicate_ids: str = "keep"


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Diagnostic:
    """Structured message reported by a generation run."""

    code: str
    severity: Severity
    title: str
    message_format: str
    args: Tuple[str, ...] = ()

    @property
    def message(self) -> str:
        return self.message_format.format(*self.args)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "severity": self.severity.value,
            "title": self.title,
            "message": self.message,
            "args": list(self.args),
        }

    def __str__(self) -> str:
        return f"{self.code} [{self.severity.value}] {self.message}"


@dataclass
class GenerationResult:
    """Everything a single generation pass produced."""

    units: List[GeneratedUnit] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    config: Optional[ResolvedConfig] = None

    @property
    def has_errors(self) -> bool:
        return any(diag.severity is Severity.ERROR for diag in self.diagnostics)

    @property
    def has_warnings(self) -> bool:
        return any(diag.severity is Severity.WARNING for diag in self.diagnostics)

    def by_code(self, code: str) -> List[Diagnostic]:
        return [diag for diag in self.diagnostics if diag.code == code]

    def unit(self, filename: str) -> Optional[GeneratedUnit]:
        for unit in self.units:
            if unit.filename == filename:
                return unit
        return None
