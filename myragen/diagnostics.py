"""Diagnostic descriptors reported by generation runs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .models import Diagnostic, Severity

PROCESSING_ERROR = "MYRA001"
RUN_STARTED = "MYRA002"
DOCUMENTS_SELECTED = "MYRA003"
CLASS_GENERATED = "MYRA004"
NO_WIDGETS = "MYRA005"
DUPLICATE_IDS = "MYRA006"
UNEXPECTED_FAILURE = "MYRA999"


@dataclass(frozen=True)
class DiagnosticDescriptor:
    code: str
    title: str
    message_format: str
    severity: Severity


DESCRIPTORS: Dict[str, DiagnosticDescriptor] = {
    descriptor.code: descriptor
    for descriptor in (
        DiagnosticDescriptor(
            PROCESSING_ERROR,
            "Error generating UI code",
            "Error processing {0}: {1}",
            Severity.WARNING,
        ),
        DiagnosticDescriptor(
            RUN_STARTED,
            "Generator executing",
            "MyraUIGenerator executing. Namespace: {0}, Directory: {1}, AdditionalFiles count: {2}",
            Severity.INFO,
        ),
        DiagnosticDescriptor(
            DOCUMENTS_SELECTED,
            "XML files found",
            "Found {0} XML files matching directory '{1}'",
            Severity.INFO,
        ),
        DiagnosticDescriptor(
            CLASS_GENERATED,
            "Generated UI class",
            "Generated {0}UI with {1} widgets",
            Severity.INFO,
        ),
        DiagnosticDescriptor(
            NO_WIDGETS,
            "No widgets found",
            "No widgets with Id found in {0}.xml",
            Severity.INFO,
        ),
        DiagnosticDescriptor(
            DUPLICATE_IDS,
            "Duplicate widget Id",
            "{0}.xml declares duplicate Id values: {1}",
            Severity.WARNING,
        ),
        DiagnosticDescriptor(
            UNEXPECTED_FAILURE,
            "Generator exception",
            "MyraUIGenerator threw an exception: {0}",
            Severity.ERROR,
        ),
    )
}


def make_diagnostic(code: str, *args: object) -> Diagnostic:
    """Build a diagnostic from the descriptor table."""
    try:
        descriptor = DESCRIPTORS[code]
    except KeyError as exc:
        raise ValueError(f"Unknown diagnostic code: {code}") from exc
    return Diagnostic(
        code=descriptor.code,
        severity=descriptor.severity,
        title=descriptor.title,
        message_format=descriptor.message_format,
        args=tuple(str(arg) for arg in args),
    )


__all__ = [
    "CLASS_GENERATED",
    "DESCRIPTORS",
    "DOCUMENTS_SELECTED",
    "DUPLICATE_IDS",
    "DiagnosticDescriptor",
    "NO_WIDGETS",
    "PROCESSING_ERROR",
    "RUN_STARTED",
    "UNEXPECTED_FAILURE",
    "make_diagnostic",
]
