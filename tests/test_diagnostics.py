"""Tests for myragen.diagnostics and the result model."""

from __future__ import annotations

import pytest

from myragen.diagnostics import DESCRIPTORS, make_diagnostic
from myragen.models import GeneratedUnit, GenerationResult, Severity


def test_descriptor_table_keeps_reference_codes() -> None:
    assert set(DESCRIPTORS) == {
        "MYRA001",
        "MYRA002",
        "MYRA003",
        "MYRA004",
        "MYRA005",
        "MYRA006",
        "MYRA999",
    }
    assert DESCRIPTORS["MYRA001"].severity is Severity.WARNING
    assert DESCRIPTORS["MYRA999"].severity is Severity.ERROR
    assert all(DESCRIPTORS[code].severity is Severity.INFO for code in ("MYRA002", "MYRA003", "MYRA004", "MYRA005"))


def test_make_diagnostic_formats_message() -> None:
    diagnostic = make_diagnostic("MYRA001", "Content/UI/Bad.xml", ValueError("unclosed token"))

    assert diagnostic.args == ("Content/UI/Bad.xml", "unclosed token")
    assert diagnostic.message == "Error processing Content/UI/Bad.xml: unclosed token"
    assert diagnostic.to_dict() == {
        "code": "MYRA001",
        "severity": "warning",
        "title": "Error generating UI code",
        "message": "Error processing Content/UI/Bad.xml: unclosed token",
        "args": ["Content/UI/Bad.xml", "unclosed token"],
    }
    assert str(diagnostic) == "MYRA001 [warning] Error processing Content/UI/Bad.xml: unclosed token"


def test_make_diagnostic_rejects_unknown_code() -> None:
    with pytest.raises(ValueError):
        make_diagnostic("MYRA404")


def test_generation_result_helpers() -> None:
    result = GenerationResult(
        units=[GeneratedUnit("AUI.g.cs", "a")],
        diagnostics=[make_diagnostic("MYRA004", "A", 1), make_diagnostic("MYRA001", "B.xml", "bad")],
    )

    assert result.unit("AUI.g.cs") is not None
    assert result.unit("BUI.g.cs") is None
    assert [diag.code for diag in result.by_code("MYRA004")] == ["MYRA004"]
    assert result.has_warnings
    assert not result.has_errors
