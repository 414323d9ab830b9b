"""Tests for myragen.logging."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from myragen.diagnostics import CLASS_GENERATED, PROCESSING_ERROR, make_diagnostic
from myragen.logging import configure_logging, get_logger, level_for, log_diagnostic
from myragen.models import Severity


@pytest.fixture(autouse=True)
def _restore_myragen_logger():
    logger = logging.getLogger("myragen")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate


def _emit_both() -> None:
    logger = get_logger("test")
    log_diagnostic(logger, make_diagnostic(CLASS_GENERATED, "Menu", 2))
    log_diagnostic(logger, make_diagnostic(PROCESSING_ERROR, "Content/UI/Bad.xml", "boom"))


def test_level_for_maps_every_severity() -> None:
    assert level_for(Severity.INFO) == logging.INFO
    assert level_for(Severity.WARNING) == logging.WARNING
    assert level_for(Severity.ERROR) == logging.ERROR


def test_console_hides_informational_diagnostics_by_default(capsys) -> None:
    configure_logging()
    _emit_both()

    err = capsys.readouterr().err
    assert "MYRA004" not in err
    assert "[myragen] WARNING MYRA001 Error processing Content/UI/Bad.xml: boom" in err


def test_verbose_console_shows_every_diagnostic(capsys) -> None:
    configure_logging(verbose=True)
    _emit_both()

    err = capsys.readouterr().err
    assert "[myragen] INFO MYRA004 Generated MenuUI with 2 widgets" in err
    assert "MYRA001" in err


def test_log_file_records_informational_diagnostics(tmp_path: Path, capsys) -> None:
    log_file = tmp_path / "myragen.log"
    configure_logging(log_file=log_file)
    _emit_both()
    for handler in logging.getLogger("myragen").handlers:
        handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "INFO myragen.test: MYRA004" in text
    assert "WARNING myragen.test: MYRA001" in text
    assert "MYRA004" not in capsys.readouterr().err


def test_reconfiguring_does_not_stack_handlers() -> None:
    configure_logging()
    configure_logging(verbose=True)

    assert len(logging.getLogger("myragen").handlers) == 1
