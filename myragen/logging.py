"""Logging utilities for myragen commands."""

from __future__ import annotations

import logging
from pathlib import Path

from .models import Diagnostic, Severity

_LOGGER_NAME = "myragen"

_LEVEL_BY_SEVERITY = {
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


def level_for(severity: Severity) -> int:
    return _LEVEL_BY_SEVERITY.get(severity, logging.INFO)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the myragen hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *,
    verbose: bool = False,
    console_severity: Severity = Severity.WARNING,
    log_file: Path | None = None,
) -> logging.Logger:
    """Route diagnostics to the console and an optional file sink.

    The console shows diagnostics at ``console_severity`` and above; verbose
    mode shows every diagnostic plus debug traces. The file sink always
    records the full diagnostic stream.
    """
    console_level = logging.DEBUG if verbose else level_for(console_severity)
    file_level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(min(console_level, file_level))
    logger.propagate = False

    # Repeated CLI invocations in one process must not stack handlers.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(console_level)
    stream_handler.setFormatter(logging.Formatter("[myragen] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(file_level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


def log_diagnostic(logger: logging.Logger, diagnostic: Diagnostic) -> None:
    """Mirror a diagnostic into the log at the level matching its severity."""
    logger.log(level_for(diagnostic.severity), "%s %s", diagnostic.code, diagnostic.message)


__all__ = ["configure_logging", "get_logger", "level_for", "log_diagnostic"]
