"""Writing generated units to disk."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from .logging import get_logger
from .models import GeneratedUnit

logger = get_logger("output")


def write_units(
    units: Iterable[GeneratedUnit], output_dir: Path, *, dry_run: bool = False
) -> List[Path]:
    """Write each unit under ``output_dir`` and return the target paths.

    Files whose content is already identical are left untouched.
    """
    targets: List[Path] = []
    for unit in units:
        target = output_dir / unit.filename
        targets.append(target)
        if dry_run:
            logger.info("Would write %s", target)
            continue
        if target.exists() and target.read_text(encoding="utf-8") == unit.text:
            logger.debug("Unchanged %s", target)
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(unit.text, encoding="utf-8")
        logger.info("Wrote %s", target)
    return targets


__all__ = ["write_units"]
