"""Project scanning that turns files on disk into candidate inputs."""

from __future__ import annotations

import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, List, Sequence

from .models import CandidateInput

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".vs",
    ".idea",
    ".venv",
    "bin",
    "obj",
    "node_modules",
    "__pycache__",
}


@dataclass
class ExcludeRule:
    """Represents an exclude pattern from .myragen.yml."""

    pattern: str
    directory_only: bool
    has_slash: bool

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if self.directory_only and not is_dir:
            return False
        if self.has_slash:
            return fnmatchcase(rel_path, self.pattern)
        return any(fnmatchcase(part, self.pattern) for part in rel_path.split("/"))


def _build_rule(pattern: str) -> ExcludeRule | None:
    pattern = pattern.strip().replace("\\", "/")
    if not pattern:
        return None
    directory_only = pattern.endswith("/")
    pattern = pattern.rstrip("/").lstrip("/")
    if not pattern:
        return None
    return ExcludeRule(pattern=pattern, directory_only=directory_only, has_slash="/" in pattern)


def _is_excluded(rel_path: str, is_dir: bool, rules: Sequence[ExcludeRule]) -> bool:
    return any(rule.matches(rel_path, is_dir) for rule in rules)


def _iter_files(root: Path, rules: Sequence[ExcludeRule]) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

        kept = []
        for name in dirnames:
            if name in _EXCLUDED_DIRS:
                continue
            rel_path = f"{rel_dir}/{name}" if rel_dir else name
            if _is_excluded(rel_path, True, rules):
                continue
            kept.append(name)
        dirnames[:] = kept

        for filename in filenames:
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            if _is_excluded(rel_path, False, rules):
                continue
            yield current_dir / filename


class ProjectScanner:
    """Walks a project directory to produce lazily-read candidate inputs."""

    def scan(self, root: str | Path, exclude_paths: Sequence[str] = ()) -> List[CandidateInput]:
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Project path not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Project path is not a directory: {root}")

        rules = [rule for rule in map(_build_rule, exclude_paths) if rule is not None]
        candidates = [
            CandidateInput.from_file(path.relative_to(root_path).as_posix(), path)
            for path in _iter_files(root_path, rules)
        ]
        candidates.sort(key=lambda candidate: candidate.path)
        return candidates


__all__ = ["ProjectScanner"]
