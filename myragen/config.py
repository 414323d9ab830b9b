"""Configuration resolution for myragen (.myragen.yml and tiered options)."""

from __future__ import annotations

from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

from .models import CandidateInput, ResolvedConfig

CONFIG_FILENAME = ".myragen.yml"

KEY_PREFIX = "myra_ui_generator."
BUILD_PROPERTY_PREFIX = "build_property."
BUILD_PROPERTY_KEY_PREFIX = "MyraUIGenerator_"

NAMESPACE_KEY = "myra_ui_generator.namespace"
XML_DIRECTORY_KEY = "myra_ui_generator.xml_directory"
DUPLICATE_IDS_KEY = "myra_ui_generator.duplicate_ids"

DEFAULT_NAMESPACE = "GeneratedUI"
DEFAULT_XML_DIRECTORY = "Content/UI"
DEFAULT_DUPLICATE_IDS = "keep"

DUPLICATE_POLICIES = ("keep", "first")


class ConfigError(RuntimeError):
    """Raised when the configuration file or an option value is invalid."""


def build_property_key(key: str) -> str:
    """Return the MSBuild-style global option name for a canonical key."""
    return BUILD_PROPERTY_PREFIX + key.replace(KEY_PREFIX, BUILD_PROPERTY_KEY_PREFIX)


def _normalise_path(path: str) -> str:
    return path.replace("\\", "/")


def _section_matches(pattern: str, path: str) -> bool:
    pattern = _normalise_path(pattern).lstrip("/")
    target = _normalise_path(path)
    if "/" not in pattern:
        return fnmatchcase(target.rsplit("/", 1)[-1], pattern)
    if fnmatchcase(target, pattern):
        return True
    # Absolute or deeper paths still match a project-relative section.
    return fnmatchcase(target, f"*/{pattern}")


@dataclass
class GeneratorOptions:
    """Explicit three-tier option source handed to the orchestrator.

    ``global_options`` carries both canonical keys and the mangled
    ``build_property.*`` keys; ``file_options`` maps a path or glob to the
    options scoped to matching inputs.
    """

    global_options: Dict[str, str] = field(default_factory=dict)
    file_options: Dict[str, Dict[str, str]] = field(default_factory=dict)

    def get_global(self, key: str) -> Optional[str]:
        return self.global_options.get(key)

    def options_for(self, path: str) -> Dict[str, str]:
        merged: Dict[str, str] = {}
        for pattern, values in self.file_options.items():
            if _section_matches(pattern, path):
                merged.update(values)
        return merged

    def with_build_properties(self, properties: Mapping[str, str]) -> "GeneratorOptions":
        global_options = dict(self.global_options)
        for name, value in properties.items():
            global_options[f"{BUILD_PROPERTY_PREFIX}{name}"] = value
        return GeneratorOptions(
            global_options=global_options,
            file_options={key: dict(value) for key, value in self.file_options.items()},
        )

    def with_global_options(self, options: Mapping[str, Optional[str]]) -> "GeneratorOptions":
        global_options = dict(self.global_options)
        for key, value in options.items():
            if value is not None:
                global_options[key] = value
        return GeneratorOptions(
            global_options=global_options,
            file_options={key: dict(value) for key, value in self.file_options.items()},
        )


class ConfigResolver:
    """Resolves generator settings from the tiered option sources."""

    def __init__(self, options: GeneratorOptions | None = None) -> None:
        self.options = options or GeneratorOptions()

    def get_value(
        self, key: str, default: str, inputs: Sequence[CandidateInput] = ()
    ) -> str:
        """Return the first non-blank value for ``key`` or ``default``."""
        value = self.options.get_global(key)
        if value is not None and value.strip():
            return value

        value = self.options.get_global(build_property_key(key))
        if value is not None and value.strip():
            return value

        for candidate in inputs:
            value = self.options.options_for(candidate.path).get(key)
            if value is not None and value.strip():
                return value

        return default

    def resolve(self, inputs: Sequence[CandidateInput] = ()) -> ResolvedConfig:
        namespace = self.get_value(NAMESPACE_KEY, DEFAULT_NAMESPACE, inputs)
        directory = self.get_value(XML_DIRECTORY_KEY, DEFAULT_XML_DIRECTORY, inputs)
        policy = self.get_value(DUPLICATE_IDS_KEY, DEFAULT_DUPLICATE_IDS, inputs).strip().lower()
        if policy not in DUPLICATE_POLICIES:
            allowed = ", ".join(DUPLICATE_POLICIES)
            raise ConfigError(f"Unknown {DUPLICATE_IDS_KEY} policy '{policy}' (expected one of: {allowed})")
        return ResolvedConfig(
            namespace=namespace,
            directory_pattern=directory,
            duplicate_ids=policy,
        )


@dataclass
class ProjectConfig:
    """Represents the settings defined in .myragen.yml."""

    root: Path
    options: GeneratorOptions = field(default_factory=GeneratorOptions)
    output_dir: Optional[Path] = None
    exclude_paths: List[str] = field(default_factory=list)


def load_config(config_path: Path) -> ProjectConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ProjectConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    global_options = _as_str_dict(data.get("options"))
    options = GeneratorOptions(global_options=global_options)
    options = options.with_build_properties(_as_str_dict(data.get("build_properties")))

    files_data = _as_dict(data.get("files"))
    for pattern, section in files_data.items():
        values = _as_str_dict(section)
        if values:
            options.file_options[str(pattern)] = values

    output_dir_str = _as_str(data.get("output_dir"))
    output_dir = root / output_dir_str if output_dir_str else None

    return ProjectConfig(
        root=root,
        options=options,
        output_dir=output_dir,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_str_dict(value: Any) -> Dict[str, str]:
    result: Dict[str, str] = {}
    for key, item in _as_dict(value).items():
        text = _as_str(item)
        if text is not None:
            result[str(key)] = text
    return result


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ConfigResolver",
    "DEFAULT_NAMESPACE",
    "DEFAULT_XML_DIRECTORY",
    "GeneratorOptions",
    "ProjectConfig",
    "build_property_key",
    "load_config",
]
