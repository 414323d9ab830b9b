"""Rendering of C# accessor classes for layout documents."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from jinja2 import Environment, FileSystemLoader

from .models import GeneratedUnit, WidgetRecord

GENERATED_SUFFIX = ".g.cs"
CLASS_SUFFIX = "UI"

USINGS = ("Myra.Graphics2D.UI", "System")
ROOT_TYPE = "Widget"
LOOKUP_METHOD = "FindChildById"

TEMPLATE_NAME = "accessor.cs.j2"


def class_name_for(document_name: str) -> str:
    return f"{document_name}{CLASS_SUFFIX}"


def unit_filename_for(document_name: str) -> str:
    return f"{class_name_for(document_name)}{GENERATED_SUFFIX}"


def cs_string_literal(value: str) -> str:
    """Quote ``value`` as a regular C# string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _create_env(templates_dir: Path | None) -> Environment:
    directories = []
    if templates_dir:
        directories.append(str(templates_dir))
    directories.append(str(Path(__file__).with_name("templates")))
    env = Environment(
        loader=FileSystemLoader(directories),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["cs_string"] = cs_string_literal
    return env


class ClassSynthesizer:
    """Builds a partial class exposing one typed property per widget.

    ``templates_dir`` is searched before the bundled templates, so a project
    can override ``accessor.cs.j2`` without touching the package.
    """

    def __init__(self, templates_dir: Path | None = None) -> None:
        self._env = _create_env(templates_dir)

    def render(
        self, document_name: str, records: Sequence[WidgetRecord], namespace: str
    ) -> str:
        template = self._env.get_template(TEMPLATE_NAME)
        # Bindings use `as`, so a missing or mistyped widget leaves the property null.
        text = template.render(
            usings=USINGS,
            namespace=namespace,
            document_name=document_name,
            class_name=class_name_for(document_name),
            root_type=ROOT_TYPE,
            lookup_method=LOOKUP_METHOD,
            records=list(records),
        )
        return text.strip() + "\n"

    def synthesize(
        self, document_name: str, records: Sequence[WidgetRecord], namespace: str
    ) -> Optional[GeneratedUnit]:
        """Return the generated unit, or None when there is nothing to bind."""
        if not records:
            return None
        return GeneratedUnit(
            filename=unit_filename_for(document_name),
            text=self.render(document_name, records, namespace),
        )


__all__ = ["ClassSynthesizer", "class_name_for", "cs_string_literal", "unit_filename_for"]
