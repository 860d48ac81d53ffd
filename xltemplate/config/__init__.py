"""Configuration helpers for template definition files.

Template definitions live in YAML next to their blank workbook::

    blank_file: blank.xlsx
    variables:
      - {name: dose, sheet: Data, range: "B3:D5"}
      - {name: operator, sheet: Data, range: B1, type: string}
    fixed_values:
      - sheet: Data
        ranges: ["A1:D2", "A3:A5"]

A relative ``blank_file`` is resolved against the YAML file's directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import ValidationError

from xltemplate.core.errors import ConfigError
from xltemplate.services.template_extraction.models import TemplateDefinition


def load_template(path: str | Path) -> TemplateDefinition:
    """Load and validate a template definition YAML file."""

    template_path = Path(path)
    raw = _load_yaml(template_path)
    blank_key = next((key for key in ("blank_file", "blankFile") if key in raw), None)
    if blank_key is None:
        raise ConfigError(f"Template {template_path} does not name a blank_file")
    blank = Path(str(raw[blank_key])).expanduser()
    if not blank.is_absolute():
        raw[blank_key] = str(template_path.resolve().parent / blank)
    try:
        return TemplateDefinition.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid template definition {template_path}: {exc}") from exc


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Template definition not found: {path}")
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigError("Template definition must be a mapping")
    return data


__all__ = ["load_template"]
