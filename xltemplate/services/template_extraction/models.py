"""Data models used by the template extraction service."""

from __future__ import annotations

import math
from numbers import Real
from pathlib import Path
from typing import Dict, List

import pandas as pd
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

# Missing-value marker for absent/blank cells; compares equal to itself through ``is_missing``.
MISSING = float("nan")

NUMBER = "number"
STRING = "string"

ExtractedRecord = Dict[str, pd.DataFrame]


def is_missing(value: object) -> bool:
    """True for ``None`` and NaN, the two forms an absent cell takes once cached."""

    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def is_number(value: object) -> bool:
    """True for real numeric cell values; booleans are not numbers here."""

    return isinstance(value, Real) and not isinstance(value, bool)


class VariableSpec(BaseModel):
    """A named range to extract from one sheet."""

    model_config = ConfigDict(frozen=True)

    name: str
    sheet: str
    range: str
    type: str = NUMBER


class FixedSpec(BaseModel):
    """Ranges of one sheet that must match the blank template exactly."""

    model_config = ConfigDict(frozen=True)

    sheet: str
    ranges: List[str] = Field(default_factory=list)

    @field_validator("ranges", mode="before")
    @classmethod
    def _single_range(cls, value: object) -> object:
        if isinstance(value, str):
            return [value]
        return value


class TemplateDefinition(BaseModel):
    """Declared layout of one spreadsheet template."""

    model_config = ConfigDict(frozen=True)

    variables: List[VariableSpec] = Field(default_factory=list)
    fixed_values: List[FixedSpec] = Field(
        default_factory=list,
        validation_alias=AliasChoices("fixed_values", "fixedValues"),
    )
    blank_file: Path = Field(validation_alias=AliasChoices("blank_file", "blankFile"))

    @model_validator(mode="after")
    def _unique_names(self) -> "TemplateDefinition":
        seen: set[str] = set()
        duplicates = []
        for var in self.variables:
            if var.name in seen:
                duplicates.append(var.name)
            seen.add(var.name)
        if duplicates:
            raise ValueError(f"duplicate variable names: {', '.join(sorted(set(duplicates)))}")
        return self

    def sheet_names(self) -> List[str]:
        """Every sheet referenced by variables or fixed values, first-seen order."""

        names = [var.sheet for var in self.variables] + [fixed.sheet for fixed in self.fixed_values]
        return list(dict.fromkeys(names))


__all__ = [
    "MISSING",
    "NUMBER",
    "STRING",
    "ExtractedRecord",
    "FixedSpec",
    "TemplateDefinition",
    "VariableSpec",
    "is_missing",
    "is_number",
]
