"""Tests for template integrity checking against the blank workbook."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from xltemplate.core.errors import (
    MissingSheetsError,
    MissingTemplateFileError,
    MissingTemplateSheetError,
    ModifiedTemplateError,
    TemplateConfigError,
)
from xltemplate.core.session import Session
from xltemplate.services.template_extraction.integrity import check_template_integrity, ranges_equal
from xltemplate.services.template_extraction.models import MISSING, TemplateDefinition


def _grid(rows: list[list[object]]) -> pd.DataFrame:
    return pd.DataFrame(rows, dtype=object)


def test_ranges_equal_matches_identical_content() -> None:
    assert ranges_equal(_grid([[1, "a"], [MISSING, 2.5]]), _grid([[1.0, "a"], [MISSING, 2.5]]))


def test_ranges_equal_requires_same_shape() -> None:
    assert not ranges_equal(_grid([[1, 2]]), _grid([[1], [2]]))


@pytest.mark.parametrize(
    ("left", "right"),
    [
        (MISSING, 3.0),
        (3.0, MISSING),
        (MISSING, "x"),
        ("x", None),
        ("Label", "Label "),
        (1, "1"),
        (2, 3),
    ],
)
def test_ranges_equal_flags_cell_differences(left: object, right: object) -> None:
    assert not ranges_equal(_grid([[left]]), _grid([[right]]))


def test_missing_forms_compare_equal() -> None:
    assert ranges_equal(_grid([[None, MISSING]]), _grid([[MISSING, None]]))


def test_intact_template_passes(template: TemplateDefinition, make_filled) -> None:
    session = Session()

    sheets, cache = check_template_integrity(make_filled(), template, session)

    assert sheets == ["Data", "Notes"]
    assert set(cache) == {"Data", "Notes"}
    assert session.codes() == ["ValidSheets", "ValidTemplate"]


def test_single_modified_range_is_reported(template: TemplateDefinition, make_filled) -> None:
    session = Session()
    workbook = make_filled(Data={"C3": "Y"})

    with pytest.raises(ModifiedTemplateError) as excinfo:
        check_template_integrity(workbook, template, session)

    warnings = session.warnings
    assert [w.code for w in warnings] == ["ModifiedTemplateRange"]
    assert "sheet 'Data' range A3:D3" in warnings[0].message
    assert excinfo.value.violations == (warnings[0].message,)


def test_every_modified_range_is_reported(template: TemplateDefinition, make_filled) -> None:
    session = Session()
    workbook = make_filled(Data={"A1": "Other Report", "A5": None}, Notes={"A1": "Remarks"})

    with pytest.raises(ModifiedTemplateError) as excinfo:
        check_template_integrity(workbook, template, session)

    assert len(excinfo.value.violations) == 3
    messages = " ".join(w.message for w in session.warnings)
    assert "range A1:D1" in messages
    assert "range A4:A5" in messages
    assert "sheet 'Notes' range A1" in messages


def test_text_typed_into_blank_fixed_cell_is_a_modification(template: TemplateDefinition, make_filled) -> None:
    workbook = make_filled(Data={"D1": "extra"})

    with pytest.raises(ModifiedTemplateError):
        check_template_integrity(workbook, template, Session())


def test_missing_target_sheets_are_aggregated(template: TemplateDefinition, make_workbook) -> None:
    workbook = make_workbook("filled.xlsx", {"Other": {"A1": 1}})

    with pytest.raises(MissingSheetsError) as excinfo:
        check_template_integrity(workbook, template, Session())

    assert excinfo.value.sheets == ("Data", "Notes")


def test_missing_blank_file_is_configuration_fault(template: TemplateDefinition, make_filled, tmp_path: Path) -> None:
    broken = template.model_copy(update={"blank_file": tmp_path / "gone.xlsx"})

    with pytest.raises(MissingTemplateFileError) as excinfo:
        check_template_integrity(make_filled(), broken, Session())

    assert isinstance(excinfo.value, TemplateConfigError)


def test_blank_missing_sheet_is_configuration_fault(template: TemplateDefinition, make_filled, make_workbook) -> None:
    partial_blank = make_workbook("partial_blank.xlsx", {"Data": {"A1": "Sample Report"}})
    broken = template.model_copy(update={"blank_file": partial_blank})

    with pytest.raises(MissingTemplateSheetError) as excinfo:
        check_template_integrity(make_filled(), broken, Session())

    assert "Notes" in str(excinfo.value)
