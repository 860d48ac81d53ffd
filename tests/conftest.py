from __future__ import annotations

import faulthandler
import sys
from pathlib import Path
from typing import Callable, Dict, Mapping

import pytest
from openpyxl import Workbook

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

faulthandler.enable()  # Ensure crashes emit tracebacks.

from xltemplate.core import logger as core_logger
from xltemplate.services.template_extraction.models import TemplateDefinition

SheetCells = Mapping[str, Mapping[str, object]]

BLANK_CELLS: Dict[str, Dict[str, object]] = {
    "Data": {
        "A1": "Sample Report",
        "A2": "Operator",
        "A3": "Label",
        "B3": "x",
        "C3": "y",
        "D3": "z",
        "A4": "r1",
        "A5": "r2",
    },
    "Notes": {"A1": "Notes"},
}


def write_workbook(path: Path, sheets: SheetCells) -> Path:
    """Create an .xlsx at ``path`` with ``{sheet: {"B3": value}}`` contents."""

    wb = Workbook()
    wb.remove(wb.active)
    for title, cells in sheets.items():
        ws = wb.create_sheet(title=title)
        for address, value in cells.items():
            ws[address] = value
    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(path)
    return path


def filled_cells(**overrides: Dict[str, object]) -> Dict[str, Dict[str, object]]:
    """Blank contents plus well-formed answers; ``overrides`` patch per sheet."""

    sheets = {name: dict(cells) for name, cells in BLANK_CELLS.items()}
    sheets["Data"].update({"B2": "J. Smith", "B4": 1.5, "C4": 2, "D4": 3.25, "B5": 4, "C5": 5, "D5": 6})
    sheets["Notes"].update({"A2": "calibrated", "A3": 42})
    for name, cells in overrides.items():
        sheets.setdefault(name, {}).update(cells)
    return sheets


@pytest.fixture(autouse=True)
def _isolated_logs(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep log files out of the home directory."""

    monkeypatch.setenv(core_logger.LOG_DIR_ENV, str(tmp_path_factory.mktemp("logs")))
    yield
    core_logger.reset_logger()


@pytest.fixture()
def make_workbook(tmp_path: Path) -> Callable[[str, SheetCells], Path]:
    def _make(name: str, sheets: SheetCells) -> Path:
        return write_workbook(tmp_path / name, sheets)

    return _make


@pytest.fixture()
def blank_workbook(make_workbook: Callable[[str, SheetCells], Path]) -> Path:
    return make_workbook("blank.xlsx", BLANK_CELLS)


@pytest.fixture()
def template(blank_workbook: Path) -> TemplateDefinition:
    return TemplateDefinition.model_validate(
        {
            "blank_file": str(blank_workbook),
            "variables": [
                {"name": "operator", "sheet": "Data", "range": "B2", "type": "string"},
                {"name": "values", "sheet": "Data", "range": "B4:D5"},
                {"name": "comments", "sheet": "Notes", "range": "A2:A3", "type": "string"},
            ],
            "fixed_values": [
                {"sheet": "Data", "ranges": ["A1:D1", "A2", "A3:D3", "A4:A5"]},
                {"sheet": "Notes", "ranges": ["A1"]},
            ],
        }
    )


@pytest.fixture()
def make_filled(make_workbook: Callable[[str, SheetCells], Path]) -> Callable[..., Path]:
    def _make(name: str = "filled.xlsx", **overrides: Dict[str, object]) -> Path:
        return make_workbook(name, filled_cells(**overrides))

    return _make
