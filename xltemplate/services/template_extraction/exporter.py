"""Export extracted records to JSON-ready data or an Excel workbook."""

from __future__ import annotations

import re
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Dict, Iterable, List

from openpyxl import Workbook

from .models import ExtractedRecord, is_missing

# Characters Excel refuses in worksheet titles.
_INVALID_TITLE_CHARS = re.compile(r"[\\/?*\[\]:]")
_MAX_TITLE_LEN = 31


def _cell(value: object) -> Any:
    if is_missing(value):
        return None
    if isinstance(value, (datetime, date, time)):
        # pd.Timestamp is a datetime subclass
        return value.isoformat()
    if hasattr(value, "item"):
        # numpy scalars
        return value.item()
    return value


def sheet_titles(names: Iterable[str]) -> Dict[str, str]:
    """Map variable names to unique, Excel-safe worksheet titles."""

    titles: Dict[str, str] = {}
    used: set[str] = set()
    for name in names:
        base = _INVALID_TITLE_CHARS.sub("_", name).strip("'") or "variable"
        title = base[:_MAX_TITLE_LEN]
        counter = 1
        while title.lower() in used:
            counter += 1
            suffix = f"_{counter}"
            title = base[: _MAX_TITLE_LEN - len(suffix)] + suffix
        used.add(title.lower())
        titles[name] = title
    return titles


def record_to_json(record: ExtractedRecord) -> Dict[str, List[List[Any]]]:
    """Convert value grids to nested lists; missing cells become ``None``."""

    return {
        name: [[_cell(value) for value in row] for row in grid.itertuples(index=False, name=None)]
        for name, grid in record.items()
    }


def export_record(record: ExtractedRecord, path: Path) -> Path:
    """Write each variable to its own worksheet, top-left aligned.

    When a title had to be changed to satisfy Excel, an ``_index`` sheet
    lists the variable name next to the worksheet holding it.
    """

    path.parent.mkdir(parents=True, exist_ok=True)
    wb = Workbook()
    placeholder = wb.active
    titles = sheet_titles(record)
    for name, grid in record.items():
        ws = wb.create_sheet(title=titles[name])
        for row in grid.itertuples(index=False, name=None):
            ws.append([_cell(value) for value in row])
    if any(name != title for name, title in titles.items()):
        index = wb.create_sheet(title="_index", index=0)
        index.append(["variable", "sheet"])
        for name, title in titles.items():
            index.append([name, title])
    if record:
        wb.remove(placeholder)
    wb.save(path)
    return path


__all__ = ["export_record", "record_to_json", "sheet_titles"]
