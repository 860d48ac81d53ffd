"""Workbook reading for template extraction.

RESPONSIBILITIES
- Load one worksheet via openpyxl and return its raw cell values as a DataFrame.
- Keep numbers and text as the workbook stores them (cached formula results).
- Trim trailing all-blank rows/columns so short reads are the caller's concern.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Sequence
from zipfile import BadZipFile

import pandas as pd
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from xltemplate.core.errors import WorkbookReadError

LOGGER = logging.getLogger(__name__)

SheetReader = Callable[[Path, str], pd.DataFrame]


def _is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def _trim_trailing_blanks(rows: List[Sequence[object]]) -> List[List[object]]:
    while rows and all(_is_blank(cell) for cell in rows[-1]):
        rows.pop()
    width = 0
    for row in rows:
        for idx in range(len(row) - 1, -1, -1):
            if not _is_blank(row[idx]):
                width = max(width, idx + 1)
                break
    return [list(row[:width]) + [None] * (width - len(row[:width])) for row in rows]


def read_sheet(path: Path, sheet: str) -> pd.DataFrame:
    """Return the raw values of ``sheet`` in ``path`` as an object DataFrame.

    Row/column labels are 0-based positions; cell ``A1`` is ``iloc[0, 0]``.

    Raises:
        WorkbookReadError: When the workbook cannot be opened or lacks ``sheet``.
    """

    path = Path(path)
    try:
        workbook = load_workbook(path, data_only=True)
    except (OSError, BadZipFile, InvalidFileException, KeyError, ValueError) as exc:
        raise WorkbookReadError(f"Unable to open workbook {path}: {exc}") from exc
    try:
        if sheet not in workbook.sheetnames:
            raise WorkbookReadError(f"Workbook {path} has no sheet '{sheet}'")
        worksheet = workbook[sheet]
        rows = [tuple(row) for row in worksheet.iter_rows(min_row=1, min_col=1, values_only=True)]
    finally:
        workbook.close()

    grid = _trim_trailing_blanks(rows)
    LOGGER.debug("Read sheet '%s' from %s (%s rows)", sheet, path.name, len(grid))
    return pd.DataFrame(grid, dtype=object)


__all__ = ["SheetReader", "read_sheet"]
