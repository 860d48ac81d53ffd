"""Template integrity checks against the blank reference workbook."""

from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

import pandas as pd

from xltemplate.core.errors import BadRangeError, WorkbookReadError
from xltemplate.core.session import Session

from .cache import COMPONENT, SheetCache
from .models import TemplateDefinition, is_missing, is_number
from .reader import SheetReader, read_sheet


def _cells_equal(left: object, right: object) -> bool:
    left_missing = is_missing(left)
    right_missing = is_missing(right)
    if left_missing or right_missing:
        return left_missing and right_missing
    if is_number(left) and is_number(right):
        return left == right
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    if type(left) is type(right):
        return left == right
    return False


def ranges_equal(left: pd.DataFrame, right: pd.DataFrame) -> bool:
    """Cell-by-cell comparison of two grids; missing cells only match missing cells."""

    if left.shape != right.shape:
        return False
    for a, b in zip(left.to_numpy().ravel(), right.to_numpy().ravel()):
        if not _cells_equal(a, b):
            return False
    return True


def _load_blank(blank_file: Path, sheets: List[str], session: Session, reader: SheetReader) -> SheetCache:
    if not blank_file.exists():
        session.error(
            COMPONENT,
            "MissingTemplateFile",
            "Internal error: missing blank template file %s",
            blank_file,
        )
    blank = SheetCache(blank_file)
    for sheet in sheets:
        try:
            blank.add(sheet, reader(blank_file, sheet))
        except WorkbookReadError:
            session.error(
                COMPONENT,
                "MissingTemplateSheet",
                "Internal error: blank template file missing sheet %s",
                sheet,
            )
    return blank


def check_template_integrity(
    path: Path,
    template: TemplateDefinition,
    session: Session,
    reader: SheetReader | None = None,
) -> Tuple[List[str], SheetCache]:
    """Confirm the expected sheets exist and the fixed ranges match the blank.

    Returns the referenced sheet names and the cache of the target workbook,
    which extraction reuses.
    """

    read = reader or read_sheet
    sheets = template.sheet_names()

    cache = SheetCache.load(Path(path), sheets, session=session, reader=read)
    session.succeed(COMPONENT, "ValidSheets", "All expected sheets are present")

    blank = _load_blank(Path(template.blank_file), sheets, session, read)

    violations: List[str] = []
    for fixed in template.fixed_values:
        for cell_range in fixed.ranges:
            try:
                blank_raw = blank.read_range(fixed.sheet, cell_range)
                raw = cache.read_range(fixed.sheet, cell_range)
            except BadRangeError as exc:
                session.error(COMPONENT, "BadRange", "%s", exc)
            if not ranges_equal(raw, blank_raw):
                message = (
                    f"Template appears to have been modified: sheet '{fixed.sheet}' "
                    f"range {cell_range} does not match blank"
                )
                session.warn(COMPONENT, "ModifiedTemplateRange", message)
                violations.append(message)
    if violations:
        session.error(
            COMPONENT,
            "ModifiedTemplate",
            "Template appears to have been modified - %d range(s) expected to be fixed do not match",
            len(violations),
            violations=violations,
        )
    session.succeed(COMPONENT, "ValidTemplate", "Template appears to be intact")
    return sheets, cache


__all__ = ["check_template_integrity", "ranges_equal"]
