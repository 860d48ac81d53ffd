"""Per-call cache of sheet grids read from one workbook."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List

import pandas as pd

from xltemplate.core.errors import WorkbookReadError
from xltemplate.core.session import Session

from .coords import range_to_points
from .models import MISSING
from .reader import SheetReader, read_sheet

LOGGER = logging.getLogger(__name__)

COMPONENT = "TemplateExtraction"


class SheetCacheError(LookupError):
    """Raised when a sheet is looked up or stored in violation of the cache contract."""


def _normalize(grid: pd.DataFrame) -> pd.DataFrame:
    df = pd.DataFrame(grid, dtype=object)
    df.index = range(df.shape[0])
    df.columns = range(df.shape[1])
    return df.map(lambda value: MISSING if value is None or value == "" else value)


class SheetCache:
    """Sheet name -> grid mapping for a single workbook.

    Grids are stored once per sheet and never modified; :meth:`read_range`
    pads a copy when a requested rectangle reaches past the stored extent.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._grids: Dict[str, pd.DataFrame] = {}

    @classmethod
    def load(
        cls,
        path: Path,
        sheet_names: Iterable[str],
        *,
        session: Session,
        reader: SheetReader | None = None,
    ) -> "SheetCache":
        """Read every sheet in ``sheet_names`` from ``path``.

        All sheets are attempted; the ones that cannot be read are reported
        together as a single ``MissingSheets`` error.
        """

        read = reader or read_sheet
        cache = cls(path)
        missing: List[str] = []
        for sheet in sheet_names:
            try:
                cache.add(sheet, read(cache.path, sheet))
            except WorkbookReadError as exc:
                LOGGER.debug("Sheet '%s' unavailable in %s: %s", sheet, cache.path, exc)
                missing.append(sheet)
        if missing:
            quoted = ", ".join(f"'{name}'" for name in missing)
            session.error(
                COMPONENT,
                "MissingSheets",
                "In %s, could not find expected sheet(s): %s",
                cache.path,
                quoted,
                sheets=missing,
            )
        return cache

    def add(self, sheet: str, grid: pd.DataFrame) -> None:
        if sheet in self._grids:
            raise SheetCacheError(f"Sheet '{sheet}' is already cached for {self.path}")
        self._grids[sheet] = _normalize(grid)

    def grid(self, sheet: str) -> pd.DataFrame:
        try:
            return self._grids[sheet]
        except KeyError as exc:
            raise SheetCacheError(f"Sheet '{sheet}' is not cached for {self.path}") from exc

    def read_range(self, sheet: str, cell_range: str) -> pd.DataFrame:
        """Return exactly the rectangle named by ``cell_range``, padded with ``MISSING``.

        The workbook reader drops trailing blank rows/columns, so a rectangle
        may extend past the stored grid; those cells come back as missing.
        """

        grid = self.grid(sheet)
        first, second = range_to_points(cell_range)
        top, bottom = sorted((first.row, second.row))
        left, right = sorted((first.column, second.column))

        n_rows, n_cols = grid.shape
        if n_rows < bottom or n_cols < right:
            grid = grid.reindex(
                index=range(max(n_rows, bottom)),
                columns=range(max(n_cols, right)),
                fill_value=MISSING,
            )
        block = grid.iloc[top - 1 : bottom, left - 1 : right].copy()
        block.index = range(block.shape[0])
        block.columns = range(block.shape[1])
        return block

    def __contains__(self, sheet: object) -> bool:
        return sheet in self._grids

    def __iter__(self) -> Iterator[str]:
        return iter(self._grids)

    def __len__(self) -> int:
        return len(self._grids)


__all__ = ["SheetCache", "SheetCacheError"]
