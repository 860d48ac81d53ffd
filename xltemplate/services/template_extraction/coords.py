"""Excel coordinate and range parsing."""

from __future__ import annotations

import re
from typing import NamedTuple, Tuple

from xltemplate.core.errors import BadRangeError

_COORD_RE = re.compile(r"([A-Z]{1,2})([0-9]+)")


class Coordinate(NamedTuple):
    """1-based (row, column) position of a cell."""

    row: int
    column: int


def _letter_value(letter: str) -> int:
    return ord(letter) - ord("A") + 1


def coord_to_point(coord: str) -> Coordinate:
    """Turn an Excel coordinate such as ``"B3"`` or ``"AA12"`` into a :class:`Coordinate`.

    Raises:
        BadRangeError: When the text is not one or two uppercase letters
            followed by a positive row number.
    """

    match = _COORD_RE.fullmatch(coord)
    if match is None or int(match.group(2)) < 1:
        raise BadRangeError(f"Could not interpret Excel coordinate '{coord}'")
    letters, digits = match.groups()
    if len(letters) == 2:
        column = 26 * _letter_value(letters[0]) + _letter_value(letters[1])
    else:
        column = _letter_value(letters)
    return Coordinate(row=int(digits), column=column)


def range_to_points(cell_range: str) -> Tuple[Coordinate, Coordinate]:
    """Split ``"B3:D5"`` into its two corners; a single cell yields itself twice.

    Corners are returned in the order given.
    """

    parts = cell_range.split(":")
    if len(parts) == 1:
        point = coord_to_point(parts[0])
        return point, point
    if len(parts) == 2:
        return coord_to_point(parts[0]), coord_to_point(parts[1])
    raise BadRangeError(f"Found more than one ':' separator in range '{cell_range}'")


def range_size(cell_range: str) -> Tuple[int, int]:
    """Return ``(rows, cols)`` covered by a range, whichever corner comes first."""

    first, second = range_to_points(cell_range)
    return abs(second.row - first.row) + 1, abs(second.column - first.column) + 1


def column_letters(column: int) -> str:
    """Inverse of the column encoding used by :func:`coord_to_point` (1 -> ``"A"``)."""

    if not 1 <= column <= 26 * 26 + 26:
        raise BadRangeError(f"Column {column} is outside A..ZZ")
    first, second = divmod(column - 1, 26)
    prefix = chr(ord("A") + first - 1) if first else ""
    return prefix + chr(ord("A") + second)


__all__ = ["Coordinate", "coord_to_point", "range_to_points", "range_size", "column_letters"]
