"""Unit tests for Excel coordinate and range parsing."""

from __future__ import annotations

import pytest

from xltemplate.core.errors import BadRangeError
from xltemplate.services.template_extraction.coords import (
    Coordinate,
    column_letters,
    coord_to_point,
    range_size,
    range_to_points,
)


@pytest.mark.parametrize(
    ("coord", "expected"),
    [
        ("A1", Coordinate(1, 1)),
        ("B3", Coordinate(3, 2)),
        ("Z10", Coordinate(10, 26)),
        ("AA1", Coordinate(1, 27)),
        ("AZ7", Coordinate(7, 52)),
        ("BA2", Coordinate(2, 53)),
        ("ZZ100", Coordinate(100, 702)),
    ],
)
def test_coord_to_point(coord: str, expected: Coordinate) -> None:
    assert coord_to_point(coord) == expected


@pytest.mark.parametrize("coord", ["", "1A", "A", "AAA1", "a1", "A0", "A-1", "A1.5", " A1", "B3\n"])
def test_coord_to_point_rejects_malformed(coord: str) -> None:
    with pytest.raises(BadRangeError):
        coord_to_point(coord)


def test_column_letters_recover_encoded_columns() -> None:
    letters = [chr(c) for c in range(ord("A"), ord("Z") + 1)]
    samples = letters + [a + b for a in letters for b in ("A", "M", "Z")]
    for text in samples:
        assert column_letters(coord_to_point(f"{text}12").column) == text


def test_range_to_points_single_cell_repeats_point() -> None:
    assert range_to_points("C4") == (Coordinate(4, 3), Coordinate(4, 3))


def test_range_to_points_keeps_given_order() -> None:
    assert range_to_points("D5:B2") == (Coordinate(5, 4), Coordinate(2, 2))


def test_range_with_two_separators_is_rejected() -> None:
    with pytest.raises(BadRangeError):
        range_to_points("A1:B2:C3")
    with pytest.raises(BadRangeError):
        range_size("A1:B2:C3")


@pytest.mark.parametrize(
    ("cell_range", "size"),
    [("B2:B2", (1, 1)), ("A1:C3", (3, 3)), ("C3:A1", (3, 3)), ("B4:D5", (2, 3)), ("E7", (1, 1))],
)
def test_range_size(cell_range: str, size: tuple[int, int]) -> None:
    assert range_size(cell_range) == size
