from __future__ import annotations

from hs_reconcile.models.results import DescriptionEntry
from hs_reconcile.services.descriptions import extract_descriptions


def _grid_with_column_a(values: list[object]) -> list[list[object]]:
    """Rows 1-11 filler, then the given column A values from row 12."""
    grid: list[list[object]] = [["Header"]] + [["filler", i] for i in range(10)]
    for v in values:
        grid.append([v] if v is not None else [])
    return grid


def test_stops_at_sentinel_and_skips_empty():
    grid = _grid_with_column_a(["Widget A", "", "Widget B", "Net Weight: 200kg", "After"])
    assert extract_descriptions(grid) == [
        DescriptionEntry(row_number=12, text="Widget A"),
        DescriptionEntry(row_number=14, text="Widget B"),
    ]


def test_rows_before_start_are_ignored():
    grid = _grid_with_column_a(["Only"])
    assert grid[1][0] == "filler"
    assert extract_descriptions(grid) == [DescriptionEntry(row_number=12, text="Only")]


def test_runs_to_end_without_sentinel():
    grid = _grid_with_column_a(["  padded  ", None, 42])
    assert extract_descriptions(grid) == [
        DescriptionEntry(row_number=12, text="padded"),
        DescriptionEntry(row_number=14, text="42"),
    ]


def test_sentinel_is_case_insensitive_substring():
    grid = _grid_with_column_a(["Item", "TOTAL NET WEIGHT", "Item 2"])
    assert [e.text for e in extract_descriptions(grid)] == ["Item"]


def test_whitespace_only_cell_is_skipped():
    grid = _grid_with_column_a(["   ", "Item"])
    assert extract_descriptions(grid) == [DescriptionEntry(row_number=13, text="Item")]


def test_short_grid_and_restartable():
    assert extract_descriptions([["h"]]) == []
    grid = _grid_with_column_a(["A", "B"])
    assert extract_descriptions(grid) == extract_descriptions(grid)
