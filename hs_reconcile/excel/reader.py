from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

from .cells import is_empty_cell

"""Workbook reader and row-set normalization.

read_grid() turns the first sheet of a workbook into a plain ragged grid
(list of rows, row 0 = header). Absent cells become None and trailing empty
cells are trimmed, so every downstream component only has to deal with
Python scalars.

normalize_rows() locates the first real data row: row 0 is the header and
any fully blank rows directly under it are skipped. Source sheets commonly
carry such gaps; keeping them would shift positional pairing.
"""

__all__ = [
    "WorkbookError",
    "NormalizedRows",
    "SUPPORTED_EXTENSIONS",
    "read_grid",
    "dataframe_to_grid",
    "normalize_rows",
    "find_data_start_row",
]

SUPPORTED_EXTENSIONS = (".xlsx", ".xls")


class WorkbookError(Exception):
    """Raised when a workbook is missing, of an unsupported type or unreadable."""


@dataclass(frozen=True)
class NormalizedRows:
    rows: list[list[Any]]  # rows[data_start_row:] of the raw grid
    data_start_row: int  # 0-based index of rows[0] in the raw grid


def read_grid(path: Path) -> list[list[Any]]:
    """Read the first sheet of an Excel file as a ragged grid.

    Parameters
    ----------
    path: Excel ファイルパス (.xlsx / .xls)

    Text is kept verbatim (no "NA" -> NaN conversion); only truly empty
    cells come back as None.
    """
    if not path.exists():
        raise WorkbookError(f"workbook not found: {path}")
    if path.suffix.lower() not in SUPPORTED_EXTENSIONS:
        raise WorkbookError(f"unsupported file type: {path.name} (expected .xlsx or .xls)")
    try:
        with pd.ExcelFile(path) as xls:
            sheet_names = xls.sheet_names
            if not sheet_names:
                raise WorkbookError(f"workbook has no sheets: {path.name}")
            # 先頭シートのみ対象。ヘッダなし + object dtype で生の値を保持
            df = xls.parse(
                sheet_names[0],
                header=None,
                dtype=object,
                keep_default_na=False,
                na_values=[""],
            )
    except WorkbookError:
        raise
    except Exception as e:
        raise WorkbookError(f"failed to read workbook {path.name}: {e}") from e
    return dataframe_to_grid(df)


def dataframe_to_grid(df: pd.DataFrame) -> list[list[Any]]:
    """Convert a header-less DataFrame into a ragged list-of-lists grid."""
    grid: list[list[Any]] = []
    for raw in df.itertuples(index=False, name=None):
        row = [None if is_empty_cell(v) else v for v in raw]
        while row and row[-1] is None:
            row.pop()
        grid.append(row)
    return grid


def _row_has_data(row: list[Any] | None) -> bool:
    return bool(row) and any(not is_empty_cell(c) for c in row)


def find_data_start_row(grid: list[list[Any]]) -> int:
    """Index of the first non-blank row after the header (1 if none is found)."""
    for i in range(1, len(grid)):
        if _row_has_data(grid[i]):
            return i
    return 1


def normalize_rows(grid: list[list[Any]]) -> NormalizedRows:
    """Return the data rows of a grid together with their start index.

    Steps:
    1. Row 0 is the header and never data
    2. Skip fully blank rows directly after the header
    3. Everything from the first non-blank row to the end is data
       (later blank rows are kept; builders drop them on their own)
    """
    if len(grid) < 2:
        return NormalizedRows(rows=[], data_start_row=1)
    start = find_data_start_row(grid)
    return NormalizedRows(rows=list(grid[start:]), data_start_row=start)
