from __future__ import annotations

from typing import Any

from ..excel.cells import cell_text, get_cell, is_empty_cell
from ..models.results import DescriptionEntry

"""Description block extraction.

Invoice sheets carry a free-text goods description in column A starting at
row 12. The block ends at the first row mentioning "net weight", which is
the start of the totals footer and is not part of the description.
"""

__all__ = [
    "DESCRIPTION_START_ROW",
    "DESCRIPTION_COLUMN",
    "SENTINEL",
    "extract_descriptions",
]

DESCRIPTION_START_ROW = 11  # 0-based (12 行目)
DESCRIPTION_COLUMN = 0
SENTINEL = "net weight"


def extract_descriptions(grid: list[list[Any]]) -> list[DescriptionEntry]:
    """Collect non-empty column A texts from row 12 until the sentinel row.

    Works on the raw grid (header and blank rows included) so row numbers
    match what the operator sees in the spreadsheet. Empty cells are skipped
    without ending the scan; without a sentinel the scan runs to the end.
    """
    entries: list[DescriptionEntry] = []
    for i in range(DESCRIPTION_START_ROW, len(grid)):
        value = get_cell(grid[i], DESCRIPTION_COLUMN)
        if is_empty_cell(value):
            continue
        text = cell_text(value).strip()
        if SENTINEL in text.lower():
            break
        if text:
            entries.append(DescriptionEntry(row_number=i + 1, text=text))
    return entries
