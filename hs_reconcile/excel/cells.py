from __future__ import annotations

import math
import re
from typing import Any

"""Cell level helpers shared by the record builders and extractors.

Every helper here is lenient: an unparseable value becomes 0 (or is
discarded as a sub-value), never an exception.
"""

__all__ = [
    "is_empty_cell",
    "cell_text",
    "get_cell",
    "parse_number",
    "parse_multi_value",
]

# Leading real number, same acceptance as a "parse the numeric prefix" reader:
# "12.5kg" -> 12.5, "1.2.3" -> 1.2, "-" -> no match
_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_MULTI_VALUE_STRIP = re.compile(r"[^\d.,+\-\s]")
_MULTI_VALUE_SPLIT = re.compile(r"[,+\s]+")


def is_empty_cell(value: Any) -> bool:
    """True for absent cells: None, NaN and the empty string.

    Whitespace-only text and the number 0 are *not* empty.
    """
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and value == ""


def get_cell(row: list[Any] | None, index: int) -> Any:
    """Return row[index], or None when the row is too short (ragged rows)."""
    if row is None or index < 0 or index >= len(row):
        return None
    return row[index]


def cell_text(value: Any) -> str:
    """Render a cell as untrimmed text; empty cells render as "".

    Whole floats lose their ".0" so numeric HS codes read back as entered
    (84713000.0 -> "84713000").
    """
    if is_empty_cell(value):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return str(value)
    return str(value)


def _leading_number(text: str) -> float | None:
    m = _LEADING_NUMBER.match(text.strip())
    if not m:
        return None
    return float(m.group(0))


def parse_number(value: Any) -> float:
    """Direct numeric parse of a single cell. Failure yields 0.0.

    Numbers are taken as-is; text is read up to the end of its leading
    number ("100 USD" -> 100.0).
    """
    if is_empty_cell(value) or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    number = _leading_number(cell_text(value))
    return number if number is not None else 0.0


def parse_multi_value(value: Any) -> float:
    """Parse a cell that may hold several delimited numbers and sum them.

    Characters other than digits, '.', ',', '+', '-' and whitespace are
    removed; the rest is split on runs of comma / plus / whitespace and each
    token that reads as a number is added up.

    >>> parse_multi_value("12+8"), parse_multi_value("12, 8"), parse_multi_value("abc")
    (20.0, 20.0, 0.0)
    """
    text = cell_text(value)
    if not text:
        return 0.0
    cleaned = _MULTI_VALUE_STRIP.sub("", text)
    total = 0.0
    for token in _MULTI_VALUE_SPLIT.split(cleaned):
        if not token:
            continue
        number = _leading_number(token)
        if number is not None:
            total += number
    return total
