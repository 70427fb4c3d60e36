from __future__ import annotations

import re
from collections.abc import Iterable

"""Column reference resolution.

Users enter columns either as spreadsheet letters (A, B, ..., Z, AA, ...) or
as 1-based numbers. Both resolve to a 0-based index. Malformed input resolves
to column A instead of raising so that one typo does not abort a run;
callers that need strictness must validate the reference themselves.
"""

__all__ = [
    "resolve_column",
    "resolve_columns",
]

_DIGITS = re.compile(r"^\d+$")
_LETTERS = re.compile(r"^[A-Z]+$")


def resolve_column(reference: object) -> int:
    """Resolve a column reference to a 0-based index.

    >>> resolve_column("A"), resolve_column("AA"), resolve_column("16")
    (0, 26, 15)
    >>> resolve_column("?!")
    0
    """
    ref = str(reference).strip().upper() if reference is not None else ""
    if _DIGITS.match(ref):
        return max(0, int(ref) - 1)
    if _LETTERS.match(ref):
        value = 0
        for ch in ref:
            value = value * 26 + (ord(ch) - ord("A") + 1)
        return value - 1
    return 0  # 不正入力は A 列扱い


def resolve_columns(references: Iterable[object]) -> tuple[int, ...]:
    """Resolve an ordered list of references, keeping their order."""
    return tuple(resolve_column(r) for r in references)
