from __future__ import annotations

import pytest

from hs_reconcile.excel.columns import resolve_column, resolve_columns


@pytest.mark.parametrize(
    "reference,expected",
    [
        ("A", 0),
        ("Z", 25),
        ("AA", 26),
        ("AZ", 51),
        ("1", 0),
        ("16", 15),
        ("", 0),
        ("?!", 0),
    ],
)
def test_resolve_column_table(reference: str, expected: int):
    assert resolve_column(reference) == expected


def test_resolve_column_is_case_insensitive_and_trims():
    assert resolve_column("  p ") == 15
    assert resolve_column("aa") == 26


def test_resolve_column_zero_clamps_to_first_column():
    assert resolve_column("0") == 0


def test_resolve_column_mixed_reference_falls_back_to_a():
    # "A1" はセル参照であって列参照ではない
    assert resolve_column("A1") == 0
    assert resolve_column(None) == 0


def test_resolve_column_accepts_integers():
    assert resolve_column(16) == 15


def test_resolve_columns_keeps_order():
    assert resolve_columns(["P", "O"]) == (15, 14)
