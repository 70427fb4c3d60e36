from __future__ import annotations

from dataclasses import dataclass

"""Source records built from normalized sheet rows.

A record only exists when its row passed validation; rows that do not are
dropped by the builders without raising. row_number is the 1-based grid row
the record came from and is informational only: pairing is by list position.
"""

__all__ = [
    "InvoiceRecord",
    "PackingListRecord",
]


@dataclass(frozen=True)
class InvoiceRecord:
    """One invoice line. Invariant: hs_code non-empty and amount > 0."""
    hs_code: str
    amount: float
    row_number: int = 0  # 元シートの行番号 (1-based)。不明なら 0


@dataclass(frozen=True)
class PackingListRecord:
    """One packing list line. Invariant: at least one quantity > 0."""
    cartons: float
    net_weight: float
    gross_weight: float
    row_number: int = 0
