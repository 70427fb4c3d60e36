from __future__ import annotations

from dataclasses import dataclass

from .records import InvoiceRecord, PackingListRecord

"""Result models for reconciliation and description extraction runs.

DetailRow is one positionally paired invoice / packing list line,
SummaryRow the per HS code aggregate over all detail rows sharing a code.
"""

__all__ = [
    "DetailRow",
    "SummaryRow",
    "DescriptionEntry",
    "ReconciliationResult",
    "DescriptionResult",
]


@dataclass(frozen=True)
class DetailRow:
    line_number: int  # 1-based position within the pairing
    hs_code: str
    amount: float
    gross_weight: float
    net_weight: float
    cartons: float


@dataclass(frozen=True)
class SummaryRow:
    hs_code: str
    total_amount: float
    total_gross_weight: float
    total_net_weight: float
    total_cartons: float
    line_count: int  # >= 1


@dataclass(frozen=True)
class DescriptionEntry:
    row_number: int  # 1-based source row number
    text: str  # trimmed, never empty


@dataclass(frozen=True)
class ReconciliationResult:
    """Everything one invoice + packing list run produces.

    descriptions may be empty here; only the description-only mode treats
    an empty block as a failure.
    """
    summary: tuple[SummaryRow, ...]
    details: tuple[DetailRow, ...]
    descriptions: tuple[DescriptionEntry, ...] = ()
    invoice_records: tuple[InvoiceRecord, ...] = ()
    packing_list_records: tuple[PackingListRecord, ...] = ()


@dataclass(frozen=True)
class DescriptionResult:
    entries: tuple[DescriptionEntry, ...]
