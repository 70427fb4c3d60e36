from __future__ import annotations

import logging
from collections.abc import Sequence

from ..models.records import InvoiceRecord, PackingListRecord
from ..models.results import DetailRow, ReconciliationResult, SummaryRow

logger = logging.getLogger(__name__)

"""Reconciliation and aggregation engine.

Invoice and packing list records are paired strictly by position: the i-th
kept invoice line goes with the i-th kept packing list line. Both sheets are
expected to list the same physical items in the same order, so this is an
index-aligned walk, not a join on any column. Surplus records on the longer
side are ignored.

Paired lines are then grouped by HS code, summed, counted and sorted by code.
"""

__all__ = [
    "ProcessingError",
    "NoDataError",
    "NO_INVOICE_DATA",
    "NO_PACKING_LIST_DATA",
    "NO_MATCHING_DATA",
    "NO_DESCRIPTION_DATA",
    "pair_records",
    "summarize",
    "reconcile",
]

NO_INVOICE_DATA = (
    "No valid invoice data found. Please check your column mapping "
    "and ensure the selected columns contain valid data."
)
NO_PACKING_LIST_DATA = (
    "No valid packing list data found. Please check your column mapping "
    "and ensure the selected columns contain valid data."
)
NO_MATCHING_DATA = "No matching data found between invoice and packing list files"
NO_DESCRIPTION_DATA = "No description data found in Column A starting from row 12"


class ProcessingError(Exception):
    """Base exception for processing errors."""
    pass


class NoDataError(ProcessingError):
    """A pipeline stage produced no usable rows.

    stage is one of: invoice, packing_list, matching, description.
    """

    def __init__(self, stage: str, message: str) -> None:
        super().__init__(message)
        self.stage = stage
        self.message = message


def pair_records(
    invoices: Sequence[InvoiceRecord], packing_list: Sequence[PackingListRecord]
) -> list[DetailRow]:
    """Pair records by index and return one detail row per overlapping line."""
    details: list[DetailRow] = []
    for i, invoice in enumerate(invoices):
        if i >= len(packing_list) or not invoice.hs_code:
            continue
        packing = packing_list[i]
        details.append(
            DetailRow(
                line_number=i + 1,
                hs_code=invoice.hs_code,
                amount=invoice.amount,
                gross_weight=packing.gross_weight,
                net_weight=packing.net_weight,
                cartons=packing.cartons,
            )
        )
    return details


def summarize(details: Sequence[DetailRow]) -> list[SummaryRow]:
    """Group detail rows by HS code; totals and line counts, sorted by code."""
    # hs_code -> [amount, gross, net, cartons, count]
    totals: dict[str, list[float]] = {}
    for row in details:
        acc = totals.setdefault(row.hs_code, [0.0, 0.0, 0.0, 0.0, 0])
        acc[0] += row.amount
        acc[1] += row.gross_weight
        acc[2] += row.net_weight
        acc[3] += row.cartons
        acc[4] += 1
    return [
        SummaryRow(
            hs_code=code,
            total_amount=acc[0],
            total_gross_weight=acc[1],
            total_net_weight=acc[2],
            total_cartons=acc[3],
            line_count=int(acc[4]),
        )
        for code, acc in sorted(totals.items())
    ]


def reconcile(
    invoices: Sequence[InvoiceRecord], packing_list: Sequence[PackingListRecord]
) -> ReconciliationResult:
    """Pair, aggregate and sort. Raises NoDataError naming the empty stage.

    Raises:
        NoDataError: stage "invoice" / "packing_list" when a record list is
            empty, stage "matching" when no line overlaps.
    """
    if not invoices:
        raise NoDataError("invoice", NO_INVOICE_DATA)
    if not packing_list:
        raise NoDataError("packing_list", NO_PACKING_LIST_DATA)

    details = pair_records(invoices, packing_list)
    if len(invoices) != len(packing_list):
        logger.info(
            f"line count differs: invoice={len(invoices)} packing_list={len(packing_list)} "
            f"(paired={len(details)})"
        )
    summary = summarize(details)
    if not summary:
        raise NoDataError("matching", NO_MATCHING_DATA)

    return ReconciliationResult(
        summary=tuple(summary),
        details=tuple(details),
        invoice_records=tuple(invoices),
        packing_list_records=tuple(packing_list),
    )
