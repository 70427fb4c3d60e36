from __future__ import annotations

from ..models.results import DescriptionResult, ReconciliationResult

"""Summary line rendering for the SUMMARY log output.

Format (reconciliation run):
SUMMARY keys={keys} lines={lines} amount={amount} gross_weight={gross}
net_weight={net} cartons={cartons} descriptions={descriptions}

Format (description-only run):
SUMMARY descriptions={descriptions}

Totals are rendered with two decimals, counts as integers.
"""


def _fmt(value: float) -> str:
    return f"{value:.2f}"


def render_summary_line(result: ReconciliationResult) -> str:
    """Render a SUMMARY line from a ReconciliationResult.

    Examples:
        >>> from hs_reconcile.models.results import SummaryRow
        >>> row = SummaryRow("1001", 150.0, 19.0, 16.0, 8.0, 2)
        >>> render_summary_line(ReconciliationResult(summary=(row,), details=()))
        'SUMMARY keys=1 lines=0 amount=150.00 gross_weight=19.00 net_weight=16.00 cartons=8.00 descriptions=0'
    """
    amount = sum(r.total_amount for r in result.summary)
    gross = sum(r.total_gross_weight for r in result.summary)
    net = sum(r.total_net_weight for r in result.summary)
    cartons = sum(r.total_cartons for r in result.summary)
    return (
        f"SUMMARY keys={len(result.summary)} "
        f"lines={len(result.details)} "
        f"amount={_fmt(amount)} "
        f"gross_weight={_fmt(gross)} "
        f"net_weight={_fmt(net)} "
        f"cartons={_fmt(cartons)} "
        f"descriptions={len(result.descriptions)}"
    )


def render_description_summary_line(result: DescriptionResult) -> str:
    return f"SUMMARY descriptions={len(result.entries)}"
