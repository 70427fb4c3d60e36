from __future__ import annotations

from dataclasses import dataclass

"""Config dataclasses for the reconciliation tool.

These are the resolved forms of config/reconcile.yml: column references have
already been converted to 0-based indices by the loader, so the engine never
sees raw user input.
"""


@dataclass(frozen=True)
class InvoiceColumns:
    """Resolved column indices for the invoice sheet.

    hs_code is read in fallback mode (first non-empty column wins), so its
    order matters. amount columns are summed.
    """
    hs_code: tuple[int, ...]
    amount: tuple[int, ...]


@dataclass(frozen=True)
class PackingListColumns:
    """Resolved column indices for the packing list sheet (all summed)."""
    cartons: tuple[int, ...]
    net_weight: tuple[int, ...]
    gross_weight: tuple[int, ...]


@dataclass(frozen=True)
class ColumnMapping:
    invoice: InvoiceColumns
    packing_list: PackingListColumns


@dataclass(frozen=True)
class OutputConfig:
    directory: str  # 出力先ディレクトリ
    format: str  # "csv" | "xlsx"


@dataclass(frozen=True)
class ReconcileConfig:
    """Root configuration object for a reconciliation run."""
    columns: ColumnMapping
    output: OutputConfig
    references: dict[str, dict[str, list[str]]]  # Raw references as entered (for display / inspect)
