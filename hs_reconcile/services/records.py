from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from ..excel.cells import cell_text, get_cell, parse_multi_value, parse_number
from ..excel.reader import normalize_rows
from ..models.config_models import InvoiceColumns, PackingListColumns
from ..models.records import InvoiceRecord, PackingListRecord

logger = logging.getLogger(__name__)

"""Field extraction and record building.

Two extraction modes are used:

- fallback mode (HS code): the first candidate column with non-empty
  trimmed text wins
- sum mode (amount, weights, cartons): values of all candidate columns are
  added up. Amount cells go through the direct numeric parse, weight and
  carton cells through the multi-value parser ("12+8" -> 20)

Builders keep the source row order because the reconciliation engine pairs
invoice and packing list records by list position.
"""

__all__ = [
    "extract_first_text",
    "sum_numbers",
    "sum_multi_values",
    "build_invoice_records",
    "build_packing_list_records",
]


def extract_first_text(row: list[Any], columns: Sequence[int]) -> str:
    """Fallback mode: first non-empty trimmed text among columns, else ""."""
    for col in columns:
        value = cell_text(get_cell(row, col)).strip()
        if value:
            return value
    return ""


def sum_numbers(row: list[Any], columns: Sequence[int]) -> float:
    """Sum mode with the direct numeric parse (unparseable -> 0)."""
    return sum((parse_number(get_cell(row, col)) for col in columns), 0.0)


def sum_multi_values(row: list[Any], columns: Sequence[int]) -> float:
    """Sum mode with the multi-value parser."""
    return sum((parse_multi_value(get_cell(row, col)) for col in columns), 0.0)


def build_invoice_records(grid: list[list[Any]], columns: InvoiceColumns) -> list[InvoiceRecord]:
    """Build invoice records from a raw grid, dropping rows without HS code or amount."""
    normalized = normalize_rows(grid)
    records: list[InvoiceRecord] = []
    for offset, row in enumerate(normalized.rows):
        hs_code = extract_first_text(row, columns.hs_code)
        amount = sum_numbers(row, columns.amount)
        if not hs_code or amount <= 0:
            continue
        records.append(
            InvoiceRecord(
                hs_code=hs_code,
                amount=amount,
                row_number=normalized.data_start_row + offset + 1,
            )
        )
    logger.debug(
        "invoice: data_start_row=%d rows=%d kept=%d",
        normalized.data_start_row, len(normalized.rows), len(records),
    )
    return records


def build_packing_list_records(
    grid: list[list[Any]], columns: PackingListColumns
) -> list[PackingListRecord]:
    """Build packing list records, dropping rows whose quantities are all zero."""
    normalized = normalize_rows(grid)
    records: list[PackingListRecord] = []
    for offset, row in enumerate(normalized.rows):
        cartons = sum_multi_values(row, columns.cartons)
        net_weight = sum_multi_values(row, columns.net_weight)
        gross_weight = sum_multi_values(row, columns.gross_weight)
        if cartons <= 0 and net_weight <= 0 and gross_weight <= 0:
            continue
        records.append(
            PackingListRecord(
                cartons=cartons,
                net_weight=net_weight,
                gross_weight=gross_weight,
                row_number=normalized.data_start_row + offset + 1,
            )
        )
    logger.debug(
        "packing_list: data_start_row=%d rows=%d kept=%d",
        normalized.data_start_row, len(normalized.rows), len(records),
    )
    return records
