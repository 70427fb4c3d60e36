from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..excel.cells import cell_text, get_cell, is_empty_cell
from ..excel.reader import SUPPORTED_EXTENSIONS, normalize_rows
from ..models.config_models import ColumnMapping
from .records import build_invoice_records, build_packing_list_records

"""Pre-flight inspection of a workbook grid.

validate_structure() checks that the mapped columns actually hold data in
the first rows so the operator can fix a wrong mapping before running.
build_preview() summarises headers, sample rows and per-column contents.
Neither raises for bad data; findings are returned as errors / warnings.
"""

__all__ = [
    "INVOICE",
    "PACKING_LIST",
    "ValidationResult",
    "ColumnInfo",
    "FilePreview",
    "validate_extension",
    "validate_structure",
    "build_preview",
]

INVOICE = "invoice"
PACKING_LIST = "packing_list"

SCAN_ROWS = 20  # 検証・列解析で見る先頭データ行数
PREVIEW_ROWS = 10
PREVIEW_COLUMNS = 20
SAMPLE_VALUES = 3


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: list[str]
    warnings: list[str]
    row_count: int  # data rows after normalization
    valid_row_count: int  # rows the matching record builder keeps


@dataclass(frozen=True)
class ColumnInfo:
    has_data: bool
    sample_values: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class FilePreview:
    headers: list[Any]
    sample_rows: list[list[Any]]
    total_rows: int
    data_start_row: int
    column_info: dict[int, ColumnInfo]


def validate_extension(path: Path) -> bool:
    return path.suffix.lower() in SUPPORTED_EXTENSIONS


def _any_filled(rows: list[list[Any]], columns: tuple[int, ...]) -> bool:
    return any(
        not is_empty_cell(get_cell(row, col)) for row in rows for col in columns
    )


def validate_structure(grid: list[list[Any]], kind: str, mapping: ColumnMapping) -> ValidationResult:
    """Check a grid against the column mapping for its side.

    Parameters:
        grid: Raw grid as returned by read_grid()
        kind: "invoice" or "packing_list"
        mapping: Resolved column mapping
    """
    if kind not in (INVOICE, PACKING_LIST):
        raise ValueError(f"unknown sheet kind: {kind}")
    errors: list[str] = []
    warnings: list[str] = []
    if len(grid) < 2:
        errors.append("File must contain at least 2 rows (header + data)")

    rows = normalize_rows(grid).rows
    head = rows[:SCAN_ROWS]
    if kind == INVOICE:
        cols = mapping.invoice
        if not _any_filled(head, cols.hs_code):
            errors.append("No HS codes found in the mapped HS code column(s)")
        if not _any_filled(head, cols.amount):
            warnings.append("No amounts found in the mapped amount column(s)")
        valid = len(build_invoice_records(grid, cols))
    else:
        cols = mapping.packing_list
        if not _any_filled(head, cols.net_weight + cols.gross_weight):
            warnings.append("No weight data found in the mapped weight column(s)")
        if not _any_filled(head, cols.cartons):
            warnings.append("No carton data found in the mapped carton column(s)")
        valid = len(build_packing_list_records(grid, cols))

    return ValidationResult(
        is_valid=not errors,
        errors=errors,
        warnings=warnings,
        row_count=len(rows),
        valid_row_count=valid,
    )


def build_preview(grid: list[list[Any]]) -> FilePreview:
    """Headers, first data rows and a per-column content summary."""
    normalized = normalize_rows(grid)
    headers = list(grid[0]) if grid else []
    head = normalized.rows[:SCAN_ROWS]
    column_info: dict[int, ColumnInfo] = {}
    for col in range(min(len(headers), PREVIEW_COLUMNS)):
        has_data = False
        samples: list[str] = []
        for row in head:
            value = get_cell(row, col)
            if is_empty_cell(value):
                continue
            has_data = True
            text = cell_text(value).strip()
            if text and len(samples) < SAMPLE_VALUES:
                samples.append(text)
        column_info[col] = ColumnInfo(has_data=has_data, sample_values=samples)
    return FilePreview(
        headers=headers,
        sample_rows=normalized.rows[:PREVIEW_ROWS],
        total_rows=len(normalized.rows),
        data_start_row=normalized.data_start_row,
        column_info=column_info,
    )
