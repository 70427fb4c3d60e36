from __future__ import annotations

import csv
import logging
from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from ..models.results import (
    DescriptionEntry,
    DescriptionResult,
    DetailRow,
    ReconciliationResult,
    SummaryRow,
)

logger = logging.getLogger(__name__)

"""Export of run results to CSV or Excel workbooks.

Table layout:
- Summary: HS Code | Total Invoice Amount | Total Gross Weight | Total Net Weight | Total Cartons | Line Count
- Detail:  Line Number | HS Code | Invoice Amount | Gross Weight | Net Weight | Cartons
- Descriptions: Row Number | Description

CSV files quote every cell and render floats with two decimals. The
reconciliation workbook appends the description block under the summary
table, separated by five blank rows.
"""

__all__ = [
    "SUMMARY_HEADERS",
    "DETAIL_HEADERS",
    "DESCRIPTION_HEADERS",
    "EXPORT_FORMATS",
    "summary_table",
    "detail_table",
    "description_table",
    "write_csv",
    "export_reconciliation",
    "export_descriptions",
]

SUMMARY_HEADERS = [
    "HS Code",
    "Total Invoice Amount",
    "Total Gross Weight",
    "Total Net Weight",
    "Total Cartons",
    "Line Count",
]
DETAIL_HEADERS = ["Line Number", "HS Code", "Invoice Amount", "Gross Weight", "Net Weight", "Cartons"]
DESCRIPTION_HEADERS = ["Row Number", "Description"]

EXPORT_FORMATS = ("csv", "xlsx")

SUMMARY_SHEET = "Summary by HS Code"
DETAIL_SHEET = "Line by Line Details"
DESCRIPTION_SHEET = "Descriptions"
DESCRIPTION_BLOCK_TITLE = "Description Data"
DESCRIPTION_BLOCK_GAP = 5  # サマリ表と説明ブロックの間の空行数


def summary_table(rows: Sequence[SummaryRow]) -> pd.DataFrame:
    data = [
        [
            r.hs_code,
            round(r.total_amount, 2),
            round(r.total_gross_weight, 2),
            round(r.total_net_weight, 2),
            round(r.total_cartons, 2),
            r.line_count,
        ]
        for r in rows
    ]
    return pd.DataFrame(data, columns=SUMMARY_HEADERS)


def detail_table(rows: Sequence[DetailRow]) -> pd.DataFrame:
    data = [
        [r.line_number, r.hs_code, r.amount, r.gross_weight, r.net_weight, r.cartons]
        for r in rows
    ]
    return pd.DataFrame(data, columns=DETAIL_HEADERS)


def description_table(entries: Sequence[DescriptionEntry]) -> pd.DataFrame:
    return pd.DataFrame([[e.row_number, e.text] for e in entries], columns=DESCRIPTION_HEADERS)


def write_csv(df: pd.DataFrame, path: Path) -> Path:
    """Write a table as CSV with every cell double-quoted."""
    df.to_csv(path, index=False, quoting=csv.QUOTE_ALL, float_format="%.2f", encoding="utf-8")
    return path


def _check_format(fmt: str) -> None:
    if fmt not in EXPORT_FORMATS:
        raise ValueError(f"unsupported export format: {fmt} (expected one of {EXPORT_FORMATS})")


def export_reconciliation(result: ReconciliationResult, directory: Path, fmt: str = "xlsx") -> list[Path]:
    """Write summary, detail (and description) tables into directory.

    Returns:
        Paths of the written files, in write order
    """
    _check_format(fmt)
    directory.mkdir(parents=True, exist_ok=True)
    summary_df = summary_table(result.summary)
    detail_df = detail_table(result.details)

    if fmt == "csv":
        written = [
            write_csv(summary_df, directory / "hs-code-analysis.csv"),
            write_csv(detail_df, directory / "hs-code-details.csv"),
        ]
        if result.descriptions:
            written.append(
                write_csv(description_table(result.descriptions), directory / "invoice-descriptions.csv")
            )
        logger.debug(f"export: wrote {len(written)} csv file(s) to {directory}")
        return written

    path = directory / "hs-code-analysis.xlsx"
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        summary_df.to_excel(writer, sheet_name=SUMMARY_SHEET, index=False)
        if result.descriptions:
            # ヘッダ 1 行 + データ行の直後に空行を挟んで説明ブロックを配置
            title_row = len(summary_df) + 1 + DESCRIPTION_BLOCK_GAP
            pd.DataFrame([[DESCRIPTION_BLOCK_TITLE]]).to_excel(
                writer, sheet_name=SUMMARY_SHEET, startrow=title_row, index=False, header=False
            )
            description_table(result.descriptions).to_excel(
                writer, sheet_name=SUMMARY_SHEET, startrow=title_row + 1, index=False
            )
        detail_df.to_excel(writer, sheet_name=DETAIL_SHEET, index=False)
    logger.debug(f"export: wrote {path}")
    return [path]


def export_descriptions(result: DescriptionResult, directory: Path, fmt: str = "xlsx") -> list[Path]:
    _check_format(fmt)
    directory.mkdir(parents=True, exist_ok=True)
    df = description_table(result.entries)
    if fmt == "csv":
        return [write_csv(df, directory / "invoice-descriptions.csv")]
    path = directory / "invoice-descriptions.xlsx"
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=DESCRIPTION_SHEET, index=False)
    return [path]
