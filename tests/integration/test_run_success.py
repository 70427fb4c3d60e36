from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from hs_reconcile.cli import main as cli_main
from hs_reconcile.config.loader import load_config
from hs_reconcile.models.results import DescriptionEntry, SummaryRow
from hs_reconcile.services.orchestrator import run_descriptions, run_reconciliation

"""End-to-end runs over real workbooks written with pandas / openpyxl."""


def test_run_reconciliation_end_to_end(workbooks, write_config: Path):
    invoice, packing = workbooks
    cfg = load_config(write_config)
    result = run_reconciliation(invoice, packing, cfg)

    assert result.summary == (
        SummaryRow("6105", 150.0, 19.0, 16.0, 8.0, 2),
        SummaryRow("6201", 100.0, 9.5, 8.5, 4.0, 1),
    )
    assert [(d.line_number, d.hs_code) for d in result.details] == [(1, "6105"), (2, "6105"), (3, "6201")]
    assert result.descriptions == (
        DescriptionEntry(12, "Widget A"),
        DescriptionEntry(14, "Widget B"),
    )
    # 元シート行番号 (空行 1 行を挟むのでデータは 3 行目から)
    assert [r.row_number for r in result.invoice_records] == [3, 4, 5]
    assert len(result.packing_list_records) == 3


def test_run_descriptions_end_to_end(workbooks):
    invoice, _ = workbooks
    result = run_descriptions(invoice)
    assert [e.row_number for e in result.entries] == [12, 14]


def test_cli_reconcile_workbook_export(workbooks, write_config: Path, temp_workdir: Path, capsys):
    invoice, packing = workbooks
    code = cli_main([
        "reconcile", "--invoice", str(invoice), "--packing-list", str(packing), "--format", "xlsx",
    ])
    out = capsys.readouterr().out
    assert code == 0
    assert "SUMMARY keys=2 lines=3 amount=250.00" in out
    assert "descriptions=2" in out

    book = temp_workdir / "out" / "hs-code-analysis.xlsx"
    summary = pd.read_excel(book, sheet_name="Summary by HS Code", header=None)
    assert [str(v) for v in summary.iloc[1:3, 0]] == ["6105", "6201"]
    assert summary.iloc[1, 5] == 2
    details = pd.read_excel(book, sheet_name="Line by Line Details")
    assert list(details["Line Number"]) == [1, 2, 3]


@pytest.mark.parametrize("fmt", ["csv", "xlsx"])
def test_cli_describe_export(workbooks, temp_workdir: Path, fmt: str):
    invoice, _ = workbooks
    code = cli_main(["describe", "--invoice", str(invoice), "--format", fmt, "--output-dir", "desc"])
    assert code == 0
    assert (temp_workdir / "desc" / f"invoice-descriptions.{fmt}").exists()
