# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pandas as pd
import pytest

from hs_reconcile.logging.init import reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("HS_RECONCILE_CONFIG", raising=False)
        yield p


@pytest.fixture(autouse=True)
def _clean_logging():
    # CLI テストごとにハンドラ (capsys の stdout) を張り直す
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """invoice:
  hs_code: [B]
  amount: [C, D]
packing_list:
  cartons: [B]
  net_weight: [C]
  gross_weight: [D]
output:
  directory: ./out
  format: csv
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "reconcile.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


def make_workbook(path: Path, rows: list[list[object]]) -> Path:
    """Write rows (row 0 = header) into the first sheet of a new .xlsx file."""
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name="Sheet1", header=False, index=False)
    return path


@pytest.fixture()
def make_xlsx():
    return make_workbook


@pytest.fixture()
def invoice_rows() -> list[list[object]]:
    # 列: A=description, B=HS code, C=amount, D=extra amount
    rows: list[list[object]] = [
        ["Description", "HS Code", "Amount", "Extra"],
        [None, None, None, None],
        ["Cotton shirts", "6105", 100, None],
        ["Cotton shirts", "6105", 50, None],
        ["Wool jackets", "6201", 80, 20],
        ["Spare buttons", "9606", 0, None],  # amount 0 -> dropped
    ]
    while len(rows) < 11:
        rows.append([None, None, None, None])
    rows += [
        ["Widget A", None, None, None],
        [None, None, None, None],
        ["Widget B", None, None, None],
        ["Net Weight: 200kg", None, None, None],
        ["Not collected", None, None, None],
    ]
    return rows


@pytest.fixture()
def packing_rows() -> list[list[object]]:
    # 列: A=item, B=cartons, C=net weight, D=gross weight
    return [
        ["Item", "Cartons", "N.W.", "G.W."],
        ["Cotton shirts", 5, 10, 12],
        ["Cotton shirts", "2+1", "6", "7 kg"],
        ["Wool jackets", 4, 8.5, 9.5],
    ]


@pytest.fixture()
def workbooks(temp_workdir: Path, invoice_rows, packing_rows) -> tuple[Path, Path]:
    data = temp_workdir / "data"
    return (
        make_workbook(data / "invoice.xlsx", invoice_rows),
        make_workbook(data / "packing.xlsx", packing_rows),
    )
