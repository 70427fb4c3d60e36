from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from hs_reconcile.config.loader import DEFAULT_CONFIG_PATH, ConfigError, default_config, load_config
from hs_reconcile.excel.reader import WorkbookError, read_grid
from hs_reconcile.logging.init import log_summary, setup_logging
from hs_reconcile.models.config_models import ReconcileConfig
from hs_reconcile.services.export import EXPORT_FORMATS, export_descriptions, export_reconciliation
from hs_reconcile.services.inspection import INVOICE, PACKING_LIST, build_preview, validate_structure
from hs_reconcile.services.orchestrator import NoDataError, run_descriptions, run_reconciliation
from hs_reconcile.services.summary import render_description_summary_line, render_summary_line

"""CLI entrypoint.

Commands:
- reconcile: invoice + packing list -> summary / detail (+ description) export
- describe:  invoice only -> description block export
- inspect:   print preview and mapping validation for one workbook

Config file resolution: --config, then $HS_RECONCILE_CONFIG, then
config/reconcile.yml if present, else built-in defaults.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_NO_DATA = 2

CONFIG_ENV = "HS_RECONCILE_CONFIG"


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv (values override the process environment)."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="hs-reconcile",
        description="Reconcile invoice and packing list workbooks by HS code",
    )
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--config", default=None, help="Path to YAML config (default: config/reconcile.yml)")
    sub = p.add_subparsers(dest="command", required=True)

    rec = sub.add_parser("reconcile", help="Aggregate invoice amounts and packing list quantities by HS code")
    rec.add_argument("--invoice", required=True, type=Path, help="Invoice workbook (.xlsx/.xls)")
    rec.add_argument("--packing-list", required=True, type=Path, help="Packing list workbook (.xlsx/.xls)")
    rec.add_argument("--output-dir", type=Path, default=None, help="Export directory (overrides config)")
    rec.add_argument("--format", choices=EXPORT_FORMATS, default=None, help="Export format (overrides config)")

    desc = sub.add_parser("describe", help="Extract the description block (column A from row 12)")
    desc.add_argument("--invoice", required=True, type=Path, help="Invoice workbook (.xlsx/.xls)")
    desc.add_argument("--output-dir", type=Path, default=None)
    desc.add_argument("--format", choices=EXPORT_FORMATS, default=None)

    ins = sub.add_parser("inspect", help="Print headers, sample rows and mapping checks then exit")
    ins.add_argument("file", type=Path)
    ins.add_argument("--kind", choices=(INVOICE, PACKING_LIST), default=INVOICE)
    return p.parse_args(argv)


def _resolve_config(args: argparse.Namespace) -> ReconcileConfig:
    explicit = args.config or os.getenv(CONFIG_ENV)
    if explicit:
        return load_config(Path(explicit))
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return default_config()


def _inspect(path: Path, kind: str, cfg: ReconcileConfig) -> int:
    grid = read_grid(path)
    preview = build_preview(grid)
    print(f"FILE: {path.name} kind={kind}")
    print(f"  headers={preview.headers}")
    print(f"  data_start_row={preview.data_start_row + 1} total_rows={preview.total_rows}")
    for col, info in preview.column_info.items():
        if info.has_data:
            print(f"  col[{col + 1}] samples={info.sample_values}")
    print(f"  mapping={cfg.references[kind]}")
    result = validate_structure(grid, kind, cfg.columns)
    for err in result.errors:
        print(f"  error: {err}")
    for warn in result.warnings:
        print(f"  warning: {warn}")
    print(f"  valid_rows={result.valid_row_count}/{result.row_count}")
    return EXIT_SUCCESS if result.is_valid else EXIT_NO_DATA


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む (空リストはそのまま使う)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        for h in logger.handlers:
            h.setLevel("DEBUG")
        logger.setLevel("DEBUG")
        logger.debug("debug mode enabled")

    try:
        cfg = _resolve_config(args)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    try:
        if args.command == "inspect":
            return _inspect(args.file, args.kind, cfg)

        output_dir = args.output_dir or Path(cfg.output.directory)
        fmt = args.format or cfg.output.format

        if args.command == "describe":
            logger.info(f"Extracting descriptions from: {args.invoice}")
            desc_result = run_descriptions(args.invoice)
            written = export_descriptions(desc_result, output_dir, fmt)
            summary_line = render_description_summary_line(desc_result)
        else:
            logger.info(f"Reconciling: invoice={args.invoice} packing_list={args.packing_list}")
            result = run_reconciliation(args.invoice, args.packing_list, cfg)
            written = export_reconciliation(result, output_dir, fmt)
            summary_line = render_summary_line(result)
    except WorkbookError as e:
        logger.error(f"workbook: {e}")
        return EXIT_FATAL
    except NoDataError as e:
        logger.error(f"{e.stage}: {e.message}")
        return EXIT_NO_DATA

    for path in written:
        logger.info(f"wrote {path}")
    # render_* は "SUMMARY " 付きで返すので log_summary 用に除去
    log_summary(summary_line[len("SUMMARY "):])
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
