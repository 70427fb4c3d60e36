from __future__ import annotations

import logging
from pathlib import Path

from ..excel.reader import WorkbookError, read_grid
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.config_models import ReconcileConfig
from ..models.results import DescriptionResult, ReconciliationResult
from .descriptions import extract_descriptions
from .reconcile import NO_DESCRIPTION_DATA, NoDataError, ProcessingError, reconcile
from .records import build_invoice_records, build_packing_list_records

logger = logging.getLogger(__name__)

"""Service orchestration for one reconciliation or description run.

Each run is a single call: read the workbook(s), build records, reconcile,
return immutable results. Failures (unreadable workbook, a stage without
usable rows) are recorded in the JSON Lines error log and re-raised to the
caller; there is no partial result.
"""

__all__ = [
    "ProcessingError",
    "NoDataError",
    "run_reconciliation",
    "run_descriptions",
]


def _read(path: Path, error_log: ErrorLogBuffer) -> list[list]:
    try:
        grid = read_grid(path)
    except WorkbookError as e:
        error_log.append(ErrorRecord.create(path.name, "read", "WORKBOOK_ERROR", str(e)))
        error_log.flush()
        raise
    logger.debug(f"read {path.name}: rows={len(grid)}")
    return grid


def _record_no_data(error_log: ErrorLogBuffer, file: str, e: NoDataError) -> None:
    error_log.append(ErrorRecord.create(file, e.stage, "NO_DATA", e.message))
    error_log.flush()


def run_reconciliation(
    invoice_path: Path,
    packing_list_path: Path,
    config: ReconcileConfig,
    error_log: ErrorLogBuffer | None = None,
) -> ReconciliationResult:
    """Reconcile an invoice workbook against a packing list workbook.

    The description block of the invoice sheet is extracted alongside; in
    this mode an empty block is not an error.

    Raises:
        WorkbookError: Either workbook is missing or unreadable
        NoDataError: No invoice rows, no packing list rows, or no overlap
    """
    error_log = error_log if error_log is not None else ErrorLogBuffer()
    invoice_grid = _read(invoice_path, error_log)
    packing_grid = _read(packing_list_path, error_log)

    descriptions = extract_descriptions(invoice_grid)
    invoices = build_invoice_records(invoice_grid, config.columns.invoice)
    packing_list = build_packing_list_records(packing_grid, config.columns.packing_list)
    logger.info(
        f"records: invoice={len(invoices)} packing_list={len(packing_list)} "
        f"descriptions={len(descriptions)}"
    )

    try:
        result = reconcile(invoices, packing_list)
    except NoDataError as e:
        file = {
            "invoice": invoice_path.name,
            "packing_list": packing_list_path.name,
        }.get(e.stage, "")
        _record_no_data(error_log, file, e)
        raise

    return ReconciliationResult(
        summary=result.summary,
        details=result.details,
        descriptions=tuple(descriptions),
        invoice_records=result.invoice_records,
        packing_list_records=result.packing_list_records,
    )


def run_descriptions(path: Path, error_log: ErrorLogBuffer | None = None) -> DescriptionResult:
    """Extract the description block of an invoice workbook.

    Raises:
        WorkbookError: The workbook is missing or unreadable
        NoDataError: stage "description" when the block is empty
    """
    error_log = error_log if error_log is not None else ErrorLogBuffer()
    grid = _read(path, error_log)
    entries = extract_descriptions(grid)
    if not entries:
        e = NoDataError("description", NO_DESCRIPTION_DATA)
        _record_no_data(error_log, path.name, e)
        raise e
    logger.info(f"descriptions: {len(entries)} row(s) from {path.name}")
    return DescriptionResult(entries=tuple(entries))
