"""Domain models for the invoice / packing list reconciliation tool.

This package contains the value records produced by one reconciliation run
and the configuration models consumed by it. Every model is a frozen
dataclass; nothing here is mutated after construction.
"""

from .config_models import ColumnMapping, InvoiceColumns, OutputConfig, PackingListColumns, ReconcileConfig
from .error_record import ErrorRecord
from .records import InvoiceRecord, PackingListRecord
from .results import (
    DescriptionEntry,
    DescriptionResult,
    DetailRow,
    ReconciliationResult,
    SummaryRow,
)

__all__ = [
    # Configuration models
    "ColumnMapping",
    "InvoiceColumns",
    "OutputConfig",
    "PackingListColumns",
    "ReconcileConfig",
    # Source records
    "InvoiceRecord",
    "PackingListRecord",
    # Results
    "DescriptionEntry",
    "DescriptionResult",
    "DetailRow",
    "ReconciliationResult",
    "SummaryRow",
    # Error logging
    "ErrorRecord",
]
