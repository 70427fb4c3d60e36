from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for structured error logging.

One record per failed run (no usable rows, unreadable workbook). Records are
written as JSON Lines by ErrorLogBuffer (hs_reconcile.logging.error_log) with
a fixed key set: timestamp, file, stage, error_type, message.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Workbook filename the failure relates to ("" when it spans both inputs)
        stage: Pipeline stage that produced no usable data (invoice, packing_list, matching, description, read)
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: Human readable description shown to the operator
    """
    timestamp: str  # ISO8601 UTC
    file: str
    stage: str
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(file: str, stage: str, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord with current UTC timestamp."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            stage=stage,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        """Serialize ErrorRecord to JSON Lines format."""
        # 追加キー阻止: dataclass -> dict して json.dumps
        return json.dumps(asdict(self), ensure_ascii=False)
