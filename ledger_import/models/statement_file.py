from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from .grid import HeaderLocation
from .transaction_record import TransactionRecord

"""StatementFile domain model and FileStatus enum.

StatementFile is the processing context for a single statement export,
tracking its status from discovery to success / skipped / failed.
"""


class FileStatus(Enum):
    """Status enum for StatementFile processing lifecycle.

    State transitions: pending → processing → (success | skipped | failed)

    - SKIPPED: no header template found; reported, not fatal
    - FAILED: malformed input / filename, transform or I/O failure
    """
    PENDING = "pending"
    PROCESSING = "processing"
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class StatementFile:
    """Processing context for a single statement file."""
    path: Path                                  # Source statement path
    name: str                                   # File name
    mop: str | None = None                      # Mode-of-payment tag derived from filename
    location: HeaderLocation | None = None      # Where the data rows start
    records: tuple[TransactionRecord, ...] = ()  # Ledger rows in source order
    start_time: datetime | None = None
    end_time: datetime | None = None
    status: FileStatus = FileStatus.PENDING
    output_path: Path | None = None             # Written ledger workbook
    error: str | None = None                    # Failure / skip reason

    @property
    def record_count(self) -> int:
        return len(self.records)
