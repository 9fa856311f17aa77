from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .transaction_record import TransactionRecord

"""Processing result models for the statement importer.

Aggregates per-file statistics and the batch-level summary used for the
SUMMARY output line and the CLI exit code.
"""


@dataclass(frozen=True)
class FileStat:
    """Per-file processing statistics (internal helper for ProcessingResult)."""
    file_name: str  # ファイル名
    status: str  # success/skipped/failed
    records: int  # 出力レコード数 (成功時のみ)
    elapsed_seconds: float  # ファイル処理時間
    mop: str | None = None
    reason: str | None = None  # skip / failure reason


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results for one batch run."""
    success_files: int
    skipped_files: int
    failed_files: int
    total_records: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    throughput_rows_per_sec: float  # total_records / elapsed
    file_stats: list[FileStat] | None = None
    # file name -> ledger records, successful files only (processing order)
    outputs: dict[str, list[TransactionRecord]] = field(default_factory=dict)

    @property
    def total_files(self) -> int:
        return self.success_files + self.skipped_files + self.failed_files

    @property
    def has_failures(self) -> bool:
        return (self.skipped_files + self.failed_files) > 0
