"""Domain models for the statement -> ledger importer."""

from .error_record import ErrorRecord
from .grid import Grid, HeaderLocation
from .processing_result import FileStat, ProcessingResult
from .statement_file import FileStatus, StatementFile
from .transaction_record import HEADER_TEMPLATE, OUTPUT_COLUMNS, TransactionRecord

__all__ = [
    # Input models
    "Grid",
    "HeaderLocation",
    "HEADER_TEMPLATE",
    # Output models
    "OUTPUT_COLUMNS",
    "TransactionRecord",
    # Processing models
    "ErrorRecord",
    "FileStat",
    "FileStatus",
    "ProcessingResult",
    "StatementFile",
]
