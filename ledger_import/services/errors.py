from __future__ import annotations

"""Per-file error taxonomy.

Every exception here is caught at the file boundary by the orchestrator,
recorded in the error log with its ``error_type`` and never aborts a batch.
"""

__all__ = [
    "StatementError",
    "MalformedInput",
    "HeaderNotFound",
    "MalformedFilename",
    "TransformFailure",
]


class StatementError(Exception):
    """Base class for errors scoped to a single statement file."""

    error_type = "STATEMENT_ERROR"


class MalformedInput(StatementError):
    """Raised when a workbook has no worksheets or a worksheet has no extent."""

    error_type = "MALFORMED_INPUT"


class HeaderNotFound(StatementError):
    """Raised when no worksheet contains the header template (file is skipped)."""

    error_type = "HEADER_NOT_FOUND"


class MalformedFilename(StatementError):
    """Raised when a filename has fewer than three underscore-delimited tokens."""

    error_type = "MALFORMED_FILENAME"


class TransformFailure(StatementError):
    """Raised when mapping a data row to a TransactionRecord fails unexpectedly."""

    error_type = "TRANSFORM_FAILURE"

    def __init__(self, message: str, row: int = -1) -> None:
        super().__init__(message)
        self.row = row
