from __future__ import annotations

from collections.abc import Iterable

from ..models.transaction_record import ENRICHMENT_FIELDS, RawRow, TransactionRecord
from .date_normalizer import DEFAULT_CENTURY_CUTOFF, normalize_date
from .errors import TransformFailure

"""Raw statement row -> TransactionRecord mapping.

Dates are normalized to four-digit years, amounts pass through untouched and
the per-file MOP tag is attached to every record. Narrations containing the
reset marker get "RESET" in every classification field.
"""

__all__ = [
    "DEFAULT_RESET_MARKER",
    "transform_row",
    "transform_rows",
]

DEFAULT_RESET_MARKER = "RESET"


def transform_row(
    raw_row: RawRow,
    mop: str,
    *,
    date_separator: str | None = None,
    reference_year: int | None = None,
    cutoff: int = DEFAULT_CENTURY_CUTOFF,
    reset_marker: str = DEFAULT_RESET_MARKER,
) -> TransactionRecord:
    narration = raw_row.get("Narration")
    overlay: dict[str, str] = {}
    if isinstance(narration, str) and reset_marker in narration:
        overlay = dict.fromkeys(ENRICHMENT_FIELDS, "RESET")

    return TransactionRecord(
        date=normalize_date(
            raw_row.get("Date"), date_separator, reference_year=reference_year, cutoff=cutoff
        ),
        narration=narration,
        mop=mop,
        amt_dr=raw_row.get("Withdrawal Amt."),
        chq_ref=raw_row.get("Chq./Ref.No."),
        value_dt=normalize_date(
            raw_row.get("Value Dt"), date_separator, reference_year=reference_year, cutoff=cutoff
        ),
        amt_cr=raw_row.get("Deposit Amt."),
        **overlay,
    )


def transform_rows(
    rows: Iterable[tuple[int, RawRow]],
    mop: str,
    *,
    date_separator: str | None = None,
    reference_year: int | None = None,
    cutoff: int = DEFAULT_CENTURY_CUTOFF,
    reset_marker: str = DEFAULT_RESET_MARKER,
) -> list[TransactionRecord]:
    """Transform ``(row_number, RawRow)`` pairs in order.

    Raises:
        TransformFailure: wrapping any unexpected error, with the source row
    """
    records: list[TransactionRecord] = []
    for row_number, raw_row in rows:
        try:
            records.append(
                transform_row(
                    raw_row,
                    mop,
                    date_separator=date_separator,
                    reference_year=reference_year,
                    cutoff=cutoff,
                    reset_marker=reset_marker,
                )
            )
        except Exception as e:
            raise TransformFailure(f"row {row_number}: {e}", row=row_number) from e
    return records
