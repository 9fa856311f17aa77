from __future__ import annotations

from dataclasses import dataclass
from typing import Any

"""TransactionRecord model: the normalized ledger row.

The header template identifies where tabular data starts in a source
statement; OUTPUT_COLUMNS is the fixed column order of the ledger workbook.
"""

__all__ = [
    "HEADER_TEMPLATE",
    "OUTPUT_COLUMNS",
    "ENRICHMENT_FIELDS",
    "RawRow",
    "TransactionRecord",
]

HEADER_TEMPLATE: tuple[str, ...] = (
    "Date",
    "Narration",
    "Chq./Ref.No.",
    "Value Dt",
    "Withdrawal Amt.",
    "Deposit Amt.",
    "Closing Balance",
)

OUTPUT_COLUMNS: tuple[str, ...] = (
    "Date",
    "Narration",
    "Item",
    "Category",
    "Place",
    "Freq",
    "For",
    "MOP",
    "Amt (Dr)",
    "Chq./Ref.No.",
    "Value Dt",
    "Amt (Cr)",
)

# Classification overlay fields, filled in by hand after import
ENRICHMENT_FIELDS: tuple[str, ...] = ("item", "category", "place", "freq", "for_")

# Template label -> cell value for one data row
RawRow = dict[str, Any]


@dataclass(frozen=True)
class TransactionRecord:
    """One ledger row produced from a statement row.

    ``for_`` is rendered as the ``For`` column (``for`` is a keyword).
    Amount fields are passed through exactly as read from the statement.
    """
    date: Any
    narration: Any
    mop: str
    amt_dr: Any = None
    chq_ref: Any = None
    value_dt: Any = None
    amt_cr: Any = None
    item: str = ""
    category: str = ""
    place: str = ""
    freq: str = ""
    for_: str = ""

    def to_row(self) -> list[Any]:
        """Values in OUTPUT_COLUMNS order."""
        return [
            self.date,
            self.narration,
            self.item,
            self.category,
            self.place,
            self.freq,
            self.for_,
            self.mop,
            self.amt_dr,
            self.chq_ref,
            self.value_dt,
            self.amt_cr,
        ]

    def to_dict(self) -> dict[str, Any]:
        return dict(zip(OUTPUT_COLUMNS, self.to_row(), strict=True))
