from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path

import pandas as pd
from openpyxl.utils import get_column_letter

from ..models.transaction_record import OUTPUT_COLUMNS, TransactionRecord

"""Ledger workbook writer.

Serializes the TransactionRecord sequence of one statement into a single
``Ledger`` sheet with the fixed output column order. Column display widths
are pure presentation and only live here.
"""

__all__ = [
    "DEFAULT_COLUMN_WIDTHS",
    "LEDGER_SHEET_NAME",
    "write_ledger",
]

LEDGER_SHEET_NAME = "Ledger"

DEFAULT_COLUMN_WIDTHS: dict[str, float] = {
    "Date": 12,
    "Narration": 60,
    "Item": 20,
    "Category": 15,
    "Place": 15,
    "Freq": 10,
    "For": 10,
    "MOP": 20,
    "Amt (Dr)": 12,
    "Chq./Ref.No.": 20,
    "Value Dt": 12,
    "Amt (Cr)": 12,
}


def write_ledger(
    records: Sequence[TransactionRecord],
    path: Path,
    column_widths: Mapping[str, float] | None = None,
) -> Path:
    """Write ``records`` to ``path`` (.xlsx) and return the path.

    Unknown labels in ``column_widths`` are ignored; missing ones keep the
    openpyxl default width.
    """
    widths = dict(DEFAULT_COLUMN_WIDTHS if column_widths is None else column_widths)
    df = pd.DataFrame([r.to_row() for r in records], columns=list(OUTPUT_COLUMNS))
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=LEDGER_SHEET_NAME, index=False)
        ws = writer.sheets[LEDGER_SHEET_NAME]
        for idx, label in enumerate(OUTPUT_COLUMNS, start=1):
            if label in widths:
                ws.column_dimensions[get_column_letter(idx)].width = widths[label]
    return path
