from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd

from ..models.grid import Grid, is_blank

"""Workbook reader: statement export -> list of Grids.

Every worksheet is read raw (header=None) so the header locator can search
for the template itself. Legacy ``.xls`` exports go through pandas' xlrd
engine, ``.xlsx`` through openpyxl; both end up as the same Grid shape.

NA 変換は無効化する (``N/A`` 等のセル文字列はそのまま残す)。
"""

__all__ = [
    "read_workbook",
    "dataframe_to_grid",
    "WorkbookReadError",
]


class WorkbookReadError(Exception):
    """Raised when a workbook cannot be opened or parsed."""


def _clean_cell(value: Any) -> Any:
    # 空セル / NaN は None に統一
    if is_blank(value):
        return None
    return value


def dataframe_to_grid(df: pd.DataFrame, sheet_name: str) -> Grid:
    """Convert a raw (header=None) DataFrame into a 1-indexed Grid."""
    rows = [[_clean_cell(v) for v in row] for row in df.itertuples(index=False, name=None)]
    return Grid(
        name=sheet_name,
        cells=tuple(tuple(r) for r in rows),
        max_row=int(df.shape[0]),
        max_column=int(df.shape[1]),
    )


def read_workbook(path: Path) -> list[Grid]:
    """Read every worksheet of ``path`` in workbook order.

    Raises:
        WorkbookReadError: the file is not a readable spreadsheet
    """
    try:
        xls = pd.ExcelFile(path)
    except Exception as e:
        raise WorkbookReadError(f"cannot open workbook {path.name}: {e}") from e
    grids: list[Grid] = []
    with xls:
        for name in xls.sheet_names:
            df = xls.parse(name, header=None, dtype=object, keep_default_na=False)
            grids.append(dataframe_to_grid(df, str(name)))
    return grids
