from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

"""Grid and HeaderLocation domain models.

A Grid is the read-only, 1-indexed view of a single worksheet. The excel
reader builds one Grid per worksheet; the header locator only ever sees Grids.
"""

__all__ = [
    "Grid",
    "HeaderLocation",
    "is_blank",
    "MAX_START_COLUMN",
]

# テンプレート開始列の探索上限 (1..4)
MAX_START_COLUMN = 4


def is_blank(value: Any) -> bool:
    """Return True for empty cells (None, NaN, whitespace-only strings)."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str) and value.strip() == "":
        return True
    return False


@dataclass(frozen=True)
class Grid:
    """Read-only 2-D cell source standing in for a worksheet.

    Rows and columns are 1-indexed. ``max_row`` / ``max_column`` of ``None``
    means the extent is undefined (rejected by the header locator).
    """
    name: str
    cells: tuple[tuple[Any, ...], ...] = field(repr=False)
    max_row: int | None
    max_column: int | None

    @classmethod
    def from_rows(cls, name: str, rows: Sequence[Sequence[Any]]) -> Grid:
        """Build a Grid from a list of row lists (ragged rows allowed)."""
        cells = tuple(tuple(r) for r in rows)
        max_column = max((len(r) for r in cells), default=0)
        return cls(name=name, cells=cells, max_row=len(cells), max_column=max_column)

    def cell(self, row: int, column: int) -> Any:
        """Return the cell value at (row, column) or None outside the data."""
        if row < 1 or column < 1:
            return None
        if row > len(self.cells):
            return None
        values = self.cells[row - 1]
        if column > len(values):
            return None
        return values[column - 1]

    def row_values(self, row: int) -> list[Any]:
        width = self.max_column or 0
        return [self.cell(row, c) for c in range(1, width + 1)]


@dataclass(frozen=True)
class HeaderLocation:
    """Position of the first data row below a matched header template.

    row: the row immediately below the header line (1-based)
    column: the column at which the template begins (1..4)
    """
    row: int
    column: int
    sheet_name: str = ""
    sheet_index: int = 0

    def __post_init__(self) -> None:
        if self.row < 1:
            raise ValueError(f"header location row must be >= 1 (got {self.row})")
        if not 1 <= self.column <= MAX_START_COLUMN:
            raise ValueError(
                f"header location column must be in 1..{MAX_START_COLUMN} (got {self.column})"
            )
