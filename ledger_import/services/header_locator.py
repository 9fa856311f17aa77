from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence

from ..models.grid import MAX_START_COLUMN, Grid, HeaderLocation, is_blank
from ..models.transaction_record import HEADER_TEMPLATE, RawRow
from .errors import MalformedInput

"""Dynamic header location.

Statement exports pad the sheet with title / account metadata rows and the
vendor may shift the table by a few columns. The locator scans every
worksheet row by row and tests the fixed header template at start columns
1..4; the first match in row-major, column-ascending order wins.
"""

__all__ = [
    "locate_header",
    "read_raw_rows",
    "template_matches_at",
]

logger = logging.getLogger(__name__)


def _validate_grids(grids: Sequence[Grid]) -> None:
    if not grids:
        raise MalformedInput("workbook has no worksheets")
    for grid in grids:
        if grid.max_row is None or grid.max_column is None:
            raise MalformedInput(f"worksheet '{grid.name}' has no defined extent")
        if grid.max_row < 0 or grid.max_column < 0:
            raise MalformedInput(
                f"worksheet '{grid.name}' has invalid extent "
                f"rows={grid.max_row} columns={grid.max_column}"
            )


def _row_is_blank(grid: Grid, row: int) -> bool:
    return all(is_blank(grid.cell(row, c)) for c in range(1, (grid.max_column or 0) + 1))


def template_matches_at(grid: Grid, row: int, column: int) -> bool:
    """True when the header template starts exactly at (row, column).

    Comparison is exact value equality: no stripping, no case folding.
    """
    return all(
        grid.cell(row, column + i) == label for i, label in enumerate(HEADER_TEMPLATE)
    )


def locate_header(grids: Sequence[Grid]) -> HeaderLocation | None:
    """Find the first header template occurrence across ``grids``.

    Returns the location of the first data row (header row + 1) and the
    template start column, or None when no worksheet contains the template.

    Raises:
        MalformedInput: no worksheets, or a worksheet without extents
    """
    _validate_grids(grids)
    for sheet_index, grid in enumerate(grids):
        assert grid.max_row is not None  # validated above
        for row in range(1, grid.max_row + 1):
            if _row_is_blank(grid, row):
                continue
            for column in range(1, MAX_START_COLUMN + 1):
                if template_matches_at(grid, row, column):
                    logger.debug(
                        "header found sheet=%s row=%d column=%d", grid.name, row, column
                    )
                    return HeaderLocation(
                        row=row + 1,
                        column=column,
                        sheet_name=grid.name,
                        sheet_index=sheet_index,
                    )
    return None


def read_raw_rows(grid: Grid, location: HeaderLocation) -> Iterator[tuple[int, RawRow]]:
    """Yield ``(source_row_number, RawRow)`` for every data row below the header.

    Rows whose seven template cells are all empty are skipped.
    """
    last_row = grid.max_row or 0
    for row in range(location.row, last_row + 1):
        values = [grid.cell(row, location.column + i) for i in range(len(HEADER_TEMPLATE))]
        if all(is_blank(v) for v in values):
            continue
        yield row, dict(zip(HEADER_TEMPLATE, values, strict=True))
