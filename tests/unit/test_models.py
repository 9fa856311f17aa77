from __future__ import annotations

import math
from pathlib import Path

import pytest

from ledger_import.models.grid import Grid, HeaderLocation, is_blank
from ledger_import.models.statement_file import FileStatus, StatementFile
from ledger_import.models.transaction_record import TransactionRecord


def test_grid_is_one_indexed_with_ragged_rows():
    grid = Grid.from_rows("S", [["a", "b"], ["c"]])
    assert (grid.max_row, grid.max_column) == (2, 2)
    assert grid.cell(1, 1) == "a"
    assert grid.cell(1, 2) == "b"
    assert grid.cell(2, 2) is None
    assert grid.cell(0, 1) is None
    assert grid.cell(3, 1) is None
    assert grid.row_values(2) == ["c", None]


@pytest.mark.parametrize("value", [None, "", "   ", math.nan])
def test_is_blank(value):
    assert is_blank(value)


@pytest.mark.parametrize("value", [0, "0", "x", 0.0])
def test_is_not_blank(value):
    assert not is_blank(value)


def test_header_location_invariants():
    assert HeaderLocation(row=1, column=4).column == 4
    with pytest.raises(ValueError):
        HeaderLocation(row=0, column=1)
    with pytest.raises(ValueError):
        HeaderLocation(row=2, column=5)
    with pytest.raises(ValueError):
        HeaderLocation(row=2, column=0)


def test_file_status_enum_values():
    assert {s.value for s in FileStatus} == {"pending", "processing", "success", "skipped", "failed"}


def test_statement_file_defaults():
    sf = StatementFile(path=Path("/x/HDFC_DC_A_1.xls"), name="HDFC_DC_A_1.xls")
    assert sf.status == FileStatus.PENDING
    assert sf.records == ()
    assert sf.record_count == 0
    assert sf.mop is None
    assert sf.error is None


def test_transaction_record_defaults_and_immutability():
    rec = TransactionRecord(date="d", narration="n", mop="m")
    assert (rec.item, rec.category, rec.place, rec.freq, rec.for_) == ("",) * 5
    with pytest.raises(AttributeError):
        rec.item = "x"  # type: ignore[misc]
