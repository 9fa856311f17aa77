# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pandas as pd
import pytest

HEADER = [
    "Date",
    "Narration",
    "Chq./Ref.No.",
    "Value Dt",
    "Withdrawal Amt.",
    "Deposit Amt.",
    "Closing Balance",
]


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
file_pattern: "*.xlsx"
output_directory: ./out
output_suffix: _ledger
century_cutoff: 50
reference_year: 2024
reset_marker: RESET
column_widths:
  Narration: 55
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "ledger.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def statement_rows() -> list[list[Any]]:
    """Title rows, a blank row, the header, three transactions."""
    return [
        ["HDFC BANK Ltd.", None, None],
        ["Statement of account", None, None],
        [None, None, None],
        HEADER,
        ["05/06/23", "UPI-GROCERY MART", "0000123", "05/06/23", 250.5, None, 9749.5],
        ["06/06/23", "ATM RESET FEE", "0000124", "06/06/23", 10, None, 9739.5],
        ["07/06/23", "NEFT CR-SALARY", "0000125", "07/06/23", None, 5000, 14739.5],
    ]


def _write_workbook(path: Path, sheets: dict[str, list[list[Any]]]) -> Path:
    """Write raw rows (no header handling) to an .xlsx workbook."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for sheet_name, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)
    return path


@pytest.fixture()
def make_statement(temp_workdir: Path, statement_rows) -> Callable[..., Path]:
    """Factory: make_statement(name, rows=None, sheet="Sheet1") -> path under data/."""
    def _make(name: str, rows: list[list[Any]] | None = None, sheet: str = "Sheet1") -> Path:
        return _write_workbook(
            temp_workdir / "data" / name, {sheet: rows if rows is not None else statement_rows}
        )
    return _make


@pytest.fixture()
def make_workbook() -> Callable[[Path, dict[str, list[list[Any]]]], Path]:
    """Factory: make_workbook(path, {sheet: rows}) -> path."""
    return _write_workbook
