#!/usr/bin/env python3
"""Sample statement generator.

Writes synthetic bank-statement exports shaped like the real ones:
- a few title / account metadata rows above the table
- the seven-column header template, optionally shifted right by 0..3 columns
- data rows with ``dd/mm/yy`` dates, some narrations containing RESET

Output files follow the ``<Bank>_<AccountType>_<HolderName>_<yymmdd>.xlsx``
naming convention so they can be fed straight to ``ledger-import``.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from ledger_import.models.transaction_record import HEADER_TEMPLATE

NARRATIONS = [
    "UPI-GROCERY MART-PAYMENT",
    "ATM WDL-CASH",
    "NEFT CR-SALARY",
    "POS FUEL STATION",
    "ATM RESET FEE",
    "IMPS-RENT",
    "BALANCE RESET ADJ",
]


def generate_statement_rows(rows: int, seed: int = 42) -> list[list[Any]]:
    """Generate ``rows`` statement data rows (template column order)."""
    rng = np.random.default_rng(seed)
    dates = pd.date_range("2023-04-01", periods=max(rows, 1), freq="D")
    balance = 50_000.0
    data: list[list[Any]] = []
    for i in range(rows):
        d = dates[i].strftime("%d/%m/%y")
        narration = str(rng.choice(NARRATIONS))
        amount = float(np.round(rng.uniform(10, 5000), 2))
        if narration.startswith("NEFT CR"):
            withdrawal, deposit = None, amount
            balance += amount
        else:
            withdrawal, deposit = amount, None
            balance -= amount
        ref = f"{int(rng.integers(10**11, 10**12)):012d}"
        data.append([d, narration, ref, d, withdrawal, deposit, round(balance, 2)])
    return data


def create_statement_file(
    output_path: Path,
    rows: int,
    title_rows: int = 3,
    column_offset: int = 0,
    seed: int = 42,
) -> None:
    """Create one statement workbook (single sheet)."""
    if not 0 <= column_offset <= 3:
        raise ValueError("column_offset must be in 0..3 (template start column 1..4)")
    output_path.parent.mkdir(parents=True, exist_ok=True)

    pad = [None] * column_offset
    sheet: list[list[Any]] = []
    for i in range(title_rows):
        sheet.append(pad + [f"Statement title line {i + 1}"])
    sheet.append([])  # blank separator row
    sheet.append(pad + list(HEADER_TEMPLATE))
    for r in generate_statement_rows(rows, seed):
        sheet.append(pad + r)

    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        pd.DataFrame(sheet).to_excel(writer, sheet_name="Sheet1", header=False, index=False)

    print(f"Created statement file: {output_path}")
    print(f"  Data rows: {rows} (header at row {title_rows + 2}, column {column_offset + 1})")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate synthetic bank statement exports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s data/HDFC_SA_JohnDoe_240919.xlsx
  %(prog)s data/ICICI_CC_JaneRoe_240901.xlsx --rows 500 --column-offset 2
        """,
    )
    parser.add_argument("output", type=Path, help="Output statement path")
    parser.add_argument("--rows", type=int, default=100, help="Data rows (default: 100)")
    parser.add_argument("--title-rows", type=int, default=3, help="Rows above the header (default: 3)")
    parser.add_argument("--column-offset", type=int, default=0, help="Header shift 0..3 (default: 0)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    try:
        create_statement_file(args.output, args.rows, args.title_rows, args.column_offset, args.seed)
    except Exception as e:
        print(f"Error creating statement file: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
