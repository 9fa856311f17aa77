from __future__ import annotations

import json
from pathlib import Path

from ledger_import.cli import main as cli_main
from ledger_import.logging.init import reset_logging

"""End-to-end partial failure: one bad file never aborts the batch.

- file 1: valid statement
- file 2: no header template (skipped, HEADER_NOT_FOUND)
- file 3: valid statement
- file 4: not a spreadsheet (failed, PROCESSING_ERROR)
- file 5: bad filename (failed, MALFORMED_FILENAME)
"""


def test_partial_failure_integration(write_config, temp_workdir: Path, make_statement, capsys):
    reset_logging()
    data = temp_workdir / "data"
    make_statement("A_SA_One_1.xlsx")
    make_statement("B_SA_Two_2.xlsx", rows=[["Title"], ["Date", "Narration", "Amount"], ["01/01/24", "x", 1]])
    make_statement("C_SA_Three_3.xlsx")
    (data / "D_SA_Four_4.xlsx").write_bytes(b"corrupted")
    make_statement("statement.xlsx")

    code = cli_main([])

    out = capsys.readouterr().out
    assert code == 2
    assert "SUMMARY files=5 success=2 skipped=1 failed=2 records=6" in out
    assert "WARN file=B_SA_Two_2.xlsx skipped: header template not found" in out

    out_dir = temp_workdir / "out"
    assert sorted(p.name for p in out_dir.glob("*.xlsx")) == [
        "A_SA_One_1_ledger.xlsx",
        "C_SA_Three_3_ledger.xlsx",
    ]

    log_files = list((temp_workdir / "logs").glob("errors-*.log"))
    assert len(log_files) == 1
    entries = [json.loads(line) for line in log_files[0].read_text(encoding="utf-8").splitlines()]
    assert [(e["file"], e["error_type"]) for e in entries] == [
        ("B_SA_Two_2.xlsx", "HEADER_NOT_FOUND"),
        ("D_SA_Four_4.xlsx", "PROCESSING_ERROR"),
        ("statement.xlsx", "MALFORMED_FILENAME"),
    ]
    assert all(e["row"] == -1 for e in entries)
