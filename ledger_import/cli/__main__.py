from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from ledger_import.config.loader import DEFAULT_CONFIG_PATH, ConfigError, LedgerConfig, load_config
from ledger_import.logging.init import log_summary, setup_logging
from ledger_import.services.orchestrator import ProcessingError, process_all, process_files
from ledger_import.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, then the YAML config (``--config`` / ``LEDGER_CONFIG`` /
  config/ledger.yml)
- Explicit statement paths on the command line are processed as given;
  without paths the configured source directory is scanned
- Print the SUMMARY line and map the result to an exit code
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

CONFIG_ENV_VAR = "LEDGER_CONFIG"


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv; failures only warn."""
    try:
        if path.exists():
            load_dotenv(dotenv_path=path, override=override)
    except OSError as e:  # pragma: no cover
        print(f"WARNING: failed to load .env via python-dotenv: {e}")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Bank statement -> ledger workbook importer")
    p.add_argument("paths", nargs="*", type=Path, help="Statement files (default: scan source_directory)")
    p.add_argument("--config", type=Path, default=None, help="Config file (default: config/ledger.yml)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print header location & first rows then exit")
    p.add_argument("--no-write", action="store_true", help="Transform only, do not write ledger workbooks")
    return p.parse_args(argv)


def _resolve_config_path(args: argparse.Namespace) -> Path:
    if args.config is not None:
        return args.config
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def _inspect_data(cfg: LedgerConfig, paths: list[Path]) -> int:
    from ledger_import.excel.reader import read_workbook
    from ledger_import.services.header_locator import locate_header, read_raw_rows
    from ledger_import.services.orchestrator import scan_statement_files

    if not paths:
        try:
            paths = scan_statement_files(
                Path(cfg.source_directory), cfg.file_pattern, exclude_suffix=cfg.output_suffix
            )
        except ProcessingError as e:
            print(f"inspect: {e}")
            return EXIT_FATAL
    if not paths:
        print("inspect: no statement files")
        return 0
    for f in paths:
        print(f"FILE: {f.name}")
        try:
            grids = read_workbook(f)
            location = locate_header(grids)
        except Exception as e:
            print(f"  read_error: {e}")
            continue
        print(f"  SHEETS: {[g.name for g in grids]}")
        if location is None:
            print("  HEADER: not found")
            continue
        print(
            f"  HEADER: sheet={location.sheet_name} data_row={location.row} column={location.column}"
        )
        sample = []
        for _, raw in read_raw_rows(grids[location.sheet_index], location):
            # datetime セルは isoformat で表示
            sample.append({k: (v.isoformat() if hasattr(v, "isoformat") else v) for k, v in raw.items()})
            if len(sample) == 3:
                break
        print("    sample_rows=", sample)
    return 0


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む ([] はそのまま使う)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    config_path = _resolve_config_path(args)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        for h in logger.handlers:
            h.setLevel("DEBUG")
        logger.setLevel("DEBUG")
        logger.debug("debug mode enabled")

    if args.inspect_data:
        return _inspect_data(cfg, list(args.paths))

    write_output = not args.no_write
    if args.paths:
        missing = [p for p in args.paths if not p.is_file()]
        for p in missing:
            logger.warning(f"not a file (will be reported as failed): {p}")
        logger.info(f"Processing {len(args.paths)} statement file(s) from command line")
        result = process_files(list(args.paths), cfg, write_output=write_output)
    else:
        logger.info(f"Processing statements from: {cfg.source_directory}")
        try:
            result = process_all(cfg, write_output=write_output)
        except ProcessingError as e:
            logger.error(f"discovery: {e}")
            return EXIT_FATAL

    summary_line = render_summary_line(result)
    # log_summary adds the "SUMMARY " prefix itself
    log_summary(summary_line[len("SUMMARY "):])

    if result.has_failures:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
