from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path

from ..config.loader import LedgerConfig
from ..excel.reader import read_workbook
from ..excel.writer import write_ledger
from ..logging.error_log import ErrorLogBuffer
from ..models.error_record import FILE_LEVEL, ErrorRecord
from ..models.processing_result import FileStat, ProcessingResult
from ..models.statement_file import FileStatus, StatementFile
from ..models.transaction_record import TransactionRecord
from .errors import HeaderNotFound, MalformedFilename, StatementError, TransformFailure
from .header_locator import locate_header, read_raw_rows
from .progress import ProgressTracker
from .row_transformer import transform_rows

logger = logging.getLogger(__name__)

"""Batch orchestration for the statement importer.

Processes an injected list of statement files one at a time:
1. derive the MOP tag from the filename
2. read every worksheet into a Grid
3. locate the header template
4. transform each data row into a TransactionRecord
5. write the ledger workbook

Every per-file error is caught at the file boundary, written to the error
log and reported; the batch always continues with the next file. Only a
failing directory scan (process_all) is fatal.
"""

MOP_TOKENS = 3


class ProcessingError(Exception):
    """Fatal error that prevents the batch from running at all."""
    pass


def derive_mop(path: Path) -> str:
    """Mode-of-payment tag: first three ``_`` tokens of the base name.

    ``HDFC_DC_JohnDoe_240919.xls`` -> ``HDFC_DC_JohnDoe`` (bank, account type,
    holder name).

    Raises:
        MalformedFilename: fewer than three underscore-delimited tokens
    """
    tokens = path.stem.split("_")
    if len(tokens) < MOP_TOKENS:
        raise MalformedFilename(
            f"filename '{path.name}' needs <Bank>_<AccountType>_<HolderName>_..., "
            f"got {len(tokens)} token(s)"
        )
    return "_".join(tokens[:MOP_TOKENS])


def scan_statement_files(
    directory: Path, pattern: str = "*.xls*", exclude_suffix: str | None = None
) -> list[Path]:
    """Scan ``directory`` (non-recursive) for statement files matching ``pattern``.

    Excel lock files (``~$...``) and files whose stem ends with
    ``exclude_suffix`` (our own ledger outputs) are left out. Sorted by name.

    Raises:
        ProcessingError: directory missing or unreadable
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")

    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")

    try:
        candidates = [p for p in directory.glob(pattern) if p.is_file()]
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e

    files = []
    for p in candidates:
        if p.name.startswith("~$"):
            continue
        if exclude_suffix and p.stem.endswith(exclude_suffix):
            continue
        files.append(p)
    return sorted(files, key=lambda p: p.name)


def output_path_for(path: Path, config: LedgerConfig) -> Path:
    return config.output_dir / f"{path.stem}{config.output_suffix}.xlsx"


def _record_failure(
    error_log: ErrorLogBuffer,
    statement: StatementFile,
    error: Exception,
    error_type: str,
    status: FileStatus,
) -> StatementFile:
    sheet = FILE_LEVEL
    row = -1
    if isinstance(error, TransformFailure):
        row = error.row
        if statement.location is not None:
            sheet = statement.location.sheet_name
    error_log.append(
        ErrorRecord.create(
            file=statement.name,
            sheet=sheet,
            row=row,
            error_type=error_type,
            message=str(error),
        )
    )
    if status == FileStatus.SKIPPED:
        logger.warning("file=%s skipped: %s", statement.name, error)
    else:
        logger.error("file=%s failed (%s): %s", statement.name, error_type, error)
    return replace(
        statement,
        status=status,
        records=(),
        end_time=datetime.now(UTC),
        error=str(error),
    )


def process_file(
    path: Path,
    config: LedgerConfig,
    error_log: ErrorLogBuffer,
    *,
    write_output: bool = True,
) -> StatementFile:
    """Process a single statement file; never raises.

    Returns:
        StatementFile with status SUCCESS, SKIPPED (header not found) or FAILED
    """
    statement = StatementFile(
        path=path,
        name=path.name,
        start_time=datetime.now(UTC),
        status=FileStatus.PROCESSING,
    )
    try:
        mop = derive_mop(path)
        statement = replace(statement, mop=mop)

        grids = read_workbook(path)
        location = locate_header(grids)
        if location is None:
            raise HeaderNotFound(
                f"header template not found in {len(grids)} worksheet(s)"
            )
        statement = replace(statement, location=location)
        logger.debug(
            "file=%s mop=%s header sheet=%s row=%d column=%d",
            path.name,
            mop,
            location.sheet_name,
            location.row,
            location.column,
        )

        grid = grids[location.sheet_index]
        records = transform_rows(
            read_raw_rows(grid, location),
            mop,
            date_separator=config.date_separator,
            reference_year=config.reference_year,
            cutoff=config.century_cutoff,
            reset_marker=config.reset_marker,
        )

        output_path = None
        if write_output:
            output_path = write_ledger(
                records, output_path_for(path, config), config.column_widths
            )
            logger.info("file=%s records=%d -> %s", path.name, len(records), output_path)
        else:
            logger.info("file=%s records=%d (not written)", path.name, len(records))

        return replace(
            statement,
            records=tuple(records),
            output_path=output_path,
            status=FileStatus.SUCCESS,
            end_time=datetime.now(UTC),
        )

    except HeaderNotFound as e:
        return _record_failure(error_log, statement, e, e.error_type, FileStatus.SKIPPED)
    except StatementError as e:
        return _record_failure(error_log, statement, e, e.error_type, FileStatus.FAILED)
    except Exception as e:
        # unreadable workbook, write failure etc.
        return _record_failure(error_log, statement, e, "PROCESSING_ERROR", FileStatus.FAILED)


def process_files(
    paths: Sequence[Path],
    config: LedgerConfig,
    *,
    write_output: bool = True,
    error_log: ErrorLogBuffer | None = None,
) -> ProcessingResult:
    """Process ``paths`` sequentially in the given order and aggregate results."""
    start_time = datetime.now(UTC)
    if error_log is None:
        error_log = ErrorLogBuffer()

    file_stats: list[FileStat] = []
    outputs: dict[str, list[TransactionRecord]] = {}
    success_count = 0
    skipped_count = 0
    failed_count = 0
    total_records = 0

    with ProgressTracker(len(paths)) as progress:
        for path in paths:
            progress.start_file(path)
            statement = process_file(path, config, error_log, write_output=write_output)

            if statement.status == FileStatus.SUCCESS:
                success_count += 1
                total_records += statement.record_count
                outputs[statement.name] = list(statement.records)
            elif statement.status == FileStatus.SKIPPED:
                skipped_count += 1
            else:
                failed_count += 1

            elapsed = 0.0
            if statement.start_time and statement.end_time:
                elapsed = (statement.end_time - statement.start_time).total_seconds()
            file_stats.append(
                FileStat(
                    file_name=statement.name,
                    status=statement.status.value,
                    records=statement.record_count,
                    elapsed_seconds=elapsed,
                    mop=statement.mop,
                    reason=statement.error,
                )
            )
            progress.set_postfix(ok=success_count, skipped=skipped_count, failed=failed_count)
            progress.finish_file()

    try:
        log_path = error_log.flush()
    except OSError as e:
        # Don't fail the whole run if the error log cannot be written
        logger.warning("could not write error log: %s", e)
    else:
        if log_path is not None:
            logger.info("error log written: %s", log_path)

    end_time = datetime.now(UTC)
    elapsed_seconds = (end_time - start_time).total_seconds()
    throughput = total_records / elapsed_seconds if elapsed_seconds > 0 else 0.0

    return ProcessingResult(
        success_files=success_count,
        skipped_files=skipped_count,
        failed_files=failed_count,
        total_records=total_records,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed_seconds,
        throughput_rows_per_sec=throughput,
        file_stats=file_stats,
        outputs=outputs,
    )


def process_all(config: LedgerConfig, *, write_output: bool = True) -> ProcessingResult:
    """Discover statements in ``config.source_directory`` and process them.

    Raises:
        ProcessingError: directory scan failed (fatal for the run)
    """
    files = scan_statement_files(
        Path(config.source_directory),
        config.file_pattern,
        exclude_suffix=config.output_suffix,
    )
    logger.info("discovered %d statement file(s) in %s", len(files), config.source_directory)
    return process_files(files, config, write_output=write_output)
