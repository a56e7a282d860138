from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

from ..analysis.profiler import analyze_dataset
from ..excel.reader import SheetHeaderError, normalize_sheet, read_excel_file
from ..logging.error_log import ErrorLogBuffer
from ..models.config_models import AnalysisConfig
from ..models.dataset import Dataset, StructuralInputError
from ..models.dataset_summary import StatisticsArtifact
from ..models.error_record import FILE_LEVEL, ErrorRecord
from ..models.run_result import FileStat, RunResult, average_quality
from .artifacts import artifact_path, write_artifact
from .progress import ProgressTracker, SheetProgressIndicator

"""Run orchestration for the spreadsheet analysis tool.

analyze_all():
1. Scan the source directory for .xlsx files (non-recursive, sorted by name)
2. Analyze every sheet of every workbook into a StatisticsArtifact
3. Write artifacts as JSON when an output directory is configured
4. Record sheet / file failures in the error log and keep going
5. Return the aggregated RunResult
"""

__all__ = [
    "ProcessingError",
    "SheetAnalysis",
    "WorkbookAnalysis",
    "scan_excel_files",
    "analyze_workbook",
    "analyze_all",
]

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Fatal error that prevents the run from starting."""


@dataclass(frozen=True)
class SheetAnalysis:
    dataset: Dataset
    artifact: StatisticsArtifact


@dataclass
class WorkbookAnalysis:
    path: Path
    sheets: list[SheetAnalysis] = field(default_factory=list)
    skipped_sheets: int = 0
    failed_sheets: int = 0
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None or self.failed_sheets > 0


def scan_excel_files(directory: Path) -> list[Path]:
    """List .xlsx files in `directory` (non-recursive).

    Raises:
        ProcessingError: If directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")
    try:
        return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix == ".xlsx")
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def analyze_workbook(
    file_path: Path,
    config: AnalysisConfig,
    error_log: ErrorLogBuffer,
) -> WorkbookAnalysis:
    """Analyze every sheet of one workbook.

    A sheet without any cells is skipped. A structurally invalid sheet is
    recorded in the error log and marks the workbook failed, but the
    remaining sheets are still analyzed.
    """
    result = WorkbookAnalysis(path=file_path)
    try:
        raw_sheets = read_excel_file(file_path)
    except Exception as e:  # openpyxl/zipfile raise a variety of types for corrupt files
        logger.error(f"read failed file={file_path.name}: {e}")
        error_log.append(ErrorRecord.create(file_path.name, FILE_LEVEL, "READ_ERROR", str(e)))
        result.error = f"read failed: {e}"
        return result

    sheet_progress = SheetProgressIndicator(file_name=file_path.name, total_sheets=len(raw_sheets))
    for sheet_name, df in raw_sheets.items():
        sheet_progress.start_sheet(sheet_name)
        try:
            dataset = normalize_sheet(df, sheet_name, null_sentinels=config.null_sentinels)
        except SheetHeaderError as e:
            logger.info(f"skip sheet file={file_path.name} sheet={sheet_name}: {e}")
            result.skipped_sheets += 1
            sheet_progress.finish_sheet(success=True)
            continue
        except StructuralInputError as e:
            logger.warning(f"invalid sheet file={file_path.name} sheet={sheet_name}: {e}")
            error_log.append(ErrorRecord.create(file_path.name, sheet_name, "STRUCTURAL_INPUT_ERROR", str(e)))
            result.failed_sheets += 1
            sheet_progress.finish_sheet(success=False)
            continue

        artifact = analyze_dataset(dataset)
        result.sheets.append(SheetAnalysis(dataset=dataset, artifact=artifact))
        if config.output_directory:
            out = write_artifact(artifact, artifact_path(Path(config.output_directory), file_path, sheet_name))
            logger.debug(f"artifact written: {out}")
        sheet_progress.finish_sheet(
            success=True,
            records=artifact.summary.total_records,
            quality=artifact.summary.data_quality,
        )
    return result


def analyze_all(config: AnalysisConfig) -> RunResult:
    """Analyze all workbooks in the configured source directory.

    Raises:
        ProcessingError: the source directory is missing or unreadable
    """
    start_time = datetime.now(UTC)
    error_log = ErrorLogBuffer()
    file_paths = scan_excel_files(Path(config.source_directory))

    file_stats: list[FileStat] = []
    qualities: list[int] = []
    success_count = 0
    failed_count = 0
    analyzed_sheets = 0
    skipped_sheets = 0
    total_records = 0

    with ProgressTracker(len(file_paths)) as progress:
        for file_path in file_paths:
            progress.start_file(file_path)
            file_start = datetime.now(UTC)
            workbook = analyze_workbook(file_path, config, error_log)
            file_elapsed = (datetime.now(UTC) - file_start).total_seconds()

            file_qualities = tuple(s.artifact.summary.data_quality for s in workbook.sheets)
            file_records = sum(s.artifact.summary.total_records for s in workbook.sheets)
            if workbook.failed:
                failed_count += 1
            else:
                success_count += 1
            analyzed_sheets += len(workbook.sheets)
            skipped_sheets += workbook.skipped_sheets
            total_records += file_records
            qualities.extend(file_qualities)

            progress.set_postfix(success=success_count, failed=failed_count, records=total_records)
            progress.finish_file()

            file_stats.append(
                FileStat(
                    file_name=file_path.name,
                    status="failed" if workbook.failed else "success",
                    analyzed_sheets=len(workbook.sheets),
                    total_records=file_records,
                    elapsed_seconds=file_elapsed,
                    qualities=file_qualities,
                    error=workbook.error,
                )
            )

    log_path = error_log.flush()
    if log_path is not None:
        logger.warning(f"errors recorded in {log_path}")

    end_time = datetime.now(UTC)
    return RunResult(
        success_files=success_count,
        failed_files=failed_count,
        analyzed_sheets=analyzed_sheets,
        skipped_sheets=skipped_sheets,
        total_records=total_records,
        average_quality=average_quality(qualities),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
    )
