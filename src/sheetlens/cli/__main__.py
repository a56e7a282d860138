from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..analysis.charts import ChartProjector
from ..analysis.insights import generate_insights
from ..analysis.profiler import analyze_dataset
from ..analysis.type_inference import infer_type
from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..excel.reader import SheetHeaderError, normalize_sheet, read_excel_file
from ..logging.init import log_summary, setup_logging
from ..models.config_models import AnalysisConfig
from ..models.dataset import AnalysisError
from ..services.orchestrator import ProcessingError, analyze_all, scan_excel_files
from ..services.summary import render_summary_line

"""CLI entrypoint.

- Load .env (python-dotenv), then the YAML config
- Analyze every .xlsx in the source directory and print the SUMMARY line
- --inspect-data / --chart / --insights print per-sheet previews instead
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

CONFIG_ENV_VAR = "SHEETLENS_CONFIG"


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="sheetlens", description="Spreadsheet statistics and chart projection")
    p.add_argument("--config", type=Path, default=None, help="Path to analysis.yml")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print sheet headers, inferred types & first rows then exit")
    p.add_argument("--chart", nargs=2, metavar=("X", "Y"), help="Suggest a chart type for columns X/Y and print its points")
    p.add_argument("--insights", action="store_true", help="Print trend, quality and pattern insights per sheet then exit")
    return p.parse_args(argv)


def _resolve_config_path(arg: Path | None) -> Path:
    if arg is not None:
        return arg
    env_path = os.getenv(CONFIG_ENV_VAR)
    return Path(env_path) if env_path else DEFAULT_CONFIG_PATH


def _iter_datasets(cfg: AnalysisConfig):
    logger = setup_logging()
    for f in scan_excel_files(Path(cfg.source_directory)):
        try:
            sheets = read_excel_file(f)
        except Exception as e:  # 破損ファイルはスキップしてプレビューを続ける
            logger.error(f"read failed file={f.name}: {e}")
            continue
        for sname, df in sheets.items():
            yield f, sname, df


def _inspect_data(cfg: AnalysisConfig) -> int:
    for f, sname, df in _iter_datasets(cfg):
        try:
            ds = normalize_sheet(df, sname, null_sentinels=cfg.null_sentinels)
        except (SheetHeaderError, AnalysisError) as e:
            print(f"FILE: {f.name} SHEET: {sname} error={e}")
            continue
        types = {h: infer_type(ds.column(h)).value for h in ds.headers}
        print(f"FILE: {f.name} SHEET: {sname} rows={ds.row_count}")
        print(f"  types={types}")
        # datetime は JSON 化できないため isoformat で出力
        sample = [
            {k: (v.isoformat() if hasattr(v, "isoformat") else v) for k, v in r.items()}
            for r in ds.rows[:3]
        ]
        print("  sample_rows=", sample)
    return EXIT_SUCCESS_ALL


def _chart_preview(cfg: AnalysisConfig, x: str, y: str) -> int:
    logger = setup_logging()
    for f, sname, df in _iter_datasets(cfg):
        try:
            ds = normalize_sheet(df, sname, null_sentinels=cfg.null_sentinels)
            projector = ChartProjector(ds.headers, cfg.charts)
            chart_type = projector.choose_type(ds.rows, x, y)
            points = projector.project(chart_type, ds.rows, x, y)
        except (SheetHeaderError, AnalysisError) as e:
            logger.info(f"chart skipped file={f.name} sheet={sname}: {e}")
            continue
        title = projector.title(chart_type, x, y)
        logger.info(f"chart file={f.name} sheet={sname} type={chart_type.value} title={title!r}")
        print(json.dumps([p.to_dict() for p in points], ensure_ascii=False))
    return EXIT_SUCCESS_ALL


def _insights(cfg: AnalysisConfig) -> int:
    logger = setup_logging()
    for f, sname, df in _iter_datasets(cfg):
        try:
            ds = normalize_sheet(df, sname, null_sentinels=cfg.null_sentinels)
        except (SheetHeaderError, AnalysisError) as e:
            logger.info(f"insights skipped file={f.name} sheet={sname}: {e}")
            continue
        insights = generate_insights(analyze_dataset(ds), ds)
        print(f"FILE: {f.name} SHEET: {sname}")
        print(json.dumps(insights.to_dict(), ensure_ascii=False))
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみ sys.argv を読む (テストの cli_main([]) 対策)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    load_dotenv(dotenv_path=Path(".env"), override=False)

    config_path = _resolve_config_path(args.config)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    directory = Path(cfg.source_directory)
    if not directory.exists():
        logger.error(f"directory not found: {directory}")
        return EXIT_FATAL

    if args.debug:
        for h in logger.handlers:
            h.setLevel("DEBUG")
        logger.setLevel("DEBUG")
        logger.debug("debug mode enabled")

    logger.info(f"Analyzing files from: {directory}")

    if args.inspect_data:
        return _inspect_data(cfg)
    if args.chart:
        return _chart_preview(cfg, *args.chart)
    if args.insights:
        return _insights(cfg)

    try:
        result = analyze_all(cfg)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    total_files = result.success_files + result.failed_files
    summary_line = render_summary_line(total_files, result)
    # log_summary が "SUMMARY " ラベルを付けるので除去して渡す
    log_summary(summary_line.removeprefix("SUMMARY "))

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":
    raise SystemExit(main())
