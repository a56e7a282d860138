#!/usr/bin/env python3
"""Synthetic workbook generator for sheetlens performance runs.

Writes .xlsx files whose first row is the header row (the layout
`sheetlens.excel.reader` expects) followed by data rows that exercise every
inference path:
- text columns (names, categories with repeats for pie/bar charts)
- numeric columns, some stored as currency strings like "$1,200.50"
- boolean token columns (yes/no)
- date columns
- a configurable share of empty cells and "N/A" sentinels
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

CATEGORIES = ["Electronics", "Clothing", "Books", "Food", "Sports", "Home"]


def generate_synthetic_data(rows: int, cols: int, missing_rate: float = 0.02, seed: int = 42) -> pd.DataFrame:
    """Build a DataFrame with mixed column kinds.

    Column mix: ~30% text, ~50% numeric, ~10% boolean tokens, rest dates.
    """
    rng = np.random.default_rng(seed)
    data: dict[str, list[Any]] = {}

    text_cols = max(1, int(cols * 0.3))
    numeric_cols = max(1, int(cols * 0.5))
    bool_cols = max(1, int(cols * 0.1))
    date_cols = max(0, cols - text_cols - numeric_cols - bool_cols)

    for i in range(text_cols):
        if i == 0:
            data["name"] = [f"Item_{rng.integers(1000, 9999)}_{chr(65 + (j % 26))}" for j in range(rows)]
        else:
            data[f"category{i}"] = rng.choice(CATEGORIES, rows).tolist()

    for i in range(numeric_cols):
        if i == 0:
            data["id"] = list(range(1, rows + 1))
        elif i % 2 == 1:
            # 通貨表記の文字列 (数値として解析される)
            data[f"amount{i}"] = [f"${v:,.2f}" for v in rng.uniform(0.01, 9999.99, rows)]
        else:
            data[f"quantity{i}"] = rng.integers(1, 1000, rows).tolist()

    for i in range(bool_cols):
        data[f"active{i}"] = rng.choice(["yes", "no"], rows).tolist()

    dates = pd.date_range("2023-01-01", "2024-12-31", periods=100)
    for i in range(date_cols):
        data[f"date{i}"] = [pd.Timestamp(d).to_pydatetime() for d in rng.choice(dates, rows)]

    df = pd.DataFrame(data)
    if missing_rate > 0:
        # id 列以外にランダムな欠損 / N/A を混ぜる
        for column in df.columns:
            if column == "id":
                continue
            mask = rng.random(rows) < missing_rate
            df[column] = df[column].astype(object)
            df.loc[mask, column] = np.where(rng.random(int(mask.sum())) < 0.5, None, "N/A")
    return df


def create_excel_file(
    output_path: Path,
    rows: int,
    cols: int,
    sheets: list[str] | None = None,
    missing_rate: float = 0.02,
    seed: int = 42,
) -> None:
    """Write one workbook; every sheet holds header row + `rows` data rows."""
    if sheets is None:
        sheets = ["Sheet1"]

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        for index, sheet_name in enumerate(sheets):
            df = generate_synthetic_data(rows, cols, missing_rate, seed + index)
            df.to_excel(writer, sheet_name=sheet_name, header=True, index=False)

    print(f"Created Excel file: {output_path}")
    print(f"  Sheets: {len(sheets)} ({', '.join(sheets)})")
    print(f"  Rows per sheet: {rows} (+ 1 header row)")
    print(f"  Columns per sheet: {cols}")
    print(f"  Total data cells: {len(sheets) * rows * cols:,}")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate synthetic Excel workbooks for sheetlens performance runs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s data/perf.xlsx
  %(prog)s data/large.xlsx --rows 100000 --cols 30
  %(prog)s data/multi.xlsx --rows 20000 --sheets Q1 Q2 Q3 Q4 --missing-rate 0.1
        """,
    )
    parser.add_argument("output", type=Path, help="Output Excel file path")
    parser.add_argument("--rows", type=int, default=10_000, help="Data rows per sheet (default: 10,000)")
    parser.add_argument("--cols", type=int, default=20, help="Columns per sheet (default: 20)")
    parser.add_argument("--sheets", nargs="+", default=["Sheet1"], help="Sheet names (default: Sheet1)")
    parser.add_argument(
        "--missing-rate", type=float, default=0.02, help="Share of empty / N/A cells per column (default: 0.02)"
    )
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--dry-run", action="store_true", help="Show the plan without writing files")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    if args.cols <= 0:
        print("Error: --cols must be positive", file=sys.stderr)
        return 1
    if not 0 <= args.missing_rate < 1:
        print("Error: --missing-rate must be in [0, 1)", file=sys.stderr)
        return 1

    total_cells = len(args.sheets) * args.rows * args.cols
    print("Dataset generation plan:")
    print(f"  Output file: {args.output}")
    print(f"  Sheets: {len(args.sheets)} ({', '.join(args.sheets)})")
    print(f"  Rows per sheet: {args.rows:,}")
    print(f"  Columns per sheet: {args.cols}")
    print(f"  Total data cells: {total_cells:,}")
    print(f"  Missing rate: {args.missing_rate}")

    if args.dry_run:
        print("\n[DRY RUN] Would generate files but not creating them.")
        return 0

    try:
        create_excel_file(args.output, args.rows, args.cols, args.sheets, args.missing_rate, args.seed)
    except OSError as e:
        print(f"\nError generating dataset: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
