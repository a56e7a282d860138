from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.dataset import Dataset

"""Excel reader: workbook -> one Dataset per sheet.

The first row of a sheet is the header row, every following row a record.
Empty cells become None, fully empty rows are skipped, and cell strings listed
in null_sentinels (compared upper-cased after strip) are read as None.
"""

__all__ = [
    "SheetHeaderError",
    "read_excel_file",
    "normalize_sheet",
]


class SheetHeaderError(Exception):
    """Raised when a sheet has no header row."""


def read_excel_file(path: Path, target_sheets: Iterable[str] | None = None) -> dict[str, pd.DataFrame]:
    """Read an Excel file returning raw headerless DataFrames keyed by sheet name.

    Parameters
    ----------
    path: Excel file path
    target_sheets: restrict to these sheet names (None = all sheets)
    """
    wanted = set(target_sheets) if target_sheets is not None else None
    dfs: dict[str, pd.DataFrame] = {}
    with pd.ExcelFile(path, engine="openpyxl") as xls:
        for name in xls.sheet_names:
            if wanted is not None and str(name) not in wanted:
                continue
            # 既定の NA 文字列 ("NA", "null" 等) は値として残す。空セルのみ NaN
            dfs[str(name)] = xls.parse(name, header=None, keep_default_na=False, na_values=[""])
    return dfs


def _header_names(raw_header: list[Any]) -> list[str]:
    names = []
    for index, cell in enumerate(raw_header):
        if pd.isna(cell) or str(cell).strip() == "":
            names.append(f"Column{index + 1}")
        else:
            names.append(str(cell).strip())
    return names


def _cell(value: Any, null_sentinels: set[str] | None) -> Any:
    if pd.isna(value):
        return None
    if isinstance(value, str) and null_sentinels and value.strip().upper() in null_sentinels:
        return None
    return value


def normalize_sheet(
    df: pd.DataFrame,
    sheet_name: str,
    null_sentinels: set[str] | None = None,
) -> Dataset:
    """Turn a raw headerless DataFrame into a Dataset.

    Raises:
        SheetHeaderError: the sheet has no rows at all
        StructuralInputError: duplicate header names
    """
    if df.shape[0] < 1:
        raise SheetHeaderError(f"sheet '{sheet_name}' has no header row")
    headers = _header_names(df.iloc[0].tolist())

    rows: list[dict[str, Any]] = []
    for _, raw in df.iloc[1:].iterrows():
        if raw.isna().all():
            continue
        values = raw.tolist()
        rows.append({col: _cell(val, null_sentinels) for col, val in zip(headers, values, strict=True)})

    return Dataset(headers=headers, rows=rows, name=sheet_name)
