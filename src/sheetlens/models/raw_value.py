from __future__ import annotations

import math
import warnings
from datetime import date, datetime
from decimal import Decimal
from typing import Any

import numpy as np
import pandas as pd

"""Raw cell value coercions shared by every analysis component.

A spreadsheet cell arrives untyped: None, bool, int/float (or the numpy
scalars pandas yields), str, or a date/datetime. All numeric parsing
(including `$` / `,` stripping) and canonical string rendering happen here
exactly once so that type inference, column statistics, the dataset summary
and chart projection never disagree about what a cell means.
"""

__all__ = [
    "BOOLEAN_TOKENS",
    "as_number",
    "as_string",
    "canonical_key",
    "is_boolean_token",
    "is_date_like",
    "is_missing",
    "non_missing",
]

RawValue = Any

BOOLEAN_TOKENS = frozenset({"true", "false", "yes", "no", "1", "0"})

# 通貨記号と桁区切りは数値パース前に除去
_NUMERIC_STRIP = str.maketrans("", "", "$,")


def _is_bool(value: Any) -> bool:
    return isinstance(value, (bool, np.bool_))


def _is_real(value: Any) -> bool:
    if _is_bool(value):
        return False
    return isinstance(value, (int, float, Decimal, np.integer, np.floating))


def is_missing(value: Any) -> bool:
    """True for None, empty string, NaN and NaT (pandas' empty-cell markers)."""
    if value is None or value is pd.NaT:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (float, np.floating)):
        return math.isnan(value)
    if isinstance(value, np.datetime64):
        return bool(np.isnat(value))
    return False


def non_missing(values: list[Any]) -> list[Any]:
    return [v for v in values if not is_missing(v)]


def as_number(value: Any) -> float | None:
    """Parse a cell as a finite float.

    Native numbers pass through; strings are parsed after removing every
    `$` and `,`. Booleans, dates and anything that does not parse to a
    finite number return None.
    """
    if _is_real(value):
        try:
            number = float(value)
        except OverflowError:
            # int が float の範囲外
            return None
    elif isinstance(value, str):
        text = value.translate(_NUMERIC_STRIP).strip()
        # "1_000" のような Python 固有の数値リテラルは受け付けない
        if not text or "_" in text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def as_string(value: Any) -> str:
    """Canonical string form of a cell (used for labels, modes and lengths)."""
    if is_missing(value):
        return ""
    if _is_bool(value):
        return "true" if value else "false"
    if isinstance(value, (float, np.floating)):
        if float(value).is_integer():
            return str(int(value))
        return str(float(value))
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def is_boolean_token(value: Any) -> bool:
    if _is_bool(value):
        return True
    return isinstance(value, str) and value.lower() in BOOLEAN_TOKENS


def is_date_like(value: Any) -> bool:
    """True for native dates or strings that parse into a calendar date."""
    if isinstance(value, (datetime, date, np.datetime64)):
        return not is_missing(value)
    if not isinstance(value, str) or not value.strip():
        return False
    try:
        with warnings.catch_warnings():
            # pandas warns when it has to guess a format per element
            warnings.simplefilter("ignore")
            parsed = pd.to_datetime(value.strip(), errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return False
    return parsed is not pd.NaT and not pd.isna(parsed)


def canonical_key(value: Any) -> tuple[str, Any]:
    """Key under which two cells count as the same distinct value.

    Numbers compare by value (1 == 1.0), everything else by kind and
    string form, so the string "1" and the number 1 stay distinct.
    """
    if is_missing(value):
        return ("null", None)
    if _is_bool(value):
        return ("bool", bool(value))
    if isinstance(value, (int, np.integer)):
        # int のまま比較 (1 == 1.0 は保たれ、float 範囲外の int でも落ちない)
        return ("number", int(value))
    if _is_real(value):
        return ("number", float(value))
    if isinstance(value, (datetime, date)):
        return ("date", value.isoformat())
    return ("text", str(value))
