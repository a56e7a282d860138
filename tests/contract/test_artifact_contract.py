from __future__ import annotations

import json
from pathlib import Path

from sheetlens.logging.error_log import ErrorLogBuffer
from sheetlens.models.config_models import AnalysisConfig
from sheetlens.services.orchestrator import analyze_workbook

"""Artifact JSON contract: the key names the presentation layer reads."""

NUMERIC_KEYS = {
    "count", "nullCount", "uniqueCount", "mean", "median", "mode",
    "min", "max", "range", "variance", "standardDeviation",
}
TEXT_KEYS = {"count", "nullCount", "uniqueCount", "mode", "averageLength"}
SUMMARY_KEYS = {
    "totalRecords", "totalColumns", "numericColumns", "textColumns",
    "missingValues", "dataQuality",
}


def test_artifact_json_field_names(temp_workdir: Path, make_workbook):
    wb = make_workbook(
        temp_workdir / "data" / "orders.xlsx",
        {"Orders": [["customerName", "amount", "paid"], ["Alice", 10, "yes"], ["Bob", 30, "no"]]},
    )
    cfg = AnalysisConfig(source_directory="./data", output_directory="./output")
    analyze_workbook(wb, cfg, ErrorLogBuffer())

    data = json.loads((temp_workdir / "output" / "orders" / "Orders.json").read_text(encoding="utf-8"))
    assert set(data) == {"columns", "summary", "schema"}
    assert list(data["columns"]) == ["customerName", "amount", "paid"]
    assert set(data["columns"]["amount"]) == NUMERIC_KEYS
    assert set(data["columns"]["customerName"]) == TEXT_KEYS
    assert set(data["summary"]) == SUMMARY_KEYS
    assert data["schema"] == [
        {"name": "customerName", "type": "text", "nullable": False},
        {"name": "amount", "type": "number", "nullable": False},
        {"name": "paid", "type": "boolean", "nullable": False},
    ]


def test_all_null_column_keeps_base_counts_only(temp_workdir: Path, make_workbook):
    wb = make_workbook(
        temp_workdir / "data" / "blank.xlsx",
        {"S": [["name", "note"], ["a", None], ["b", None]]},
    )
    cfg = AnalysisConfig(source_directory="./data", output_directory="./output")
    analyze_workbook(wb, cfg, ErrorLogBuffer())

    data = json.loads((temp_workdir / "output" / "blank" / "S.json").read_text(encoding="utf-8"))
    assert data["columns"]["note"] == {"count": 2, "nullCount": 2, "uniqueCount": 0}
    assert data["schema"][1] == {"name": "note", "type": "text", "nullable": True}
