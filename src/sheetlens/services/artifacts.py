from __future__ import annotations

import json
import re
from pathlib import Path

from ..models.dataset_summary import StatisticsArtifact

"""JSON persistence of StatisticsArtifacts.

Layout: <output_directory>/<workbook stem>/<sheet name>.json
"""

__all__ = [
    "artifact_path",
    "write_artifact",
    "load_artifact",
]

_UNSAFE = re.compile(r'[\\/:*?"<>|]')


def artifact_path(output_directory: Path, workbook: Path, sheet_name: str) -> Path:
    safe_sheet = _UNSAFE.sub("_", sheet_name).strip() or "sheet"
    return output_directory / workbook.stem / f"{safe_sheet}.json"


def write_artifact(artifact: StatisticsArtifact, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(artifact.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8")
    return path


def load_artifact(path: Path) -> StatisticsArtifact:
    return StatisticsArtifact.from_dict(json.loads(path.read_text(encoding="utf-8")))
