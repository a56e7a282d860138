from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import AnalysisConfig, ChartLimits, ChartSettings, ChartThresholds

"""Config loader.

Responsibilities:
- Load the YAML analysis config (default config/analysis.yml)
- Validate it against the bundled JSON schema
- Apply defaults (chart thresholds / limits / palette, no output directory)
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
]

SCHEMA_PATH = Path(__file__).with_name("analysis_schema.json")
DEFAULT_CONFIG_PATH = Path("config/analysis.yml")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or unreadable, or the
            config data fails validation (missing keys, wrong types,
            unknown keys).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _build_chart_settings(raw: dict[str, Any]) -> ChartSettings:
    thresholds = ChartThresholds(**raw.get("thresholds", {}))
    limits = ChartLimits(**raw.get("limits", {}))
    palette = raw.get("palette")
    if palette:
        return ChartSettings(thresholds=thresholds, limits=limits, palette=tuple(palette))
    return ChartSettings(thresholds=thresholds, limits=limits)


def load_config(path: Path) -> AnalysisConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    sentinels = data.get("null_sentinels")
    null_sentinels = {s.strip().upper() for s in sentinels} if sentinels else None
    return AnalysisConfig(
        source_directory=data["source_directory"],
        output_directory=data.get("output_directory"),
        null_sentinels=null_sentinels,
        charts=_build_chart_settings(data.get("charts") or {}),
    )
