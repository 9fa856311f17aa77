from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..excel.writer import DEFAULT_COLUMN_WIDTHS
from ..services.date_normalizer import DEFAULT_CENTURY_CUTOFF
from ..services.row_transformer import DEFAULT_RESET_MARKER

"""Config loader.

Responsibilities:
- Load YAML config (default ``config/ledger.yml``)
- Validate against the packaged JSON schema (additionalProperties: false)
- Apply defaults for every optional key
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/ledger.yml")
DEFAULT_FILE_PATTERN = "*.xls*"
DEFAULT_OUTPUT_SUFFIX = "_ledger"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class LedgerConfig:
    source_directory: str
    file_pattern: str = DEFAULT_FILE_PATTERN
    output_directory: str | None = None  # None -> source_directory
    output_suffix: str = DEFAULT_OUTPUT_SUFFIX
    date_separator: str | None = None  # None -> 入力の区切り文字を再利用
    century_cutoff: int = DEFAULT_CENTURY_CUTOFF
    reference_year: int | None = None  # None -> 実行時の西暦年
    reset_marker: str = DEFAULT_RESET_MARKER
    column_widths: dict[str, float] = field(default_factory=lambda: dict(DEFAULT_COLUMN_WIDTHS))

    @property
    def output_dir(self) -> Path:
        return Path(self.output_directory or self.source_directory)


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing / not JSON, or the data violates it
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


def load_config(path: Path) -> LedgerConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    widths = dict(DEFAULT_COLUMN_WIDTHS)
    widths.update(data.get("column_widths") or {})
    return LedgerConfig(
        source_directory=data["source_directory"],
        file_pattern=data.get("file_pattern", DEFAULT_FILE_PATTERN),
        output_directory=data.get("output_directory"),
        output_suffix=data.get("output_suffix", DEFAULT_OUTPUT_SUFFIX),
        date_separator=data.get("date_separator"),
        century_cutoff=data.get("century_cutoff", DEFAULT_CENTURY_CUTOFF),
        reference_year=data.get("reference_year"),
        reset_marker=data.get("reset_marker", DEFAULT_RESET_MARKER),
        column_widths=widths,
    )
