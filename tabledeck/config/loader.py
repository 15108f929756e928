from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError as SchemaValidationError

from ..models.export_options import ExportOptions

"""Export options loader.

Responsibilities:
- Load a YAML options file (default ``config/export.yml``)
- Validate it against the packaged JSON schema (unknown keys rejected)
- Apply defaults / coercion through ExportOptions.from_mapping
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_export_options",
    "load_raw_options",
]

DEFAULT_CONFIG_PATH = Path("config/export.yml")
SCHEMA_PATH = Path(__file__).parent / "export_options_schema.json"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate options data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or invalid, or the data violates it
            (unknown keys, wrong types, malformed colors, out-of-range numbers).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except SchemaValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_raw_options(path: Path) -> dict[str, Any]:
    """Read and validate the YAML file, returning the raw mapping."""
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"cannot read config: {e}") from e
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config validation failed: expected a mapping, got {type(data).__name__}")

    _validate_config_schema(data)
    return data


def load_export_options(path: Path, overrides: dict[str, Any] | None = None) -> ExportOptions:
    """Load an ExportOptions snapshot from ``path``; ``overrides`` win over file values."""
    data = load_raw_options(path)
    if overrides:
        data.update(overrides)
    return ExportOptions.from_mapping(data)
