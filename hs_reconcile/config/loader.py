from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..excel.columns import resolve_columns
from ..models.config_models import (
    ColumnMapping,
    InvoiceColumns,
    OutputConfig,
    PackingListColumns,
    ReconcileConfig,
)

"""Config loader.

Responsibilities:
- Load YAML config (config/reconcile.yml by default)
- Validate against the bundled JSON schema (config_schema.json)
- Apply defaults for every missing section / key
- Resolve column references to 0-based indices once, up front
"""

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"

DEFAULT_CONFIG_PATH = Path("config/reconcile.yml")

# 既定の列割当 (請求書: F / P,O、パッキングリスト: H / L / M)
DEFAULT_REFERENCES: dict[str, dict[str, list[str]]] = {
    "invoice": {
        "hs_code": ["F"],
        "amount": ["P", "O"],
    },
    "packing_list": {
        "cartons": ["H"],
        "net_weight": ["L"],
        "gross_weight": ["M"],
    },
}
DEFAULT_OUTPUT = {"directory": "./output", "format": "xlsx"}


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or not valid JSON, or
            the config data fails validation (unknown keys, empty column
            lists, wrong types).
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


def build_config(data: dict[str, Any]) -> ReconcileConfig:
    """Build a ReconcileConfig from already validated raw data plus defaults."""
    references: dict[str, dict[str, list[str]]] = {}
    for section, fields in DEFAULT_REFERENCES.items():
        raw_section = data.get(section) or {}
        references[section] = {
            name: [str(ref) for ref in raw_section.get(name, default)]
            for name, default in fields.items()
        }

    inv = references["invoice"]
    pl = references["packing_list"]
    columns = ColumnMapping(
        invoice=InvoiceColumns(
            hs_code=resolve_columns(inv["hs_code"]),
            amount=resolve_columns(inv["amount"]),
        ),
        packing_list=PackingListColumns(
            cartons=resolve_columns(pl["cartons"]),
            net_weight=resolve_columns(pl["net_weight"]),
            gross_weight=resolve_columns(pl["gross_weight"]),
        ),
    )
    out_raw = {**DEFAULT_OUTPUT, **(data.get("output") or {})}
    return ReconcileConfig(
        columns=columns,
        output=OutputConfig(directory=out_raw["directory"], format=out_raw["format"]),
        references=references,
    )


def default_config() -> ReconcileConfig:
    return build_config({})


def load_config(path: Path) -> ReconcileConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)
    return build_config(data)
