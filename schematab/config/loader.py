from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..errors import SchemaError
from ..models.config_models import TableOptions
from ..models.schema import Schema, normalize_schema
from ..table.buffer import TableBuffer

"""Table definition loader.

Responsibilities:
- Load a YAML table definition (columns + options)
- Validate it against table_config_schema.json (bundled with the package)
- Normalize the column list into a Schema and the options into TableOptions
"""

SCHEMA_PATH = Path(__file__).parent / "table_config_schema.json"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class TableConfig:
    source: Path
    schema: Schema
    options: TableOptions

    def build_table(self) -> TableBuffer:
        """Create an empty TableBuffer for this definition."""
        return TableBuffer(self.schema, self.options)


def _validate_config_schema(data: Any) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: If the schema file is missing or not valid JSON, or the
            config data fails schema validation (missing keys, wrong types,
            unknown properties)
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


def load_table_config(path: Path) -> TableConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    try:
        schema = normalize_schema(data["columns"])
        options = TableOptions(
            delimiter=data.get("delimiter", ","),
            strict_columns=data.get("strict_columns", True),
            strict_headers=data.get("strict_headers", True),
        )
    except SchemaError as e:
        raise ConfigError(f"invalid table definition: {e}") from e
    return TableConfig(source=path, schema=schema, options=options)
