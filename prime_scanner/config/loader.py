from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.scan import ScanConfig

"""Config loader.

Responsibilities:
- Load an optional YAML config (sheet / column / header rows / limits)
- Validate it against config_schema.json (shipped next to this module)
- Apply defaults for missing keys
- Resolve which file to read: --config, then $PRIME_SCANNER_CONFIG, then
  config/prime_scanner.yml when present
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/prime_scanner.yml")
CONFIG_ENV_VAR = "PRIME_SCANNER_CONFIG"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class AppConfig:
    scan: ScanConfig = ScanConfig()
    max_primes: int | None = None  # None = 無制限
    progress: bool = True
    source: Path | None = None  # 読み込んだ設定ファイル (defaults のみなら None)

    def with_overrides(
        self,
        *,
        sheet_index: int | None = None,
        column_index: int | None = None,
        header_rows: int | None = None,
        max_primes: int | None = None,
    ) -> AppConfig:
        """Return a copy with command line values taking precedence."""
        try:
            scan = replace(
                self.scan,
                **{
                    k: v
                    for k, v in (
                        ("sheet_index", sheet_index),
                        ("column_index", column_index),
                        ("header_rows", header_rows),
                    )
                    if v is not None
                },
            )
        except ValueError as e:
            raise ConfigError(str(e)) from e
        if max_primes is not None and max_primes < 1:
            raise ConfigError(f"max_primes must be a positive integer, got {max_primes}")
        return replace(
            self,
            scan=scan,
            max_primes=max_primes if max_primes is not None else self.max_primes,
        )


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing/unreadable, or the data violates it
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


def load_config(path: Path) -> AppConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    # JSON Schema の "integer" は 1.0 も通すので型は ScanConfig 側で確定させる
    try:
        scan = ScanConfig(
            sheet_index=data.get("sheet_index", 0),
            column_index=data.get("column_index", 1),
            header_rows=data.get("header_rows", 0),
        )
    except ValueError as e:
        raise ConfigError(str(e)) from e
    max_primes = data.get("max_primes")
    if max_primes is not None and (isinstance(max_primes, bool) or not isinstance(max_primes, int)):
        raise ConfigError(f"max_primes must be a positive integer, got {max_primes}")
    return AppConfig(
        scan=scan,
        max_primes=max_primes,
        progress=data.get("progress", True),
        source=path,
    )


def resolve_config(explicit: Path | None = None) -> AppConfig:
    """Load the effective config file, or defaults when none is configured.

    An explicitly given path (argument or environment variable) must exist;
    the default location is optional.
    """
    if explicit is not None:
        return load_config(Path(explicit))
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return load_config(Path(env_path))
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return AppConfig()
