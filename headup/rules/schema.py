import json
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

from headup.errors import ConfigError

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.json"

_SCHEMA_CACHE: dict[str, dict[str, Any]] = {}


def load_config_schema(path: Path = SCHEMA_PATH) -> dict[str, Any]:
    key = str(path)
    cached = _SCHEMA_CACHE.get(key)
    if cached is not None:
        return cached
    schema = json.loads(path.read_text(encoding="utf-8"))
    _SCHEMA_CACHE[key] = schema
    return schema


def config_validator() -> Draft202012Validator:
    return Draft202012Validator(load_config_schema())


def schema_error_to_config_error(error: Any) -> ConfigError:
    parts = list(error.path)
    if len(parts) >= 2 and parts[0] == "rules" and isinstance(parts[1], int):
        field = str(parts[2]) if len(parts) >= 3 else None
        return ConfigError(error.message, rule_index=parts[1] + 1, field=field)
    if parts:
        return ConfigError(error.message, field=".".join(str(part) for part in parts))
    return ConfigError(str(error.message))


def validate_config_payload(payload: Any) -> None:
    error = next(iter(config_validator().iter_errors(payload)), None)
    if error is not None:
        raise schema_error_to_config_error(error)
