"""Parse and serialize the YAML configuration file."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import yaml

from headup.errors import InvalidConfigFileError
from headup.rules.models import HeadupConfig


def parse_config_text(text: str, path: Optional[Path] = None) -> dict[str, Any]:
    source = path or Path("<string>")
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise InvalidConfigFileError(source, str(exc)) from exc

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise InvalidConfigFileError(source, "top-level value must be a mapping")
    return raw


def parse_config_file(path: Path) -> dict[str, Any]:
    if not path.exists() or path.stat().st_size == 0:
        return {}
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InvalidConfigFileError(path, str(exc)) from exc
    return parse_config_text(text, path)


def serialize_config(config: HeadupConfig | dict[str, Any]) -> str:
    payload = config.as_dict() if isinstance(config, HeadupConfig) else config
    return yaml.safe_dump(payload, default_flow_style=False, sort_keys=False)
