"""Repository for the on-disk configuration file."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from headup.constants import CONFIG_DIRNAME, CONFIG_FILENAME
from headup.rules.parser import parse_config_file, serialize_config


def default_config_path() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    root = Path(xdg) if xdg else Path.home() / ".config"
    return root / CONFIG_DIRNAME / CONFIG_FILENAME


class ConfigRepository:
    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path or default_config_path()

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.exists()

    def load(self) -> dict[str, Any]:
        return parse_config_file(self._path)

    def save(self, payload: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(serialize_config(payload), encoding="utf-8")
