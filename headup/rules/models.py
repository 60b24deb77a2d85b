"""Rule and configuration models."""

from __future__ import annotations

import itertools
import re
from dataclasses import dataclass, field, replace
from functools import cached_property
from pathlib import Path
from typing import Any, Optional

from headup.constants import DEFAULT_MAX_SCAN_LINES
from headup.utils import path_matches

_RULE_IDS = itertools.count(1)


def next_rule_id() -> int:
    return next(_RULE_IDS)


@dataclass(frozen=True)
class Rule:
    patterns: tuple[str, ...]
    match_expression: str
    content_kind: str
    time_format: Optional[str] = None
    max_scan_lines: int = DEFAULT_MAX_SCAN_LINES
    stop_pattern: Optional[str] = None
    exclude_globs: Optional[tuple[str, ...]] = None
    rule_id: int = field(default_factory=next_rule_id)

    @cached_property
    def compiled_match(self) -> re.Pattern[str]:
        return re.compile(self.match_expression)

    @cached_property
    def compiled_stop(self) -> Optional[re.Pattern[str]]:
        if self.stop_pattern is None:
            return None
        return re.compile(self.stop_pattern)

    def is_excluded(self, path: str | Path) -> bool:
        return path_matches(path, self.exclude_globs)

    def applies_to(self, path: str | Path) -> bool:
        return path_matches(path, self.patterns) and not self.is_excluded(path)

    def as_dict(self) -> dict[str, Any]:
        return {
            "patterns": list(self.patterns),
            "match_expression": self.match_expression,
            "content": self.content_kind,
            "time_format": self.time_format,
            "max_scan_lines": self.max_scan_lines,
            "stop_pattern": self.stop_pattern,
            "exclude_globs": (
                list(self.exclude_globs) if self.exclude_globs is not None else None
            ),
        }


@dataclass(frozen=True)
class HeadupConfig:
    enabled: bool = True
    silent: bool = True
    time_format: Optional[str] = None
    max_scan_lines: Optional[int] = None
    stop_pattern: Optional[str] = None
    exclude_globs: Optional[tuple[str, ...]] = None
    rules: tuple[Rule, ...] = ()

    def with_enabled(self, enabled: bool) -> "HeadupConfig":
        return replace(self, enabled=enabled)

    def rules_for(self, path: str | Path) -> list[Rule]:
        return [rule for rule in self.rules if rule.applies_to(path)]

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "enabled": self.enabled,
            "silent": self.silent,
        }
        if self.time_format is not None:
            payload["time_format"] = self.time_format
        if self.max_scan_lines is not None:
            payload["max_scan_lines"] = self.max_scan_lines
        if self.stop_pattern is not None:
            payload["stop_pattern"] = self.stop_pattern
        if self.exclude_globs is not None:
            payload["exclude_globs"] = list(self.exclude_globs)
        payload["rules"] = [
            {key: value for key, value in rule.as_dict().items() if value is not None}
            for rule in self.rules
        ]
        return payload
