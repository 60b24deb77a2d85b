"""Merge global fallbacks into rule items and validate the result."""

from __future__ import annotations

import re
from typing import Any, Iterable, Mapping, Optional

from headup.constants import (
    DEFAULT_MAX_SCAN_LINES,
    DEFAULT_RULE,
    FALLBACK_FIELDS,
    INHERIT_TIME_FORMAT,
)
from headup.content import GeneratorRegistry, default_registry
from headup.errors import ConfigError
from headup.rules.models import HeadupConfig, Rule
from headup.rules.schema import validate_config_payload
from headup.utils import glob_to_regex


def _as_globs(
    value: Any, rule_index: int, field: str, required: bool
) -> Optional[tuple[str, ...]]:
    if value is None:
        if required:
            raise ConfigError(
                "missing file pattern (glob or list of globs)",
                rule_index=rule_index,
                field=field,
            )
        return None
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        raise ConfigError(
            "must be a glob string or a list of glob strings",
            rule_index=rule_index,
            field=field,
        )
    globs = tuple(value)
    if required and not globs:
        raise ConfigError(
            "must contain at least one glob", rule_index=rule_index, field=field
        )
    for glob in globs:
        if not isinstance(glob, str) or not glob.strip():
            raise ConfigError(
                f"invalid glob {glob!r}", rule_index=rule_index, field=field
            )
        try:
            glob_to_regex(glob)
        except re.error as exc:
            raise ConfigError(
                f"invalid glob {glob!r} ({exc})", rule_index=rule_index, field=field
            ) from exc
    return globs


def _compile(value: Any, rule_index: Optional[int], field: str) -> re.Pattern[str]:
    if not isinstance(value, str) or not value:
        raise ConfigError(
            "must be a non-empty regular expression", rule_index=rule_index, field=field
        )
    try:
        return re.compile(value)
    except re.error as exc:
        raise ConfigError(
            f"invalid regular expression ({exc})", rule_index=rule_index, field=field
        ) from exc


def _build_rule(
    rule_index: int, item: Mapping[str, Any], registry: GeneratorRegistry
) -> Rule:
    raw_patterns = item.get("patterns", item.get("pattern"))
    patterns = _as_globs(raw_patterns, rule_index, "patterns", required=True)

    if item.get("match_expression") is None:
        raise ConfigError(
            "missing match_expression", rule_index=rule_index, field="match_expression"
        )
    compiled = _compile(item["match_expression"], rule_index, "match_expression")
    if compiled.groups != 1:
        raise ConfigError(
            "must contain exactly one capture group for the value to refresh "
            f"(found {compiled.groups})",
            rule_index=rule_index,
            field="match_expression",
        )

    content = item.get("content")
    if not isinstance(content, str) or not content:
        raise ConfigError("missing content", rule_index=rule_index, field="content")
    if content not in registry:
        raise ConfigError(
            f"invalid content: {content} (known: {', '.join(registry.names())})",
            rule_index=rule_index,
            field="content",
        )

    time_format = item.get("time_format")
    if time_format is not None and (not isinstance(time_format, str) or not time_format):
        raise ConfigError(
            "must be a strftime format or 'inherit'",
            rule_index=rule_index,
            field="time_format",
        )

    max_scan_lines = item.get("max_scan_lines")
    if max_scan_lines is not None and (
        isinstance(max_scan_lines, bool)
        or not isinstance(max_scan_lines, int)
        or max_scan_lines < 1
    ):
        raise ConfigError(
            "must be a positive integer", rule_index=rule_index, field="max_scan_lines"
        )

    stop_pattern = item.get("stop_pattern")
    if stop_pattern is not None:
        _compile(stop_pattern, rule_index, "stop_pattern")

    exclude_globs = _as_globs(
        item.get("exclude_globs"), rule_index, "exclude_globs", required=False
    )

    return Rule(
        patterns=patterns or (),
        match_expression=item["match_expression"],
        content_kind=content,
        time_format=time_format or INHERIT_TIME_FORMAT,
        max_scan_lines=max_scan_lines or DEFAULT_MAX_SCAN_LINES,
        stop_pattern=stop_pattern,
        exclude_globs=exclude_globs,
    )


def merge(
    global_options: Mapping[str, Any],
    user_rules: Iterable[Mapping[str, Any]],
    registry: Optional[GeneratorRegistry] = None,
) -> list[Rule]:
    """Apply global fallbacks to each rule item and validate it.

    Fields a rule omits are copied from ``global_options`` when the global
    value is set. Every rule gets a fresh ``rule_id``. The first invalid rule
    raises ``ConfigError``; no partial list is ever returned.
    """
    registry = registry if registry is not None else default_registry
    rules: list[Rule] = []
    for index, item in enumerate(user_rules, start=1):
        if not isinstance(item, Mapping):
            raise ConfigError("rule item must be a mapping", rule_index=index)
        merged = dict(item)
        for field in FALLBACK_FIELDS:
            if merged.get(field) is None and global_options.get(field) is not None:
                merged[field] = global_options[field]
        rules.append(_build_rule(index, merged, registry))
    return rules


class RuleResolver:
    def __init__(self, registry: Optional[GeneratorRegistry] = None) -> None:
        self._registry = registry if registry is not None else default_registry

    @property
    def registry(self) -> GeneratorRegistry:
        return self._registry

    def resolve(self, payload: Optional[Mapping[str, Any]] = None) -> HeadupConfig:
        data = dict(payload or {})
        validate_config_payload(data)

        global_options = {field: data.get(field) for field in FALLBACK_FIELDS}
        if global_options["stop_pattern"] is not None:
            _compile(global_options["stop_pattern"], None, "stop_pattern")

        raw_rules = data.get("rules") or [dict(DEFAULT_RULE)]
        rules = merge(global_options, raw_rules, self._registry)

        exclude_globs = global_options["exclude_globs"]
        if isinstance(exclude_globs, str):
            exclude_globs = [exclude_globs]

        return HeadupConfig(
            enabled=data.get("enabled", True),
            silent=data.get("silent", True),
            time_format=global_options["time_format"],
            max_scan_lines=global_options["max_scan_lines"],
            stop_pattern=global_options["stop_pattern"],
            exclude_globs=tuple(exclude_globs) if exclude_globs is not None else None,
            rules=tuple(rules),
        )
