from typing import Any, Final


APP_NAME: Final[str] = "headup"
CONFIG_DIRNAME: Final[str] = "headup"
CONFIG_FILENAME: Final[str] = "config.yaml"

DEFAULT_MAX_SCAN_LINES: Final[int] = 20
DEFAULT_TIME_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
INHERIT_TIME_FORMAT: Final[str] = "inherit"
TIMESTAMP_MARKER: Final[str] = "timestamp"

SIZE_UNITS: Final[tuple[str, ...]] = ("B", "KB", "MB", "GB", "TB")

FALLBACK_FIELDS: Final[tuple[str, ...]] = (
    "time_format",
    "max_scan_lines",
    "stop_pattern",
    "exclude_globs",
)

DEFAULT_RULE: Final[dict[str, Any]] = {
    "patterns": ["*.md"],
    "match_expression": r"last_modified:\s*(.*?)\s*$",
    "content": "current_time",
    "time_format": DEFAULT_TIME_FORMAT,
    "max_scan_lines": DEFAULT_MAX_SCAN_LINES,
    "stop_pattern": r"^---\s$",
}
