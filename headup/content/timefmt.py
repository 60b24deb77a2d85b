"""Heuristic time-format inference for ``time_format: inherit``.

The recognizers below are tried in order and the first full match wins. More
specific shapes come first, so ``2024-01-01T10:00:00`` is never reported as a
bare ``%Y-%m-%d`` date. This is a best-effort guess, not a time parser.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from headup.constants import DEFAULT_TIME_FORMAT, TIMESTAMP_MARKER

TIME_FORMAT_RECOGNIZERS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}"), "%Y-%m-%dT%H:%M:%S"),
    (re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}"), "%Y-%m-%d %H:%M:%S"),
    (
        re.compile(r"[A-Za-z]{3}, \d{1,2} [A-Za-z]{3} \d{4} \d{2}:\d{2}:\d{2}"),
        "%a, %d %b %Y %H:%M:%S",
    ),
    (re.compile(r"\d{4}-\d{2}-\d{2}"), "%Y-%m-%d"),
    (re.compile(r"\d{4}/\d{2}/\d{2}"), "%Y/%m/%d"),
    (re.compile(r"\d{2}/\d{2}/\d{4}"), "%m/%d/%Y"),
    (re.compile(r"\d+"), TIMESTAMP_MARKER),
)


def detect_time_format(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    value = text.strip()
    if not value:
        return None
    for pattern, time_format in TIME_FORMAT_RECOGNIZERS:
        if pattern.fullmatch(value):
            return time_format
    return DEFAULT_TIME_FORMAT


def format_time(time_format: str, moment: datetime) -> str:
    if time_format == TIMESTAMP_MARKER:
        return str(int(moment.timestamp()))
    return moment.strftime(time_format)
