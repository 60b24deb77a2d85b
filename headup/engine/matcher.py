"""Locate the metadata line inside the scan window."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from headup.host.interfaces import IBuffer
from headup.rules.models import Rule


@dataclass(frozen=True)
class Match:
    line_index: int
    value: str
    line: str
    span: tuple[int, int]

    def replace_value(self, new_value: str) -> str:
        start, end = self.span
        return f"{self.line[:start]}{new_value}{self.line[end:]}"


def find_match(lines: Sequence[str], rule: Rule) -> Optional[Match]:
    """Return the first line in the scan window matching ``rule``.

    Line indexes are 1-based. The content pattern is tried before the stop
    pattern on every line, so a line matching both still counts as a match.
    """
    stop = rule.compiled_stop
    for index, line in enumerate(lines[: rule.max_scan_lines], start=1):
        found = rule.compiled_match.search(line)
        if found is not None and found.group(1) is not None:
            return Match(
                line_index=index,
                value=found.group(1),
                line=line,
                span=found.span(1),
            )
        if stop is not None and stop.search(line):
            return None
    return None


def find_in_buffer(buffer: IBuffer, rule: Rule) -> Optional[Match]:
    return find_match(buffer.get_lines(0, rule.max_scan_lines), rule)
