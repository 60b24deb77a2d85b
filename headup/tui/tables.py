from collections import Counter
from typing import Sequence

from rich.table import Column, Table
from rich.text import Text

from headup.content import content_label
from headup.models import UpdateResult
from headup.rules.models import HeadupConfig
from headup.tui.enums import UPDATE_STATUS_STYLE, UIStyle


def _optional(value: object) -> str:
    if value is None:
        return "-"
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value) or "-"
    return str(value)


class ConfigTable:
    @staticmethod
    def summary_block(config: HeadupConfig):
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Enabled", "yes" if config.enabled else "no")
        table.add_row("Silent", "yes" if config.silent else "no")
        table.add_row("Rules", str(len(config.rules)))
        table.add_row("Time format", _optional(config.time_format))
        table.add_row("Max scan lines", _optional(config.max_scan_lines))
        table.add_row("Stop pattern", _optional(config.stop_pattern))
        table.add_row("Exclude", _optional(config.exclude_globs))
        return table

    @staticmethod
    def rules_table(config: HeadupConfig) -> Table:
        table = Table(
            Column("#", justify="right", style=UIStyle.DIM.value),
            Column("Patterns", style=UIStyle.CYAN.value),
            Column("Match"),
            Column("Content"),
            Column("Time format"),
            Column("Lines", justify="right"),
            Column("Stop"),
            Column("Exclude"),
            expand=False,
        )
        for index, rule in enumerate(config.rules, start=1):
            table.add_row(
                str(index),
                _optional(rule.patterns),
                Text(rule.match_expression),
                rule.content_kind,
                _optional(rule.time_format),
                str(rule.max_scan_lines),
                Text(_optional(rule.stop_pattern)),
                _optional(rule.exclude_globs),
            )
        return table


class ResultTable:
    @staticmethod
    def summary_block(results: Sequence[UpdateResult], mode: str):
        counts = Counter(result.status.value for result in results)
        chips = [f"{key}={value}" for key, value in sorted(counts.items()) if value > 0]
        if not chips:
            chips = ["none"]

        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Mode", mode)
        table.add_row("Results", str(len(results)))
        table.add_row("Statuses", "  ".join(chips))
        return table

    @staticmethod
    def results_table(rows: Sequence[tuple[str, UpdateResult]]) -> Table:
        table = Table(
            Column("File", style=UIStyle.CYAN.value),
            Column("Status"),
            Column("Line", justify="right"),
            Column("Old"),
            Column("New"),
            expand=False,
        )
        for path, result in rows:
            payload = result.as_dict()
            table.add_row(
                path,
                Text(payload["status"], style=UPDATE_STATUS_STYLE[result.status]),
                payload["line"],
                Text(payload["old"]),
                Text(payload["new"] or payload["detail"]),
            )
        return table


class ContentTable:
    @staticmethod
    def contents_table(names: Sequence[str]) -> Table:
        table = Table(
            Column("Content", style=UIStyle.CYAN.value),
            Column("Label"),
            expand=False,
        )
        for name in names:
            table.add_row(name, content_label(name))
        return table
