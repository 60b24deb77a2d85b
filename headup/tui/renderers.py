from typing import Sequence

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax

from headup.models import UpdateResult, UpdateStatus
from headup.rules.models import HeadupConfig
from headup.tui.enums import UIStyle
from headup.tui.sections import UISection
from headup.tui.tables import ConfigTable, ContentTable, ResultTable
from headup.utils import compact_home_path, compact_home_paths_in_text


class HeadupConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_config(self, config: HeadupConfig, source: str) -> None:
        self.console.print(
            UISection.wrap(
                "config overview",
                ConfigTable.summary_block(config),
                style=UIStyle.BLUE.value,
                subtitle=compact_home_path(source),
            )
        )
        self.console.print(
            UISection.wrap(
                "rules",
                ConfigTable.rules_table(config),
                style=UIStyle.CYAN.value,
            )
        )

    def render_config_yaml(self, text: str) -> None:
        self.console.print(Syntax(text, "yaml", background_color="default"))

    def render_config_ok(self, config: HeadupConfig, source: str) -> None:
        self.console.print(
            UISection.note(
                "config",
                f"Config OK: {len(config.rules)} rule(s)\n{escape(compact_home_path(source))}",
                style=UIStyle.GREEN.value,
            )
        )

    def render_config_saved(self, path: str) -> None:
        self.console.print(
            UISection.note(
                "config",
                f"Config written: {escape(compact_home_path(path))}",
                style=UIStyle.GREEN.value,
            )
        )

    def render_results(
        self, rows: Sequence[tuple[str, UpdateResult]], mode: str
    ) -> None:
        results = [result for _, result in rows]
        self.console.print(
            UISection.wrap(
                "update overview",
                ResultTable.summary_block(results, mode=mode),
                style=UIStyle.BLUE.value,
            )
        )
        if rows:
            self.console.print(
                UISection.wrap(
                    "metadata",
                    ResultTable.results_table(
                        [(compact_home_path(path), result) for path, result in rows]
                    ),
                    style=UIStyle.CYAN.value,
                )
            )
        else:
            self.console.print(
                UISection.note(
                    "metadata", "No rules apply to the given files.", style=UIStyle.DIM.value
                )
            )

        errors = [result for result in results if result.status == UpdateStatus.ERROR]
        if errors:
            self.console.print(
                UISection.bullets(
                    "errors",
                    [compact_home_paths_in_text(result.detail) for result in errors],
                    style=UIStyle.RED.value,
                )
            )

    def render_contents(self, names: Sequence[str]) -> None:
        self.console.print(
            UISection.wrap(
                "contents", ContentTable.contents_table(names), style=UIStyle.BLUE.value
            )
        )
