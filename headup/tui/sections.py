from typing import Iterable, Optional

from rich.markup import escape
from rich.panel import Panel

from headup.host.interfaces import NotifyLevel
from headup.tui.enums import NOTIFY_LEVEL_STYLE, UIStyle


class UISection:
    @staticmethod
    def wrap(title: str, body, style: str = UIStyle.BLUE.value, subtitle: Optional[str] = None) -> Panel:
        return Panel(body, title=title, subtitle=subtitle, border_style=style, padding=(0, 1))

    @staticmethod
    def note(title: str, body: str, style: str) -> Panel:
        return Panel(body, title=title, border_style=style, padding=(0, 1))

    @staticmethod
    def notice(level: NotifyLevel, message: str) -> Panel:
        """Panel for a single notifier message; ``message`` is shown verbatim."""
        return Panel(
            escape(message),
            title=level.value,
            title_align="left",
            border_style=NOTIFY_LEVEL_STYLE[level],
            padding=(0, 1),
        )

    @staticmethod
    def bullets(title: str, items: Iterable[str], style: str) -> Panel:
        body = "\n".join(f"- {escape(item)}" for item in items)
        return UISection.note(title, body, style=style)
