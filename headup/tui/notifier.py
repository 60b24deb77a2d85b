from rich.console import Console

from headup.host.interfaces import INotifier, NotifyLevel
from headup.tui.sections import UISection


class ConsoleNotifier(INotifier):
    """Print engine notifications as small rich panels (stderr by default)."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(stderr=True)

    def notify(self, message: str, level: NotifyLevel = NotifyLevel.INFO) -> None:
        self.console.print(UISection.notice(level, message))
