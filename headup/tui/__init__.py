from headup.tui.notifier import ConsoleNotifier
from headup.tui.renderers import HeadupConsoleUI

__all__ = ["ConsoleNotifier", "HeadupConsoleUI"]
