from enum import Enum

from headup.host.interfaces import NotifyLevel
from headup.models import UpdateStatus


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    MAGENTA = "magenta"
    DIM = "dim"
    WHITE = "white"


UPDATE_STATUS_STYLE = {
    UpdateStatus.UPDATED: UIStyle.GREEN.value,
    UpdateStatus.SEEDED: UIStyle.CYAN.value,
    UpdateStatus.UNCHANGED: UIStyle.DIM.value,
    UpdateStatus.NOT_MODIFIED: UIStyle.DIM.value,
    UpdateStatus.NOT_FOUND: UIStyle.DIM.value,
    UpdateStatus.EXCLUDED: UIStyle.DIM.value,
    UpdateStatus.MANUAL_CHANGE: UIStyle.YELLOW.value,
    UpdateStatus.ERROR: UIStyle.RED.value,
}

NOTIFY_LEVEL_STYLE = {
    NotifyLevel.DEBUG: UIStyle.DIM.value,
    NotifyLevel.INFO: UIStyle.BLUE.value,
    NotifyLevel.WARN: UIStyle.YELLOW.value,
    NotifyLevel.ERROR: UIStyle.RED.value,
}
