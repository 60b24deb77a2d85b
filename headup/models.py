from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from headup.host.interfaces import BufferId


class UpdateStatus(str, Enum):
    SEEDED = "seeded"
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    MANUAL_CHANGE = "manual_change"
    NOT_FOUND = "not_found"
    NOT_MODIFIED = "not_modified"
    EXCLUDED = "excluded"
    ERROR = "error"


@dataclass(frozen=True)
class UpdateResult:
    status: UpdateStatus
    buffer_id: BufferId
    rule_id: int
    line_index: Optional[int] = None
    old_value: Optional[str] = None
    new_value: Optional[str] = None
    detail: str = ""

    @property
    def changed(self) -> bool:
        return self.status == UpdateStatus.UPDATED

    @property
    def matched(self) -> bool:
        return self.line_index is not None

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "rule": str(self.rule_id),
            "line": str(self.line_index) if self.line_index is not None else "-",
            "old": self.old_value or "",
            "new": self.new_value or "",
            "detail": self.detail,
        }
