from dataclasses import dataclass
from typing import Optional

from headup.host.interfaces import BufferId
from headup.rules.models import Rule


@dataclass(frozen=True)
class CacheEntry:
    matched_text: str
    line_index: int


class ManualEditCache:
    """Last value the engine wrote or observed, per buffer and rule.

    Entries are keyed by ``rule.rule_id`` so two rules with identical settings
    never share an entry.
    """

    def __init__(self) -> None:
        self._entries: dict[tuple[BufferId, int], CacheEntry] = {}

    def record(
        self, buffer_id: BufferId, rule: Rule, value: str, line_index: int
    ) -> CacheEntry:
        entry = CacheEntry(matched_text=value, line_index=line_index)
        self._entries[(buffer_id, rule.rule_id)] = entry
        return entry

    def lookup(self, buffer_id: BufferId, rule: Rule) -> Optional[CacheEntry]:
        return self._entries.get((buffer_id, rule.rule_id))

    def clear_all(self) -> None:
        self._entries.clear()

    def forget_buffer(self, buffer_id: BufferId) -> int:
        keys = [key for key in self._entries if key[0] == buffer_id]
        for key in keys:
            del self._entries[key]
        return len(keys)

    def __len__(self) -> int:
        return len(self._entries)
