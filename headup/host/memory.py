"""In-memory host collaborators."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from headup.host.interfaces import (
    BufferCallback,
    BufferId,
    BufferPredicate,
    IBuffer,
    ILifecycle,
    INotifier,
    LifecycleEvent,
    NotifyLevel,
)

_BUFFER_IDS = itertools.count(1)


class MemoryBuffer(IBuffer):
    def __init__(
        self,
        lines: Iterable[str] = (),
        path: str = "",
        modified: bool = False,
        buffer_id: Optional[BufferId] = None,
    ) -> None:
        self._lines = list(lines)
        self._path = path
        self._modified = modified
        self._buffer_id = buffer_id if buffer_id is not None else next(_BUFFER_IDS)

    @classmethod
    def from_text(cls, text: str, path: str = "", modified: bool = False) -> "MemoryBuffer":
        if text.endswith("\n"):
            text = text[:-1]
        lines = text.split("\n") if text else []
        return cls(lines, path=path, modified=modified)

    @property
    def buffer_id(self) -> BufferId:
        return self._buffer_id

    @property
    def path(self) -> str:
        return self._path

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    def get_lines(self, start: int = 0, end: Optional[int] = None) -> list[str]:
        return self._lines[start:end]

    def set_lines(self, start: int, end: int, lines: Sequence[str]) -> None:
        self._lines[start:end] = list(lines)
        self._modified = True

    def line_count(self) -> int:
        return len(self._lines)

    def is_modified(self) -> bool:
        return self._modified

    def set_modified(self, modified: bool) -> None:
        self._modified = modified


@dataclass(frozen=True)
class Subscription:
    handle: int
    event: LifecycleEvent
    predicate: BufferPredicate
    callback: BufferCallback


class LifecycleHub(ILifecycle):
    """Synchronous event hub; callbacks run in subscription order."""

    def __init__(self) -> None:
        self._handles = itertools.count(1)
        self._subscriptions: dict[int, Subscription] = {}

    def subscribe(
        self,
        event: LifecycleEvent,
        predicate: BufferPredicate,
        callback: BufferCallback,
    ) -> int:
        handle = next(self._handles)
        self._subscriptions[handle] = Subscription(handle, event, predicate, callback)
        return handle

    def unsubscribe(self, handle: int) -> bool:
        return self._subscriptions.pop(handle, None) is not None

    def subscriptions(self, event: Optional[LifecycleEvent] = None) -> list[Subscription]:
        return [
            item
            for item in self._subscriptions.values()
            if event is None or item.event == event
        ]

    def emit(self, event: LifecycleEvent, buffer: IBuffer) -> int:
        fired = 0
        for item in self.subscriptions(event):
            if item.predicate(buffer):
                item.callback(buffer)
                fired += 1
        return fired


class RecordingNotifier(INotifier):
    def __init__(self) -> None:
        self.messages: list[tuple[str, NotifyLevel]] = []

    def notify(self, message: str, level: NotifyLevel = NotifyLevel.INFO) -> None:
        self.messages.append((message, level))

    def texts(self, level: Optional[NotifyLevel] = None) -> list[str]:
        return [text for text, item_level in self.messages if level in (None, item_level)]
