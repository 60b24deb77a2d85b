from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Optional, Sequence, Union

BufferId = Union[int, str]


class NotifyLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


class LifecycleEvent(str, Enum):
    OPEN = "open"
    PRE_WRITE = "pre_write"
    POST_WRITE = "post_write"
    CLOSE = "close"


class IBuffer(ABC):
    """Line-addressed text buffer owned by the host.

    Line ranges are 0-based and end-exclusive; ``end=None`` means the end of
    the buffer.
    """

    @property
    @abstractmethod
    def buffer_id(self) -> BufferId:
        raise NotImplementedError

    @property
    @abstractmethod
    def path(self) -> str:
        """Absolute path of the backing file, or ``""`` for unnamed buffers."""
        raise NotImplementedError

    @abstractmethod
    def get_lines(self, start: int = 0, end: Optional[int] = None) -> list[str]:
        raise NotImplementedError

    @abstractmethod
    def set_lines(self, start: int, end: int, lines: Sequence[str]) -> None:
        raise NotImplementedError

    @abstractmethod
    def line_count(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def is_modified(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def set_modified(self, modified: bool) -> None:
        raise NotImplementedError


class IFileSystem(ABC):
    @abstractmethod
    def stat_size(self, path: str) -> Optional[int]:
        """Return the file size in bytes, or ``None`` when it cannot be read."""
        raise NotImplementedError

    @abstractmethod
    def cwd(self) -> str:
        raise NotImplementedError


class INotifier(ABC):
    @abstractmethod
    def notify(self, message: str, level: NotifyLevel = NotifyLevel.INFO) -> None:
        raise NotImplementedError


BufferPredicate = Callable[[IBuffer], bool]
BufferCallback = Callable[[IBuffer], None]


class ILifecycle(ABC):
    @abstractmethod
    def subscribe(
        self,
        event: LifecycleEvent,
        predicate: BufferPredicate,
        callback: BufferCallback,
    ) -> int:
        raise NotImplementedError

    @abstractmethod
    def unsubscribe(self, handle: int) -> bool:
        raise NotImplementedError
