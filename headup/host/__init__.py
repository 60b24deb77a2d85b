from headup.host.filesystem import FileBuffer, LocalFileSystem
from headup.host.interfaces import (
    IBuffer,
    IFileSystem,
    ILifecycle,
    INotifier,
    LifecycleEvent,
    NotifyLevel,
)
from headup.host.memory import LifecycleHub, MemoryBuffer, RecordingNotifier

__all__ = [
    "FileBuffer",
    "IBuffer",
    "IFileSystem",
    "ILifecycle",
    "INotifier",
    "LifecycleEvent",
    "LifecycleHub",
    "LocalFileSystem",
    "MemoryBuffer",
    "NotifyLevel",
    "RecordingNotifier",
]
