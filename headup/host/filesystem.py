"""File-backed host collaborators."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from headup.host.interfaces import IFileSystem
from headup.host.memory import MemoryBuffer


class LocalFileSystem(IFileSystem):
    def stat_size(self, path: str) -> Optional[int]:
        if not path:
            return None
        try:
            return os.stat(path).st_size
        except OSError:
            return None

    def cwd(self) -> str:
        return os.getcwd()


def _first_line_ending(text: str) -> str:
    index = text.find("\n")
    if index > 0 and text[index - 1] == "\r":
        return "\r\n"
    return "\n"


class FileBuffer(MemoryBuffer):
    """Buffer loaded from a file on disk and written back by ``save``.

    Lines are held without their line endings. A file whose first line ends
    in ``\\r\\n`` is written back with ``\\r\\n`` on every line.
    """

    def __init__(self, path: Path, text: str) -> None:
        self._file_path = path
        self._newline = _first_line_ending(text)
        self._trailing_newline = text.endswith("\n")
        body = text[:-1] if self._trailing_newline else text
        lines = body.split("\n") if body else []
        if self._newline == "\r\n":
            lines = [line[:-1] if line.endswith("\r") else line for line in lines]
        super().__init__(lines, path=str(path))

    @classmethod
    def open(cls, path: Path) -> "FileBuffer":
        resolved = path.expanduser().resolve()
        with resolved.open("r", encoding="utf-8", newline="") as handle:
            return cls(resolved, handle.read())

    @property
    def file_path(self) -> Path:
        return self._file_path

    @property
    def newline(self) -> str:
        return self._newline

    def render(self) -> str:
        text = self._newline.join(self.lines)
        if self._trailing_newline:
            text += self._newline
        return text

    def save(self) -> bool:
        if not self.is_modified():
            return False
        with self._file_path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(self.render())
        self.set_modified(False)
        return True
