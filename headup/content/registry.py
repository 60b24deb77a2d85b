"""Named content generators."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Mapping, Optional

from headup.errors import (
    GeneratorError,
    InvalidGeneratorOutputError,
    UnknownGeneratorError,
)
from headup.host.filesystem import LocalFileSystem
from headup.host.interfaces import IBuffer, IFileSystem


@dataclass(frozen=True)
class GeneratorContext:
    time_format: Optional[str] = None
    previous_value: Optional[str] = None
    filesystem: IFileSystem = field(default_factory=LocalFileSystem)
    now: Optional[datetime] = None


ContentGenerator = Callable[[IBuffer, GeneratorContext], str]


class GeneratorRegistry:
    def __init__(self, generators: Optional[Mapping[str, ContentGenerator]] = None) -> None:
        self._generators: dict[str, ContentGenerator] = {}
        for name, generator in (generators or {}).items():
            self.register(name, generator)

    def register(self, name: str, generator: ContentGenerator) -> None:
        """Register ``generator`` under ``name``, replacing any previous one."""
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Generator name must be a non-empty string")
        if not callable(generator):
            raise TypeError(f"Generator for '{name}' must be callable")
        self._generators[name] = generator

    def unregister(self, name: str) -> bool:
        return self._generators.pop(name, None) is not None

    def get(self, name: str) -> Optional[ContentGenerator]:
        return self._generators.get(name)

    def names(self) -> list[str]:
        return list(self._generators)

    def __contains__(self, name: object) -> bool:
        return name in self._generators

    def __len__(self) -> int:
        return len(self._generators)

    def generate(self, kind: str, buffer: IBuffer, context: GeneratorContext) -> str:
        generator = self.get(kind)
        if generator is None:
            raise UnknownGeneratorError(kind)
        try:
            value = generator(buffer, context)
        except GeneratorError:
            raise
        except Exception as exc:
            raise GeneratorError(kind, str(exc) or type(exc).__name__) from exc
        if not isinstance(value, str):
            raise InvalidGeneratorOutputError(kind, value)
        return value
