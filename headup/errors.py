from pathlib import Path
from typing import Any, Optional


class HeadupError(Exception):
    """Base user-facing application error."""


class ConfigError(HeadupError):
    def __init__(
        self,
        message: str,
        rule_index: Optional[int] = None,
        field: Optional[str] = None,
    ) -> None:
        self.message = message
        self.rule_index = rule_index
        self.field = field
        super().__init__(self._render())

    @property
    def location(self) -> str:
        if self.rule_index is None:
            return self.field or ""
        if self.field:
            return f"rules[{self.rule_index}].{self.field}"
        return f"rules[{self.rule_index}]"

    def _render(self) -> str:
        location = self.location
        return f"{location}: {self.message}" if location else self.message


class InvalidConfigFileError(ConfigError):
    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(message=f"Invalid config file ({detail}): {path}")


class GeneratorError(HeadupError):
    def __init__(self, kind: str, detail: str, message: Optional[str] = None) -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(message or f"Content generator '{kind}' failed ({detail})")


class UnknownGeneratorError(GeneratorError):
    def __init__(self, kind: str) -> None:
        super().__init__(
            kind=kind, detail="not registered", message=f"Unknown content: {kind}"
        )


class InvalidGeneratorOutputError(GeneratorError):
    def __init__(self, kind: str, value: Any) -> None:
        self.value = value
        super().__init__(
            kind=kind, detail=f"expected a string, got {type(value).__name__}"
        )
