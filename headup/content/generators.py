"""Built-in content generators."""

from __future__ import annotations

from datetime import datetime

from headup.constants import DEFAULT_TIME_FORMAT, INHERIT_TIME_FORMAT
from headup.content.registry import ContentGenerator, GeneratorContext, GeneratorRegistry
from headup.content.timefmt import detect_time_format, format_time
from headup.host.interfaces import IBuffer
from headup.utils import humanize_size, relative_to_cwd

CONTENT_LABELS: dict[str, str] = {
    "current_time": "timestamp",
    "file_size": "file size",
    "line_count": "line count",
    "file_name": "file name",
    "file_path": "file path",
    "file_path_abs": "absolute file path",
}


def content_label(kind: str) -> str:
    return CONTENT_LABELS.get(kind, kind)


def resolve_time_format(time_format: str | None, previous_value: str | None) -> str:
    if time_format == INHERIT_TIME_FORMAT:
        return detect_time_format(previous_value) or DEFAULT_TIME_FORMAT
    return time_format or DEFAULT_TIME_FORMAT


def current_time(buffer: IBuffer, context: GeneratorContext) -> str:
    time_format = resolve_time_format(context.time_format, context.previous_value)
    return format_time(time_format, context.now or datetime.now())


def file_size(buffer: IBuffer, context: GeneratorContext) -> str:
    size = context.filesystem.stat_size(buffer.path)
    if size is None:
        return humanize_size(0)
    return humanize_size(size)


def line_count(buffer: IBuffer, context: GeneratorContext) -> str:
    return str(buffer.line_count())


def file_name(buffer: IBuffer, context: GeneratorContext) -> str:
    path = buffer.path
    name = path.replace("\\", "/").rsplit("/", 1)[-1]
    return name or path


def file_path(buffer: IBuffer, context: GeneratorContext) -> str:
    return relative_to_cwd(buffer.path, context.filesystem.cwd())


def file_path_abs(buffer: IBuffer, context: GeneratorContext) -> str:
    return buffer.path


BUILTIN_GENERATORS: dict[str, ContentGenerator] = {
    "current_time": current_time,
    "file_size": file_size,
    "line_count": line_count,
    "file_name": file_name,
    "file_path": file_path,
    "file_path_abs": file_path_abs,
}


def create_default_registry() -> GeneratorRegistry:
    return GeneratorRegistry(BUILTIN_GENERATORS)
