from headup.content.generators import (
    BUILTIN_GENERATORS,
    content_label,
    create_default_registry,
)
from headup.content.registry import (
    ContentGenerator,
    GeneratorContext,
    GeneratorRegistry,
)
from headup.content.timefmt import detect_time_format

default_registry = create_default_registry()

__all__ = [
    "BUILTIN_GENERATORS",
    "ContentGenerator",
    "GeneratorContext",
    "GeneratorRegistry",
    "content_label",
    "create_default_registry",
    "default_registry",
    "detect_time_format",
]
