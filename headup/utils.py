import functools
import os
import re
from pathlib import Path
from typing import Iterable

from headup.constants import SIZE_UNITS


def humanize_size(size: int) -> str:
    value = float(max(size, 0))
    unit_index = 0
    while value >= 1024 and unit_index < len(SIZE_UNITS) - 1:
        value /= 1024
        unit_index += 1
    if unit_index == 0:
        return f"{int(value)} {SIZE_UNITS[0]}"
    return f"{value:.1f} {SIZE_UNITS[unit_index]}"


def _closing_brace(glob: str, start: int) -> int:
    depth = 0
    for index in range(start, len(glob)):
        if glob[index] == "{":
            depth += 1
        elif glob[index] == "}":
            depth -= 1
            if depth == 0:
                return index
    return -1


def _split_alternatives(body: str) -> list[str]:
    alternatives: list[str] = []
    depth = 0
    current = ""
    for char in body:
        if char == "," and depth == 0:
            alternatives.append(current)
            current = ""
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
        current += char
    alternatives.append(current)
    return alternatives


def _char_class(glob: str, start: int) -> tuple[str, int]:
    """Translate ``[...]`` at ``start``; returns ``("", start)`` if unclosed."""
    index = start + 1
    negate = index < len(glob) and glob[index] in "!^"
    if negate:
        index += 1
    body_start = index
    if index < len(glob) and glob[index] == "]":
        index += 1
    end = glob.find("]", index)
    if end == -1:
        return "", start
    body = glob[body_start:end].replace("\\", "\\\\").replace("[", "\\[")
    if negate:
        return f"[^/{body}]", end + 1
    return f"[{body}]", end + 1


def _translate(glob: str) -> str:
    parts: list[str] = []
    index = 0
    while index < len(glob):
        char = glob[index]
        if glob.startswith("**/", index):
            parts.append("(?:.*/)?")
            index += 3
        elif glob.startswith("**", index):
            parts.append(".*")
            index += 2
        elif char == "*":
            parts.append("[^/]*")
            index += 1
        elif char == "?":
            parts.append("[^/]")
            index += 1
        elif char == "[" and _char_class(glob, index)[0]:
            translated, index = _char_class(glob, index)
            parts.append(translated)
        elif char == "{" and _closing_brace(glob, index) != -1:
            end = _closing_brace(glob, index)
            alternatives = _split_alternatives(glob[index + 1 : end])
            parts.append("(?:" + "|".join(_translate(item) for item in alternatives) + ")")
            index = end + 1
        else:
            parts.append(re.escape(char))
            index += 1
    return "".join(parts)


@functools.lru_cache(maxsize=256)
def glob_to_regex(glob: str) -> re.Pattern[str]:
    """Translate a file glob into a compiled regular expression.

    ``*`` and ``?`` never cross a ``/``; ``**`` spans any number of path
    segments and ``**/`` may match zero segments. ``[abc]``, ``[!abc]`` and
    ``{md,markdown}`` behave as in shell globs; an unclosed ``[`` or ``{`` is
    taken literally.
    """
    return re.compile(_translate(glob))


def path_matches(path: str | Path, globs: str | Iterable[str] | None) -> bool:
    """Check whether ``path`` matches any of ``globs``.

    A glob without a slash is tested against the base name. A glob with a
    slash is tested against every trailing run of path segments, so
    ``src/*.py`` matches ``/home/me/project/src/app.py``.
    """
    if not globs:
        return False
    if isinstance(globs, str):
        globs = (globs,)

    text = str(path).replace(os.sep, "/")
    if not text:
        return False
    segments = text.split("/")
    name = segments[-1]

    for glob in globs:
        pattern = glob_to_regex(glob)
        if "/" not in glob:
            if pattern.fullmatch(name):
                return True
            continue
        for start in range(len(segments)):
            if pattern.fullmatch("/".join(segments[start:])):
                return True
    return False


def relative_to_cwd(path: str, cwd: str) -> str:
    if not path or not cwd:
        return path
    prefix = cwd.rstrip("/\\") + os.sep
    if path.startswith(prefix):
        relative = path[len(prefix) :]
        return relative or path
    return path


def compact_home_path(path: str | Path) -> str:
    text = str(path)
    home = str(Path.home())
    if text == home:
        return "~"
    home_prefix = f"{home}/"
    if text.startswith(home_prefix):
        return f"~/{text[len(home_prefix):]}"
    return text


def compact_home_paths_in_text(text: str) -> str:
    home = str(Path.home())
    if text == home:
        return "~"
    return text.replace(f"{home}/", "~/")
