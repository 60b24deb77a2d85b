import sys
from pathlib import Path
from typing import Any, Callable

from click.testing import CliRunner
import pytest


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()

from headup.content import GeneratorRegistry, create_default_registry  # noqa: E402
from headup.host import MemoryBuffer, RecordingNotifier  # noqa: E402
from headup.rules import HeadupConfig, Rule, merge  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / ".config"))
    monkeypatch.setattr(Path, "home", lambda: tmp_path)


@pytest.fixture
def config_root(tmp_path: Path) -> Path:
    return tmp_path / ".config" / "headup"


@pytest.fixture
def write_config(config_root: Path) -> Callable[[str], Path]:
    def _write(text: str) -> Path:
        path = config_root / "config.yaml"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def registry() -> GeneratorRegistry:
    return create_default_registry()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def make_rule(registry: GeneratorRegistry) -> Callable[..., Rule]:
    def _make(**overrides: Any) -> Rule:
        item: dict[str, Any] = {
            "patterns": ["*.md"],
            "match_expression": r"last_modified:\s*(.*?)\s*$",
            "content": "current_time",
            "time_format": "inherit",
            "max_scan_lines": 20,
        }
        item.update(overrides)
        return merge({}, [item], registry)[0]

    return _make


@pytest.fixture
def loud_config() -> HeadupConfig:
    return HeadupConfig(silent=False)


@pytest.fixture
def make_buffer() -> Callable[..., MemoryBuffer]:
    def _make(*lines: str, path: str = "/work/notes.md", modified: bool = True) -> MemoryBuffer:
        return MemoryBuffer(list(lines), path=path, modified=modified)

    return _make


@pytest.fixture
def cli_runner(tmp_path: Path) -> CliRunner:
    class HomeCliRunner(CliRunner):
        def invoke(self, cli: Any, args: Any = None, **kwargs: Any):  # type: ignore[override]
            env = dict(kwargs.pop("env", {}) or {})
            env.setdefault("HOME", str(tmp_path))
            env.setdefault("XDG_CONFIG_HOME", str(tmp_path / ".config"))
            kwargs["env"] = env
            return super().invoke(cli, args=args, **kwargs)

    return HomeCliRunner()
