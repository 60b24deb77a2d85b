"""Tests for the open / pre-write decision engine."""

import re

from headup.engine import ManualEditCache, UpdateEngine
from headup.host import MemoryBuffer, NotifyLevel
from headup.models import UpdateStatus
from headup.rules import HeadupConfig

TIMESTAMP_RE = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}")


def _engine(registry, notifier=None) -> UpdateEngine:
    return UpdateEngine(registry=registry, cache=ManualEditCache(), notifier=notifier)


def _metadata_buffer(value: str = "2024-01-01 12:00:00", modified: bool = True) -> MemoryBuffer:
    return MemoryBuffer(
        ["---", "title: Notes", f"last_modified: {value}", "---", "", "Body"],
        path="/work/notes.md",
        modified=modified,
    )


def test_open_seeds_cache_without_touching_buffer(registry, make_rule) -> None:
    engine = _engine(registry)
    rule = make_rule()
    buffer = _metadata_buffer(modified=False)

    result = engine.on_open(buffer, rule)

    assert result.status == UpdateStatus.SEEDED
    assert result.line_index == 3
    assert buffer.get_lines(2, 3) == ["last_modified: 2024-01-01 12:00:00"]
    assert buffer.is_modified() is False
    entry = engine.cache.lookup(buffer.buffer_id, rule)
    assert entry is not None
    assert entry.matched_text == "2024-01-01 12:00:00"
    assert entry.line_index == 3


def test_open_without_match_is_noop(registry, make_rule, make_buffer) -> None:
    engine = _engine(registry)
    rule = make_rule()

    result = engine.on_open(make_buffer("nothing here"), rule)

    assert result.status == UpdateStatus.NOT_FOUND
    assert len(engine.cache) == 0


def test_open_skips_excluded_paths(registry, make_rule) -> None:
    engine = _engine(registry)
    rule = make_rule(exclude_globs=["notes.md"])

    result = engine.on_open(_metadata_buffer(), rule)

    assert result.status == UpdateStatus.EXCLUDED
    assert len(engine.cache) == 0


def test_pre_write_regenerates_timestamp_after_open(registry, make_rule) -> None:
    engine = _engine(registry)
    rule = make_rule()
    buffer = _metadata_buffer()
    engine.on_open(buffer, rule)

    result = engine.on_pre_write(buffer, rule, HeadupConfig())

    assert result.status == UpdateStatus.UPDATED
    assert result.old_value == "2024-01-01 12:00:00"
    line = buffer.get_lines(2, 3)[0]
    assert line.startswith("last_modified: ")
    value = line[len("last_modified: ") :]
    assert TIMESTAMP_RE.fullmatch(value)
    assert value == result.new_value
    assert engine.cache.lookup(buffer.buffer_id, rule).matched_text == value
    assert buffer.get_lines(0, 2) == ["---", "title: Notes"]
    assert buffer.get_lines(3) == ["---", "", "Body"]


def test_pre_write_detects_manual_edit_and_rebaselines(registry, make_rule) -> None:
    engine = _engine(registry)
    rule = make_rule()
    buffer = _metadata_buffer()
    engine.on_open(buffer, rule)
    buffer.set_lines(2, 3, ["last_modified: 2024-02-02 00:00:00"])

    result = engine.on_pre_write(buffer, rule, HeadupConfig())

    assert result.status == UpdateStatus.MANUAL_CHANGE
    assert buffer.get_lines(2, 3) == ["last_modified: 2024-02-02 00:00:00"]
    assert engine.cache.lookup(buffer.buffer_id, rule).matched_text == "2024-02-02 00:00:00"


def test_write_after_manual_edit_updates_again(registry, make_rule) -> None:
    engine = _engine(registry)
    rule = make_rule()
    buffer = _metadata_buffer()
    engine.on_open(buffer, rule)
    buffer.set_lines(2, 3, ["last_modified: 2024-02-02 00:00:00"])
    engine.on_pre_write(buffer, rule, HeadupConfig())

    result = engine.on_pre_write(buffer, rule, HeadupConfig())

    assert result.status == UpdateStatus.UPDATED
    assert result.old_value == "2024-02-02 00:00:00"


def test_pre_write_on_clean_buffer_is_noop(registry, make_rule) -> None:
    engine = _engine(registry)
    rule = make_rule()
    buffer = _metadata_buffer(modified=False)

    result = engine.on_pre_write(buffer, rule, HeadupConfig())

    assert result.status == UpdateStatus.NOT_MODIFIED
    assert buffer.get_lines(2, 3) == ["last_modified: 2024-01-01 12:00:00"]


def test_force_bypasses_clean_buffer_check(registry, make_rule) -> None:
    registry.register("fixed", lambda buffer, context: "FIXED")
    engine = _engine(registry)
    rule = make_rule(content="fixed")
    buffer = _metadata_buffer(modified=False)

    result = engine.on_pre_write(buffer, rule, HeadupConfig(), force=True)

    assert result.status == UpdateStatus.UPDATED
    assert buffer.get_lines(2, 3) == ["last_modified: FIXED"]


def test_pre_write_without_cache_entry_updates(registry, make_rule) -> None:
    registry.register("fixed", lambda buffer, context: "FIXED")
    engine = _engine(registry)
    rule = make_rule(content="fixed")
    buffer = _metadata_buffer()

    result = engine.on_pre_write(buffer, rule, HeadupConfig())

    assert result.status == UpdateStatus.UPDATED
    assert result.new_value == "FIXED"


def test_second_write_is_idempotent(registry, make_rule) -> None:
    registry.register("fixed", lambda buffer, context: "FIXED")
    engine = _engine(registry)
    rule = make_rule(content="fixed")
    buffer = _metadata_buffer()
    engine.on_open(buffer, rule)
    engine.on_pre_write(buffer, rule, HeadupConfig())
    before = buffer.lines

    result = engine.on_pre_write(buffer, rule, HeadupConfig())

    assert result.status == UpdateStatus.UNCHANGED
    assert buffer.lines == before


def test_unchanged_value_leaves_buffer_clean(registry, make_rule) -> None:
    registry.register("same", lambda buffer, context: context.previous_value or "")
    engine = _engine(registry)
    rule = make_rule(content="same")
    buffer = _metadata_buffer()
    buffer.set_modified(False)

    result = engine.on_pre_write(buffer, rule, HeadupConfig(), force=True)

    assert result.status == UpdateStatus.UNCHANGED
    assert buffer.is_modified() is False


def test_pre_write_not_found(registry, make_rule, make_buffer) -> None:
    engine = _engine(registry)

    result = engine.on_pre_write(make_buffer("plain text"), make_rule(), HeadupConfig())

    assert result.status == UpdateStatus.NOT_FOUND


def test_pre_write_skips_excluded_paths(registry, make_rule) -> None:
    engine = _engine(registry)
    rule = make_rule(exclude_globs="*.md")
    buffer = _metadata_buffer()

    result = engine.on_pre_write(buffer, rule, HeadupConfig())

    assert result.status == UpdateStatus.EXCLUDED
    assert buffer.get_lines(2, 3) == ["last_modified: 2024-01-01 12:00:00"]


def test_unknown_generator_leaves_line_untouched(registry, make_rule, notifier) -> None:
    registry.register("temporary", lambda buffer, context: "x")
    rule = make_rule(content="temporary")
    registry.unregister("temporary")
    engine = _engine(registry, notifier)
    buffer = _metadata_buffer()

    result = engine.on_pre_write(buffer, rule, HeadupConfig())

    assert result.status == UpdateStatus.ERROR
    assert result.new_value == "2024-01-01 12:00:00"
    assert buffer.get_lines(2, 3) == ["last_modified: 2024-01-01 12:00:00"]
    assert notifier.texts(NotifyLevel.ERROR) == ["headup: Unknown content: temporary"]


def test_failing_generator_is_reported_not_raised(registry, make_rule, notifier) -> None:
    def broken(buffer, context):
        raise RuntimeError("boom")

    registry.register("broken", broken)
    engine = _engine(registry, notifier)
    rule = make_rule(content="broken")
    buffer = _metadata_buffer()

    result = engine.on_pre_write(buffer, rule, HeadupConfig())

    assert result.status == UpdateStatus.ERROR
    assert "boom" in result.detail
    assert buffer.get_lines(2, 3) == ["last_modified: 2024-01-01 12:00:00"]


def test_notifications_respect_silent(registry, make_rule, notifier, loud_config) -> None:
    registry.register("fixed", lambda buffer, context: "FIXED")
    engine = _engine(registry, notifier)
    rule = make_rule(content="fixed")

    engine.on_pre_write(_metadata_buffer(), rule, HeadupConfig(silent=True))
    assert notifier.messages == []

    engine.on_pre_write(_metadata_buffer(), rule, loud_config)
    assert notifier.texts(NotifyLevel.INFO) == ["headup: Auto-updated fixed to: FIXED"]


def test_manual_change_notification(registry, make_rule, notifier, loud_config) -> None:
    engine = _engine(registry, notifier)
    rule = make_rule()
    buffer = _metadata_buffer()
    engine.on_open(buffer, rule)
    buffer.set_lines(2, 3, ["last_modified: hand written"])

    engine.on_pre_write(buffer, rule, loud_config)

    assert notifier.texts() == ["headup: Skipping automatic update due to manual change"]


def test_rules_on_different_lines_do_not_interfere(registry, make_rule) -> None:
    registry.register("fixed", lambda buffer, context: "FIXED")
    engine = _engine(registry)
    time_rule = make_rule(content="fixed")
    count_rule = make_rule(match_expression=r"^lines:\s*(\d+)", content="line_count")
    buffer = MemoryBuffer(
        ["last_modified: old", "lines: 0", "body"], path="/work/a.md", modified=True
    )

    engine.on_pre_write(buffer, time_rule, HeadupConfig())
    engine.on_pre_write(buffer, count_rule, HeadupConfig())

    assert buffer.lines == ["last_modified: FIXED", "lines: 3", "body"]


def test_custom_generator_output_is_written_verbatim(registry, make_rule) -> None:
    registry.register("build_id", lambda buffer, context: "build-7f3a")
    engine = _engine(registry)
    rule = make_rule(match_expression=r"build:\s*(\S+)", content="build_id")
    buffer = MemoryBuffer(["build: none"], path="/work/a.md", modified=True)

    result = engine.on_pre_write(buffer, rule, HeadupConfig())

    assert result.status == UpdateStatus.UPDATED
    assert buffer.lines == ["build: build-7f3a"]
