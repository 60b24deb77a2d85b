"""Decide whether a matched metadata line may be rewritten."""

from __future__ import annotations

from typing import Optional

from headup.constants import INHERIT_TIME_FORMAT
from headup.content import GeneratorContext, GeneratorRegistry, content_label, default_registry
from headup.engine.cache import ManualEditCache
from headup.engine.matcher import Match, find_in_buffer
from headup.errors import GeneratorError
from headup.host.filesystem import LocalFileSystem
from headup.host.interfaces import IBuffer, IFileSystem, INotifier, NotifyLevel
from headup.models import UpdateResult, UpdateStatus
from headup.rules.models import HeadupConfig, Rule


class UpdateEngine:
    def __init__(
        self,
        registry: Optional[GeneratorRegistry] = None,
        cache: Optional[ManualEditCache] = None,
        filesystem: Optional[IFileSystem] = None,
        notifier: Optional[INotifier] = None,
    ) -> None:
        self._registry = registry if registry is not None else default_registry
        self._cache = cache if cache is not None else ManualEditCache()
        self._filesystem = filesystem or LocalFileSystem()
        self._notifier = notifier

    @property
    def cache(self) -> ManualEditCache:
        return self._cache

    @property
    def registry(self) -> GeneratorRegistry:
        return self._registry

    def on_open(self, buffer: IBuffer, rule: Rule) -> UpdateResult:
        """Seed the cache with the value currently in the buffer."""
        if rule.is_excluded(buffer.path):
            return self._result(UpdateStatus.EXCLUDED, buffer, rule)

        match = find_in_buffer(buffer, rule)
        if match is None:
            return self._result(UpdateStatus.NOT_FOUND, buffer, rule)

        self._cache.record(buffer.buffer_id, rule, match.value, match.line_index)
        return self._result(
            UpdateStatus.SEEDED,
            buffer,
            rule,
            line_index=match.line_index,
            old_value=match.value,
        )

    def on_pre_write(
        self,
        buffer: IBuffer,
        rule: Rule,
        config: HeadupConfig,
        force: bool = False,
    ) -> UpdateResult:
        """Refresh the matched value unless the user edited it by hand.

        ``force`` skips the dirty-buffer check; callers clear the cache first
        when they want the manual-edit check skipped as well.
        """
        if not force and not buffer.is_modified():
            return self._result(UpdateStatus.NOT_MODIFIED, buffer, rule)
        if rule.is_excluded(buffer.path):
            return self._result(UpdateStatus.EXCLUDED, buffer, rule)

        match = find_in_buffer(buffer, rule)
        if match is None:
            return self._result(UpdateStatus.NOT_FOUND, buffer, rule)

        cached = self._cache.lookup(buffer.buffer_id, rule)
        if cached is not None and cached.matched_text != match.value:
            self._cache.record(buffer.buffer_id, rule, match.value, match.line_index)
            if not config.silent:
                self._notify(
                    "headup: Skipping automatic update due to manual change",
                    NotifyLevel.INFO,
                )
            return self._result(
                UpdateStatus.MANUAL_CHANGE,
                buffer,
                rule,
                line_index=match.line_index,
                old_value=cached.matched_text,
                new_value=match.value,
                detail="manual change detected",
            )

        try:
            new_value = self._generate(buffer, rule, match.value)
        except GeneratorError as exc:
            self._notify(f"headup: {exc}", NotifyLevel.ERROR)
            return self._result(
                UpdateStatus.ERROR,
                buffer,
                rule,
                line_index=match.line_index,
                old_value=match.value,
                new_value=match.value,
                detail=str(exc),
            )

        if new_value == match.value:
            return self._result(
                UpdateStatus.UNCHANGED,
                buffer,
                rule,
                line_index=match.line_index,
                old_value=match.value,
                new_value=new_value,
            )

        self._apply(buffer, match, new_value)
        self._cache.record(buffer.buffer_id, rule, new_value, match.line_index)
        if not config.silent:
            self._notify(
                f"headup: Auto-updated {content_label(rule.content_kind)} to: {new_value}",
                NotifyLevel.INFO,
            )
        return self._result(
            UpdateStatus.UPDATED,
            buffer,
            rule,
            line_index=match.line_index,
            old_value=match.value,
            new_value=new_value,
        )

    def _generate(self, buffer: IBuffer, rule: Rule, previous_value: str) -> str:
        context = GeneratorContext(
            time_format=rule.time_format or INHERIT_TIME_FORMAT,
            previous_value=previous_value,
            filesystem=self._filesystem,
        )
        return self._registry.generate(rule.content_kind, buffer, context)

    @staticmethod
    def _apply(buffer: IBuffer, match: Match, new_value: str) -> None:
        row = match.line_index - 1
        buffer.set_lines(row, row + 1, [match.replace_value(new_value)])

    def _notify(self, message: str, level: NotifyLevel) -> None:
        if self._notifier is not None:
            self._notifier.notify(message, level)

    @staticmethod
    def _result(
        status: UpdateStatus,
        buffer: IBuffer,
        rule: Rule,
        line_index: Optional[int] = None,
        old_value: Optional[str] = None,
        new_value: Optional[str] = None,
        detail: str = "",
    ) -> UpdateResult:
        return UpdateResult(
            status=status,
            buffer_id=buffer.buffer_id,
            rule_id=rule.rule_id,
            line_index=line_index,
            old_value=old_value,
            new_value=new_value,
            detail=detail,
        )
