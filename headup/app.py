"""Public entry points: setup, enable/disable, force update, cache control."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from headup.content import ContentGenerator, GeneratorRegistry, default_registry
from headup.engine import ManualEditCache, UpdateEngine
from headup.errors import ConfigError
from headup.host import (
    IBuffer,
    IFileSystem,
    ILifecycle,
    INotifier,
    LifecycleEvent,
    LifecycleHub,
    NotifyLevel,
)
from headup.models import UpdateResult, UpdateStatus
from headup.rules import HeadupConfig, Rule, RuleResolver
from headup.tui import ConsoleNotifier


class Headup:
    def __init__(
        self,
        lifecycle: Optional[ILifecycle] = None,
        notifier: Optional[INotifier] = None,
        registry: Optional[GeneratorRegistry] = None,
        filesystem: Optional[IFileSystem] = None,
    ) -> None:
        self._registry = registry if registry is not None else default_registry
        self._lifecycle = lifecycle or LifecycleHub()
        self._notifier = notifier or ConsoleNotifier()
        self._resolver = RuleResolver(self._registry)
        self._engine = UpdateEngine(
            registry=self._registry,
            cache=ManualEditCache(),
            filesystem=filesystem,
            notifier=self._notifier,
        )
        self._config = self._resolver.resolve(None).with_enabled(False)
        self._handles: list[int] = []

    @classmethod
    def default(
        cls,
        lifecycle: Optional[ILifecycle] = None,
        notifier: Optional[INotifier] = None,
        registry: Optional[GeneratorRegistry] = None,
        filesystem: Optional[IFileSystem] = None,
    ) -> "Headup":
        """Build an instance already set up with the default configuration."""
        app = cls(
            lifecycle=lifecycle,
            notifier=notifier,
            registry=registry,
            filesystem=filesystem,
        )
        app.setup()
        return app

    @property
    def engine(self) -> UpdateEngine:
        return self._engine

    @property
    def lifecycle(self) -> ILifecycle:
        return self._lifecycle

    @property
    def registry(self) -> GeneratorRegistry:
        return self._registry

    def setup(self, user_config: Optional[Mapping[str, Any]] = None) -> HeadupConfig:
        """Validate ``user_config`` and make it the effective configuration.

        On ``ConfigError`` the error is reported and re-raised; the previous
        configuration and its subscriptions stay in effect.
        """
        try:
            parsed = self._resolver.resolve(user_config)
        except ConfigError as exc:
            self._notifier.notify(f"headup: {exc}", NotifyLevel.ERROR)
            raise

        self._unsubscribe_all()
        self._config = parsed
        if parsed.enabled:
            self.enable()
        return self._config

    def enable(self) -> None:
        self._unsubscribe_all()
        self._config = self._config.with_enabled(True)

        for rule in self._config.rules:
            predicate = self._predicate(rule)
            for event in (LifecycleEvent.OPEN, LifecycleEvent.POST_WRITE):
                self._handles.append(
                    self._lifecycle.subscribe(
                        event, predicate, self._open_callback(rule)
                    )
                )
            self._handles.append(
                self._lifecycle.subscribe(
                    LifecycleEvent.PRE_WRITE, predicate, self._pre_write_callback(rule)
                )
            )
        self._handles.append(
            self._lifecycle.subscribe(
                LifecycleEvent.CLOSE,
                lambda buffer: True,
                lambda buffer: self._engine.cache.forget_buffer(buffer.buffer_id),
            )
        )

    def disable(self) -> None:
        self._config = self._config.with_enabled(False)
        self._unsubscribe_all()

    def toggle(self) -> bool:
        if self._config.enabled:
            self.disable()
        else:
            self.enable()
        return self._config.enabled

    def force_update(self, buffer: IBuffer) -> list[UpdateResult]:
        """Rewrite every matching rule's value, ignoring cache and dirty state."""
        self._engine.cache.forget_buffer(buffer.buffer_id)
        if not self._config.enabled:
            self._notifier.notify("headup is disabled", NotifyLevel.WARN)
            return []

        results = [
            self.run_pre_write(buffer, rule, force=True)
            for rule in self._config.rules_for(buffer.path)
        ]
        if not any(result.matched for result in results):
            self._notifier.notify(
                "headup: No matching pattern found in current buffer", NotifyLevel.WARN
            )
        return results

    update_current_buffer = force_update

    def clear_cache(self) -> None:
        self._engine.cache.clear_all()
        if not self._config.silent:
            self._notifier.notify("headup cache cleared", NotifyLevel.INFO)

    def get_effective_config(self) -> HeadupConfig:
        return self._config

    def register_generator(self, name: str, generator: ContentGenerator) -> None:
        self._registry.register(name, generator)

    def run_open(self, buffer: IBuffer, rule: Rule) -> UpdateResult:
        try:
            return self._engine.on_open(buffer, rule)
        except Exception as exc:
            return self._failure(buffer, rule, exc)

    def run_pre_write(
        self, buffer: IBuffer, rule: Rule, force: bool = False
    ) -> UpdateResult:
        try:
            return self._engine.on_pre_write(buffer, rule, self._config, force=force)
        except Exception as exc:
            return self._failure(buffer, rule, exc)

    def _failure(self, buffer: IBuffer, rule: Rule, exc: Exception) -> UpdateResult:
        self._notifier.notify(f"headup: {exc}", NotifyLevel.ERROR)
        return UpdateResult(
            status=UpdateStatus.ERROR,
            buffer_id=buffer.buffer_id,
            rule_id=rule.rule_id,
            detail=str(exc),
        )

    def _open_callback(self, rule: Rule):
        def _callback(buffer: IBuffer) -> None:
            self.run_open(buffer, rule)

        return _callback

    def _pre_write_callback(self, rule: Rule):
        def _callback(buffer: IBuffer) -> None:
            self.run_pre_write(buffer, rule)

        return _callback

    @staticmethod
    def _predicate(rule: Rule):
        return lambda buffer: rule.applies_to(buffer.path)

    def _unsubscribe_all(self) -> None:
        for handle in self._handles:
            self._lifecycle.unsubscribe(handle)
        self._handles = []
