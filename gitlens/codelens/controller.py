"""Keeps the CodeLens provider registration in step with settings and git state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol, Sequence

from ..config import ConfigurationSnapshot
from ..events import Disposable
from ..host import CommandContext, CommandContextStore, LensRegistry
from ..logging import get_logger
from .provider import GitCodeLensProvider


class AnnotationProvider(Protocol):
    """What the controller needs from the provider it registers."""

    def reset(self) -> None:
        ...


ProviderFactory = Callable[[], AnnotationProvider]


@dataclass(frozen=True)
class _ActiveLens:
    provider: AnnotationProvider
    registration: Disposable


class CodeLensController:
    """Owns at most one CodeLens provider registration.

    Three things drive it: settings edits (``settings.on_did_change``),
    repository changes (``git.on_did_change_git_cache``), and the manual
    :meth:`toggle_code_lens` command. Handlers run to completion one at a
    time on the thread that delivers the event.

    A provider is only ever registered from the inactive state; a settings
    change while active resets the existing provider instead. If building or
    registering a provider raises, the exception propagates, the controller
    stays inactive and the cached settings are not advanced, so the next
    settings event retries.
    """

    def __init__(
        self,
        settings: Any,
        git: Any,
        *,
        registry: LensRegistry,
        command_context: CommandContextStore,
        provider_factory: Optional[ProviderFactory] = None,
        selector: Sequence[str] = GitCodeLensProvider.selector,
    ) -> None:
        self._settings = settings
        self._git = git
        self._registry = registry
        self._command_context = command_context
        self._provider_factory = provider_factory or self._default_provider
        self._selector = tuple(selector)
        self._config: Optional[ConfigurationSnapshot] = None
        self._active: Optional[_ActiveLens] = None
        self._subscriptions: Optional[Disposable] = None
        self.logger = get_logger("codelens")

    @property
    def config(self) -> Optional[ConfigurationSnapshot]:
        """The last settings snapshot that was fully processed."""
        return self._config

    @property
    def is_active(self) -> bool:
        return self._active is not None

    @property
    def provider(self) -> Optional[AnnotationProvider]:
        return self._active.provider if self._active is not None else None

    def start(self) -> None:
        """Evaluate the current settings and begin listening for changes."""
        if self._subscriptions is not None:
            return
        self._on_configuration_changed()
        self._subscriptions = Disposable.from_(
            self._settings.on_did_change.subscribe(self._on_configuration_changed),
            self._git.on_did_change_git_cache.subscribe(self._on_git_cache_changed),
        )

    def dispose(self) -> None:
        if self._subscriptions is not None:
            self._subscriptions.dispose()
            self._subscriptions = None
        self._deactivate()

    def toggle_code_lens(self, editor: Any = None) -> None:
        """Flip CodeLens on or off for every editor.

        ``editor`` is accepted for command-handler compatibility and ignored.
        Does nothing unless at least one lens kind is enabled in settings.
        """
        config = self._config
        if config is None or not config.any_lens_enabled:
            return

        self.logger.debug("toggle_code_lens()")
        if self._active is not None:
            self._deactivate()
            return
        self._activate()

    # ------------------------------------------------------------------
    # Event handlers

    def _on_configuration_changed(self, *_: Any) -> None:
        config = self._settings.get().code_lens
        if config == self._config:
            return

        self.logger.info("CodeLens config changed; resetting CodeLens provider")
        if config.active:
            if self._active is not None:
                self._active.provider.reset()
            else:
                self._activate()
        else:
            self._deactivate()

        self._command_context.set(CommandContext.CAN_TOGGLE_CODE_LENS, config.any_lens_enabled)
        self._config = config

    def _on_git_cache_changed(self, *_: Any) -> None:
        if self._active is None:
            return
        self.logger.debug("Git cache changed; resetting CodeLens provider")
        self._active.provider.reset()

    # ------------------------------------------------------------------
    # Internals

    def _activate(self) -> None:
        provider = self._provider_factory()
        registration = self._registry.register(self._selector, provider)
        self._active = _ActiveLens(provider, registration)

    def _deactivate(self) -> None:
        active, self._active = self._active, None
        if active is not None:
            active.registration.dispose()

    def _default_provider(self) -> GitCodeLensProvider:
        return GitCodeLensProvider(self._current_snapshot)

    def _current_snapshot(self) -> ConfigurationSnapshot:
        return self._config if self._config is not None else ConfigurationSnapshot()


__all__ = ["AnnotationProvider", "CodeLensController", "ProviderFactory"]
