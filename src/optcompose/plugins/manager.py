# src/optcompose/plugins/manager.py
"""Plugin manager for installation and strategy registration.

Uses pluggy for hook-based plugin registration.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import pluggy

from optcompose.contracts.types import MergeStrategy
from optcompose.core.logging import get_logger
from optcompose.plugins.hookspecs import (
    HOOK_NAMES,
    PROJECT_NAME,
    OptcomposeInstallSpec,
    OptcomposeStrategySpec,
    hookimpl,
)

if TYPE_CHECKING:
    from optcompose.composer import Composer

logger = get_logger(__name__)


class _InstallAdapter:
    """Wraps a plain install callable as a pluggy plugin."""

    def __init__(self, install: Callable[..., Any]) -> None:
        self._install = install

    @hookimpl
    def optcompose_install(self, composer: Composer, options: dict[str, Any]) -> None:
        self._install(composer, **options)


class PluginManager:
    """Installs plugins into one composer, each at most once.

    Accepted plugin shapes:
    - an object implementing the optcompose hooks (see hookspecs)
    - an object with an ``install(composer, **options)`` callable
    - a plain callable ``fn(composer, **options)``

    Usage:
        manager = PluginManager(composer)
        manager.use(MyPlugin(), level=2)
    """

    def __init__(self, composer: Composer) -> None:
        self._composer = composer
        self._pm = pluggy.PluginManager(PROJECT_NAME)

        self._pm.add_hookspecs(OptcomposeInstallSpec)
        self._pm.add_hookspecs(OptcomposeStrategySpec)

        # Original plugin objects in installation order (identity checked)
        self._installed: list[Any] = []
        self._strategies: dict[str, MergeStrategy] = {}

    @property
    def installed(self) -> list[Any]:
        return list(self._installed)

    def is_installed(self, plugin: Any) -> bool:
        return any(existing is plugin for existing in self._installed)

    def use(self, plugin: Any, **options: Any) -> bool:
        """Install ``plugin`` unless it is already installed.

        Returns:
            True if the plugin was installed now, False if it already was.

        Raises:
            TypeError: If ``plugin`` has no recognizable install entry point
            ValueError: If the plugin's strategies clash with another plugin's
        """
        if self.is_installed(plugin):
            return False

        registered = self._adapt(plugin)
        self._pm.register(registered)
        try:
            self._refresh_strategies()
        except ValueError:
            self._pm.unregister(registered)
            raise

        others = [existing for existing in self._pm.get_plugins() if existing is not registered]
        install = self._pm.subset_hook_caller("optcompose_install", remove_plugins=others)
        install(composer=self._composer, options=dict(options))

        self._installed.append(plugin)
        logger.debug("plugin installed", plugin=repr(plugin))
        return True

    def _adapt(self, plugin: Any) -> Any:
        if self._has_hookimpls(plugin):
            return plugin
        install = getattr(plugin, "install", None)
        if callable(install):
            return _InstallAdapter(install)
        if callable(plugin):
            return _InstallAdapter(plugin)
        raise TypeError(
            f"Plugin {plugin!r} must implement optcompose hooks, expose an install() callable, or be callable itself."
        )

    def _has_hookimpls(self, plugin: Any) -> bool:
        return any(
            hasattr(plugin, hook_name) and self._pm.parse_hookimpl_opts(plugin, hook_name) is not None
            for hook_name in HOOK_NAMES
        )

    def _refresh_strategies(self) -> None:
        """Collect strategies from all plugins and register them.

        Raises:
            ValueError: If two plugins provide a strategy for the same field
        """
        new_strategies: dict[str, MergeStrategy] = {}
        for strategies in self._pm.hook.optcompose_get_strategies():
            for field, strategy in strategies.items():
                if field in new_strategies:
                    raise ValueError(f"Duplicate merge strategy for field '{field}'. Already provided by another plugin.")
                new_strategies[field] = strategy

        # All validated, update registry
        registry = self._composer.strategies
        for field, strategy in new_strategies.items():
            if self._strategies.get(field) is not strategy:
                registry.register(field, strategy)
        self._strategies = new_strategies

    def get_strategies(self) -> dict[str, MergeStrategy]:
        """Strategies currently contributed by plugins."""
        return dict(self._strategies)
