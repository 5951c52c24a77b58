# src/optcompose/plugins/hookspecs.py
"""pluggy hook specifications for optcompose plugins.

Usage (implementing a plugin):
    from optcompose.plugins.hookspecs import hookimpl

    class TagsPlugin:
        @hookimpl  # NOT @hookspec - that's for defining specs
        def optcompose_install(self, composer, options):
            composer.mixin({"created": [announce]})

        @hookimpl
        def optcompose_get_strategies(self):
            return {"tags": merge_tags}

Note: @hookspec defines the hook interface (done here).
      @hookimpl marks plugin implementations of those hooks.
"""

from typing import TYPE_CHECKING, Any

import pluggy

if TYPE_CHECKING:
    from optcompose.composer import Composer
    from optcompose.contracts.types import MergeStrategy

# Project name for pluggy
PROJECT_NAME = "optcompose"

# Hook specification marker
hookspec = pluggy.HookspecMarker(PROJECT_NAME)

# Hook implementation marker (for plugins to use)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)

HOOK_NAMES: tuple[str, ...] = ("optcompose_install", "optcompose_get_strategies")


class OptcomposeInstallSpec:
    """Hook specifications for plugin installation."""

    @hookspec
    def optcompose_install(self, composer: "Composer", options: dict[str, Any]) -> None:
        """Install the plugin into a composer.

        Called exactly once per plugin, when the plugin is first used.

        Args:
            composer: Composer the plugin is being installed into
            options: Keyword options passed to Composer.use()
        """


class OptcomposeStrategySpec:
    """Hook specifications for custom merge strategies."""

    @hookspec
    def optcompose_get_strategies(self) -> dict[str, "MergeStrategy"]:  # type: ignore[empty-body]
        """Return merge strategies keyed by option field name.

        Returns:
            Mapping of field name to strategy callable
        """
