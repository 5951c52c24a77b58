# src/optcompose/composer.py
"""Composer: the root configuration object.

A composer owns everything that would otherwise be process-global: the
settings, the diagnostics channel, the merge strategy table, the installed
plugins and the root lineage node whose options every lineage descends from.
Several composers can coexist without sharing any of it.

Example:
    composer = Composer()
    composer.filter("upper", str.upper)
    Button = composer.extend({"name": "button", "props": ["label"]})
    button = composer.instantiate(Button, {"props_data": {"label": "Ok"}})
"""

from __future__ import annotations

import itertools
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from optcompose.contracts.enums import BASE_KEY, AssetKind
from optcompose.contracts.sentinels import MISSING
from optcompose.contracts.types import Definition, ReactiveSetter, ResolvedOptions
from optcompose.core.config import ComposeSettings
from optcompose.core.diagnostics import Diagnostics
from optcompose.core.logging import get_logger
from optcompose.core.naming import validate_component_name
from optcompose.lineage.node import LineageNode
from optcompose.lineage.resolver import resolve_constructor_options
from optcompose.options.assets import AssetTable, resolve_asset
from optcompose.options.merge import merge_options
from optcompose.options.strategies import StrategyRegistry
from optcompose.plugins.manager import PluginManager

if TYPE_CHECKING:
    from optcompose.instance import Instance

logger = get_logger(__name__)


class Composer:
    """Root of a family of lineages.

    Args:
        settings: Engine settings; defaults to ``ComposeSettings()``.
        builtins: Assets available to every lineage, keyed by asset kind.
        reactive_setter: Used by the state merge to add keys, so a reactive
            host can observe them.
    """

    def __init__(
        self,
        settings: ComposeSettings | None = None,
        *,
        builtins: Mapping[AssetKind, Mapping[str, Any]] | None = None,
        reactive_setter: ReactiveSetter | None = None,
    ) -> None:
        self.settings = settings if settings is not None else ComposeSettings()
        self.diagnostics = Diagnostics(self.settings)
        self.strategies = StrategyRegistry(self.settings, self.diagnostics, reactive_setter=reactive_setter)

        self._cids = itertools.count()
        self._uids = itertools.count()

        builtins = builtins or {}
        root_options: ResolvedOptions = {
            kind.field: AssetTable(builtins.get(kind)) for kind in AssetKind
        }
        root_options[BASE_KEY] = self
        self.root = LineageNode(self, root_options)

        self.plugins = PluginManager(self)

    # === Identity counters ===

    def next_cid(self) -> int:
        return next(self._cids)

    def next_uid(self) -> int:
        return next(self._uids)

    @property
    def options(self) -> ResolvedOptions:
        """Current root options."""
        return self.root.options

    # === Core operations ===

    def merge(self, parent: Any, child: Any, instance: Any = None) -> ResolvedOptions:
        """Merge with this composer's strategies and diagnostics."""
        return merge_options(parent, child, instance, registry=self.strategies)

    def resolve(self, node: LineageNode | None = None) -> ResolvedOptions:
        """Up-to-date options of ``node`` (the root when omitted)."""
        return resolve_constructor_options(node if node is not None else self.root)

    def resolve_asset(
        self,
        options: Mapping[str, Any],
        kind: AssetKind | str,
        name: Any,
        *,
        warn_missing: bool = False,
    ) -> Any:
        return resolve_asset(options, kind, name, warn_missing=warn_missing, diagnostics=self.diagnostics)

    def validate_name(self, name: str) -> list[str]:
        return validate_component_name(name, self.settings)

    # === Global surface ===

    def extend(self, definition: Definition | None = None) -> LineageNode:
        """Create a lineage node directly below the root."""
        return self.root.extend(definition)

    def mixin(self, definition: Definition) -> Composer:
        """Fold ``definition`` into the root options.

        Every existing lineage picks the change up on its next resolution.
        """
        self.root.mixin(definition)
        return self

    def use(self, plugin: Any, **options: Any) -> Composer:
        """Install ``plugin`` once; later calls with the same object are no-ops."""
        self.plugins.use(plugin, **options)
        return self

    def component(self, name: str, definition: Any = MISSING) -> Any:
        return self.root.component(name, definition)

    def directive(self, name: str, definition: Any = MISSING) -> Any:
        return self.root.directive(name, definition)

    def filter(self, name: str, definition: Any = MISSING) -> Any:
        return self.root.filter(name, definition)

    def instantiate(self, node: LineageNode | None = None, options: Definition | None = None) -> Instance:
        """Create an instance context from ``node`` plus per-instance options."""
        from optcompose.instance import Instance

        instance = Instance(self, node if node is not None else self.root, options)
        logger.debug("instance created", uid=instance.uid, node=repr(instance.node))
        return instance

    def __repr__(self) -> str:
        return f"Composer(debug={self.settings.debug}, plugins={len(self.plugins.installed)})"
