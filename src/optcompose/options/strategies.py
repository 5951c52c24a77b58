# src/optcompose/options/strategies.py
"""Per-field merge strategies.

A strategy decides how a parent (ancestor, ``extends`` target, or mixin)
value and a child value for the same field combine into the resolved value.
Every strategy has the signature::

    strategy(parent, child, instance, key) -> merged

``parent``/``child`` are MISSING when that side does not declare the field;
``instance`` is None while building a class-level definition and the
instance context while creating an instance.

Built-in strategies:
- restricted fields (``el``, ``props_data``): override, flagged when merged
  outside instantiation
- ``data``: deferred factory, deep-merged on first evaluation
- lifecycle hooks: parent-first concatenation, deduplicated by identity
- asset tables: new table delegating to the parent table
- ``watch``: per-key handler lists, parent-first
- ``props``/``methods``/``inject``/``computed``: shallow union, child wins
- ``provide``: same as ``data``
- anything else: child overrides parent when declared
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from optcompose.contracts.deferred import Deferred, Factory, as_deferred
from optcompose.contracts.enums import OBSERVER_KEY, AssetKind, OptionField
from optcompose.contracts.sentinels import MISSING, is_absent
from optcompose.contracts.types import MergeStrategy, ReactiveSetter
from optcompose.core.config import ComposeSettings
from optcompose.core.diagnostics import Diagnostics
from optcompose.options.assets import AssetTable

# Fields merged as a shallow union of keyed tables
TABLE_FIELDS: tuple[str, ...] = (
    OptionField.PROPS.value,
    OptionField.METHODS.value,
    OptionField.INJECT.value,
    OptionField.COMPUTED.value,
)


def default_strategy(parent: Any, child: Any, instance: Any = None, key: str | None = None) -> Any:
    """Child value if the child declares the field, else the parent value."""
    return parent if child is MISSING else child


def _assign(target: dict[str, Any], key: str, value: Any) -> None:
    target[key] = value


def merge_data(to: Any, source: Any, setter: ReactiveSetter = _assign) -> Any:
    """Fold ``source`` into ``to`` in place and return ``to``.

    Keys missing from ``to`` are added through ``setter`` so a reactive
    host can observe them. Keys present on both sides recurse when both
    values are dicts; otherwise ``to`` keeps its value. The observer
    bookkeeping key is never copied.
    """
    if not isinstance(to, dict) or not isinstance(source, Mapping) or not source:
        return to

    for key, source_value in source.items():
        if key == OBSERVER_KEY:
            continue
        if key not in to:
            setter(to, key, source_value)
            continue
        to_value = to[key]
        if to_value is not source_value and isinstance(to_value, dict) and isinstance(source_value, dict):
            merge_data(to_value, source_value, setter)
    return to


def _as_list(value: Any) -> list[Any]:
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return list(value)
    return [value]


def dedupe_hooks(hooks: list[Any]) -> list[Any]:
    """Drop repeated hooks (by identity), keeping the first occurrence."""
    seen: set[int] = set()
    unique: list[Any] = []
    for hook in hooks:
        if id(hook) not in seen:
            seen.add(id(hook))
            unique.append(hook)
    return unique


class StrategyRegistry:
    """Field name -> merge strategy table.

    Built-in strategies are registered at construction from the settings
    (lifecycle hook names and restricted fields are configurable). Custom
    strategies registered later replace the built-in for that field.

    Usage:
        registry = StrategyRegistry(settings)
        registry.register("tags", lambda parent, child, instance, key: ...)
        merged = registry.apply("tags", parent_value, child_value, None)
    """

    def __init__(
        self,
        settings: ComposeSettings | None = None,
        diagnostics: Diagnostics | None = None,
        *,
        reactive_setter: ReactiveSetter | None = None,
    ) -> None:
        self.settings = settings if settings is not None else ComposeSettings()
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics(self.settings)
        self._setter: ReactiveSetter = reactive_setter if reactive_setter is not None else _assign
        self._strategies: dict[str, MergeStrategy] = {}
        self._register_builtins()

    def _register_builtins(self) -> None:
        for field in self.settings.restricted_fields:
            self._strategies[field] = self.merge_restricted
        self._strategies[OptionField.DATA.value] = self.merge_state
        for hook in self.settings.lifecycle_hooks:
            self._strategies[hook] = self.merge_hooks
        for kind in AssetKind:
            self._strategies[kind.field] = self.merge_assets
        self._strategies[OptionField.WATCH.value] = self.merge_watch
        for field in TABLE_FIELDS:
            self._strategies[field] = self.merge_table
        self._strategies[OptionField.PROVIDE.value] = self.merge_provided

    # === Table access ===

    def register(self, key: str, strategy: MergeStrategy) -> None:
        """Register (or replace) the strategy for ``key``."""
        self._strategies[key] = strategy

    def get(self, key: str) -> MergeStrategy:
        """Strategy for ``key``; the default override strategy if unregistered."""
        return self._strategies.get(key, default_strategy)

    def apply(self, key: str, parent: Any, child: Any, instance: Any = None) -> Any:
        return self.get(key)(parent, child, instance, key)

    def __contains__(self, key: object) -> bool:
        return key in self._strategies

    def __iter__(self) -> Iterator[str]:
        return iter(self._strategies)

    # === Built-in strategies ===

    def merge_restricted(self, parent: Any, child: Any, instance: Any, key: str) -> Any:
        """Instantiation-only fields: flagged outside instantiation, never blocked."""
        if instance is None and self.diagnostics.enabled:
            self.diagnostics.warn(
                f'option "{key}" can only be used during instance creation.',
                field=key,
            )
        return default_strategy(parent, child)

    def merge_state(self, parent: Any, child: Any, instance: Any, key: str) -> Any:
        """Per-instance state: always ends up as a deferred factory."""
        if instance is None and not is_absent(child) and not isinstance(as_deferred(child), Factory):
            if self.diagnostics.enabled:
                self.diagnostics.warn(
                    f'The "{key}" option should be a factory that returns a per-instance value '
                    "in component definitions.",
                    field=key,
                )
        return self._merge_deferred(parent, child, instance)

    def merge_provided(self, parent: Any, child: Any, instance: Any, key: str) -> Any:
        """Provided values are computed lazily per instance, like state."""
        return self._merge_deferred(parent, child, instance)

    def _merge_deferred(self, parent: Any, child: Any, instance: Any) -> Any:
        parent_value: Deferred | None = None if is_absent(parent) else as_deferred(parent)
        child_value: Deferred | None = None if is_absent(child) else as_deferred(child)
        setter = self._setter

        if instance is None:
            if child_value is None:
                return parent_value if parent_value is not None else parent
            if parent_value is None:
                return child_value

            def merged_state() -> Any:
                own = child_value.evaluate()
                inherited = parent_value.evaluate()
                if own is None:
                    return inherited
                return merge_data(own, inherited, setter)

            return Factory(merged_state)

        def merged_instance_state() -> Any:
            own = child_value.evaluate() if child_value is not None else None
            inherited = parent_value.evaluate() if parent_value is not None else None
            if own is not None:
                return merge_data(own, inherited, setter)
            return inherited

        return Factory(merged_instance_state)

    def merge_hooks(self, parent: Any, child: Any, instance: Any, key: str) -> Any:
        """Parent hooks run before child hooks; each hook appears once."""
        if is_absent(child):
            hooks = parent
        elif is_absent(parent):
            hooks = _as_list(child)
        else:
            hooks = _as_list(parent) + _as_list(child)
        if is_absent(hooks):
            return hooks
        return dedupe_hooks(_as_list(hooks))

    def merge_assets(self, parent: Any, child: Any, instance: Any, key: str) -> AssetTable:
        """Derive a table delegating to the parent table, with child entries local."""
        if isinstance(parent, AssetTable):
            table = AssetTable(parent=parent)
        elif isinstance(parent, Mapping):
            table = AssetTable(parent=AssetTable(parent))
        else:
            table = AssetTable()

        if is_absent(child):
            return table
        if not isinstance(child, Mapping):
            self._assert_mapping(key, child)
            return table

        # A child table contributes inherited names too; nearest registration wins
        for name, implementation in child.items():
            table[name] = implementation
        return table

    def merge_watch(self, parent: Any, child: Any, instance: Any, key: str) -> dict[str, list[Any]]:
        """Watchers never overwrite each other: handlers accumulate per key."""
        merged: dict[str, list[Any]] = {}
        if isinstance(parent, Mapping):
            merged = {watched: _as_list(handlers) for watched, handlers in parent.items()}

        if is_absent(child):
            return merged
        if not isinstance(child, Mapping):
            self._assert_mapping(key, child)
            return merged

        for watched, handlers in child.items():
            merged[watched] = [*merged.get(watched, []), *_as_list(handlers)]
        return merged

    def merge_table(self, parent: Any, child: Any, instance: Any, key: str) -> Any:
        """Shallow union of keyed tables; child entries win."""
        if not is_absent(child) and not isinstance(child, Mapping):
            self._assert_mapping(key, child)
            child = MISSING
        if not isinstance(parent, Mapping):
            return child
        merged = dict(parent)
        if not is_absent(child):
            merged.update(child)
        return merged

    def _assert_mapping(self, key: str, value: Any) -> None:
        if self.diagnostics.enabled:
            self.diagnostics.warn(
                f'Invalid value for option "{key}": expected a mapping, but got {type(value).__name__}.',
                field=key,
            )
