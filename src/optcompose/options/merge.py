# src/optcompose/options/merge.py
"""Options merge engine.

merge_options() folds a child definition into parent options:

1. (debug) validate nested component names
2. normalize multi-shape child fields
3. unless the child is already merged output, fold ``extends`` and then each
   ``mixins`` entry into the parent first
4. apply each field's strategy over the union of parent and child fields

Precedence for a default-strategy field, lowest to highest:
ancestor -> extends target -> mixins in order -> the child itself.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from optcompose.contracts.enums import BASE_KEY, OptionField
from optcompose.contracts.sentinels import MISSING, is_absent
from optcompose.contracts.types import ResolvedOptions
from optcompose.core.diagnostics import Diagnostics
from optcompose.core.naming import validate_component_name
from optcompose.options.assets import AssetTable
from optcompose.options.normalize import normalize_definition
from optcompose.options.strategies import StrategyRegistry

if TYPE_CHECKING:
    from optcompose.core.config import ComposeSettings


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def as_options(source: Any) -> Mapping[str, Any]:
    """Accept a definition mapping or anything exposing resolved ``options``."""
    if isinstance(source, Mapping):
        return source
    options = getattr(source, "options", MISSING)
    if isinstance(options, Mapping):
        return options
    return {}


def check_components(definition: Mapping[str, Any], settings: "ComposeSettings", diagnostics: Diagnostics) -> None:
    """Report invalid names in a definition's nested component table."""
    components = definition.get(OptionField.COMPONENTS)
    if not isinstance(components, Mapping):
        return
    # Inherited entries were checked when they were registered
    names = [name for name, _ in components.own_items()] if isinstance(components, AssetTable) else list(components)
    for name in names:
        if not isinstance(name, str):
            diagnostics.warn(f"Invalid component name: {name!r}", name=repr(name))
            continue
        for problem in validate_component_name(name, settings):
            diagnostics.warn(problem, name=name)


def merge_options(
    parent: Mapping[str, Any],
    child: Any,
    instance: Any = None,
    *,
    registry: StrategyRegistry | None = None,
) -> ResolvedOptions:
    """Merge two option mappings into a new resolved mapping.

    Args:
        parent: Options inherited from the ancestor (usually resolved).
        child: Definition to fold in; a lineage node contributes its options.
        instance: Instance context while creating an instance, else None.
        registry: Strategy table; a default registry is built if omitted.

    Returns:
        A new mapping whose keys are the union of both sides' keys after
        extends/mixins folding. Neither input is mutated.
    """
    if registry is None:
        registry = StrategyRegistry()
    diagnostics = registry.diagnostics
    parent = as_options(parent)

    raw_child = as_options(child)
    if diagnostics.enabled:
        check_components(raw_child, registry.settings, diagnostics)

    normalized = normalize_definition(raw_child, diagnostics)

    # Merged output carries BASE_KEY; its extends/mixins were folded already
    if BASE_KEY not in normalized:
        extends = normalized.get(OptionField.EXTENDS, MISSING)
        if not is_absent(extends):
            parent = merge_options(parent, extends, instance, registry=registry)
        mixins = normalized.get(OptionField.MIXINS, MISSING)
        if _is_sequence(mixins):
            for mixin in mixins:
                parent = merge_options(parent, mixin, instance, registry=registry)
        elif not is_absent(mixins):
            diagnostics.warn(
                f'Invalid value for option "mixins": expected a sequence, but got {type(mixins).__name__}.',
                field=OptionField.MIXINS.value,
            )

    options: ResolvedOptions = {}
    for key in parent:
        options[key] = _merge_field(registry, key, parent, normalized, instance)
    for key in normalized:
        if key not in parent:
            options[key] = _merge_field(registry, key, parent, normalized, instance)
    return options


def _merge_field(
    registry: StrategyRegistry,
    key: str,
    parent: Mapping[str, Any],
    child: Mapping[str, Any],
    instance: Any,
) -> Any:
    merged = registry.apply(key, parent.get(key, MISSING), child.get(key, MISSING), instance)
    return None if merged is MISSING else merged
