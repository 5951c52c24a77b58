# src/optcompose/options/normalize.py
"""Field normalization run on a child definition before merging.

Several fields accept more than one authored shape. Rewriting them into a
single canonical shape up front lets each merge strategy handle exactly one
shape:

    props:       ["my-prop"]            -> {"myProp": {"type": None}}
                 {"count": int}         -> {"count": {"type": int}}
    inject:      ["theme"]              -> {"theme": {"from": "theme"}}
                 {"t": "theme"}         -> {"t": {"from": "theme"}}
    directives:  {"focus": fn}          -> {"focus": {"bind": fn, "update": fn}}
    data/provide: fn | literal          -> Factory(fn) | Value(literal)

Normalization never mutates its input and is idempotent.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from optcompose.contracts.deferred import as_deferred
from optcompose.contracts.enums import DIRECTIVE_HOOKS, OptionField
from optcompose.contracts.sentinels import MISSING, is_absent
from optcompose.core.diagnostics import Diagnostics
from optcompose.core.naming import camelize
from optcompose.options.assets import AssetTable


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _type_name(value: Any) -> str:
    return type(value).__name__


def normalize_props(props: Any, diagnostics: Diagnostics) -> Any:
    """Rewrite props into ``{canonicalName: spec}``.

    Sequence entries must be strings; anything else is skipped. Any shape
    other than a sequence or mapping clears the field.
    """
    if is_absent(props):
        return props

    normalized: dict[str, Any] = {}
    if _is_sequence(props):
        for entry in props:
            if isinstance(entry, str):
                normalized[camelize(entry)] = {"type": None}
            elif diagnostics.enabled:
                diagnostics.warn("props must be strings when using sequence syntax.", entry=repr(entry))
    elif isinstance(props, Mapping):
        for key, spec in props.items():
            if isinstance(key, str):
                normalized[camelize(key)] = spec if isinstance(spec, Mapping) else {"type": spec}
            elif diagnostics.enabled:
                diagnostics.warn("props keys must be strings when using mapping syntax.", entry=repr(key))
    elif diagnostics.enabled:
        diagnostics.warn(
            f'Invalid value for option "props": expected a sequence or a mapping, but got {_type_name(props)}.',
            field=OptionField.PROPS.value,
        )
    return normalized


def normalize_inject(inject: Any, diagnostics: Diagnostics) -> Any:
    """Rewrite injections into ``{localKey: {"from": sourceKey, ...}}``."""
    if is_absent(inject):
        return inject

    normalized: dict[str, Any] = {}
    if _is_sequence(inject):
        for key in inject:
            if isinstance(key, str):
                normalized[key] = {"from": key}
            elif diagnostics.enabled:
                diagnostics.warn("inject keys must be strings when using sequence syntax.", entry=repr(key))
    elif isinstance(inject, Mapping):
        for key, spec in inject.items():
            normalized[key] = {"from": key, **spec} if isinstance(spec, Mapping) else {"from": spec}
    elif diagnostics.enabled:
        diagnostics.warn(
            f'Invalid value for option "inject": expected a sequence or a mapping, but got {_type_name(inject)}.',
            field=OptionField.INJECT.value,
        )
    return normalized


def normalize_directives(directives: Any) -> Any:
    """Expand function-shorthand directives into their hook-object form.

    Derived AssetTables are already the product of a merge and are returned
    untouched.
    """
    if is_absent(directives) or isinstance(directives, AssetTable) or not isinstance(directives, Mapping):
        return directives

    normalized: dict[str, Any] = {}
    for name, definition in directives.items():
        if callable(definition) and not isinstance(definition, Mapping):
            normalized[name] = dict.fromkeys(DIRECTIVE_HOOKS, definition)
        else:
            normalized[name] = definition
    return normalized


def normalize_definition(definition: Mapping[str, Any], diagnostics: Diagnostics) -> dict[str, Any]:
    """Return a shallow copy of ``definition`` with every multi-shape field canonicalized."""
    normalized = dict(definition)

    props = normalized.get(OptionField.PROPS, MISSING)
    if props is not MISSING:
        normalized[OptionField.PROPS.value] = normalize_props(props, diagnostics)

    inject = normalized.get(OptionField.INJECT, MISSING)
    if inject is not MISSING:
        normalized[OptionField.INJECT.value] = normalize_inject(inject, diagnostics)

    directives = normalized.get(OptionField.DIRECTIVES, MISSING)
    if directives is not MISSING:
        normalized[OptionField.DIRECTIVES.value] = normalize_directives(directives)

    for field in (OptionField.DATA, OptionField.PROVIDE):
        raw = normalized.get(field, MISSING)
        if not is_absent(raw):
            normalized[field.value] = as_deferred(raw)

    return normalized
