# src/optcompose/contracts/deferred.py
"""Tagged variants for fields whose value is computed per instance.

The state field (``data``) and the value-provision field (``provide``) may be
authored either as a callable or as a plain value. The normalizer resolves
that ambiguity once, wrapping the raw value in one of:

- Factory: a zero-argument callable producing a fresh value on each call
- Value: a literal; evaluating it yields a deep copy

Strategies then only deal with ``Deferred`` and never re-inspect the raw
authored shape.
"""

from __future__ import annotations

import copy
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Factory:
    """Deferred value produced by calling ``fn`` with no arguments."""

    fn: Callable[[], Any]

    def evaluate(self) -> Any:
        return self.fn()

    def __call__(self) -> Any:
        return self.fn()


@dataclass(frozen=True)
class Value:
    """Deferred literal.

    Each evaluation returns an independent deep copy so two instances built
    from the same definition never share nested mutable structure.
    """

    value: Any

    def evaluate(self) -> Any:
        return copy.deepcopy(self.value)


Deferred = Factory | Value


def as_deferred(raw: Any) -> Deferred:
    """Wrap a raw authored value in its tagged variant (idempotent)."""
    if isinstance(raw, (Factory, Value)):
        return raw
    if callable(raw):
        return Factory(raw)
    return Value(raw)
