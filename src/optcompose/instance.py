# src/optcompose/instance.py
"""Instance context produced by Composer.instantiate()."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from optcompose.contracts.deferred import as_deferred
from optcompose.contracts.enums import AssetKind
from optcompose.contracts.types import Definition, ResolvedOptions

if TYPE_CHECKING:
    from optcompose.composer import Composer
    from optcompose.lineage.node import LineageNode


class Instance:
    """A single instantiation of a lineage node.

    Options are merged once, at construction, from the node's up-to-date
    resolved options and the per-instance ``options``. While that merge runs
    the instance is passed as the instance context, so instantiation-only
    fields are accepted silently and state factories are built per instance.
    """

    def __init__(self, composer: Composer, node: LineageNode, options: Definition | None = None) -> None:
        self._composer = composer
        self.uid = composer.next_uid()
        self.node = node
        self.options: ResolvedOptions = composer.merge(composer.resolve(node), options or {}, self)

    @property
    def composer(self) -> Composer:
        return self._composer

    def resolve_asset(self, kind: AssetKind | str, name: Any, *, warn_missing: bool = True) -> Any:
        """Look up an asset visible to this instance."""
        return self._composer.resolve_asset(self.options, kind, name, warn_missing=warn_missing)

    def state(self) -> Any:
        """Evaluate the merged state factory, or None if no state is declared."""
        return self._evaluate("data")

    def provided(self) -> Any:
        """Evaluate the merged provided values, or None if nothing is provided."""
        return self._evaluate("provide")

    def _evaluate(self, key: str) -> Any:
        deferred = self.options.get(key)
        if deferred is None:
            return None
        return as_deferred(deferred).evaluate()

    def __repr__(self) -> str:
        return f"Instance(uid={self.uid}, node={self.node!r})"
