# src/optcompose/lineage/node.py
"""Lineage nodes: definitions with identity in a single-inheritance chain.

A node is what subclassing produces. It remembers:

- options:        its current resolved options
- extend_options: its own diff relative to its super (a node-owned copy)
- super_options:  the super's resolved options as last observed
- sealed_options: shallow snapshot of options taken right after resolution

Only the resolver (and the node's own mixin/asset registration surface)
updates these in place.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import TYPE_CHECKING, Any

from optcompose.contracts.enums import DIRECTIVE_HOOKS, AssetKind, OptionField
from optcompose.contracts.sentinels import MISSING
from optcompose.contracts.types import Definition, ResolvedOptions

if TYPE_CHECKING:
    from optcompose.composer import Composer


class LineageNode:
    """One link in a lineage. Compares and hashes by identity."""

    def __init__(
        self,
        composer: Composer,
        options: ResolvedOptions,
        *,
        super_node: LineageNode | None = None,
        extend_options: Definition | None = None,
        super_options: ResolvedOptions | None = None,
    ) -> None:
        self.cid = composer.next_cid()
        self.composer = composer
        self.options = options
        self.super_node = super_node
        self.extend_options: dict[str, Any] = dict(extend_options) if extend_options else {}
        self.super_options = super_options
        self.sealed_options: dict[str, Any] = dict(options)

    @property
    def name(self) -> str | None:
        name = self.options.get(OptionField.NAME)
        return name if isinstance(name, str) else None

    def extend(self, definition: Definition | None = None) -> LineageNode:
        """Create a child node whose options fold ``definition`` into ours."""
        definition = definition or {}
        composer = self.composer
        name = definition.get(OptionField.NAME) or self.options.get(OptionField.NAME)
        if isinstance(name, str) and composer.diagnostics.enabled:
            for problem in composer.validate_name(name):
                composer.diagnostics.warn(problem, name=name)

        sub = LineageNode(
            composer,
            composer.merge(self.options, definition),
            super_node=self,
            extend_options=definition,
            super_options=self.options,
        )
        # Enables recursive self-composition by name
        if isinstance(name, str):
            sub.register_self(name)
        sub.seal()
        return sub

    def register_self(self, name: str) -> None:
        table = self.options.get(OptionField.COMPONENTS)
        if isinstance(table, MutableMapping):
            table[name] = self

    def seal(self) -> None:
        """Snapshot the current options for later late-edit detection."""
        self.sealed_options = dict(self.options)

    def mixin(self, definition: Definition) -> LineageNode:
        """Fold ``definition`` into this node's options.

        Produces a new options mapping, so every descendant sees its cached
        super options as stale on the next resolution.
        """
        self.options = self.composer.merge(self.options, definition)
        return self

    def register_asset(self, kind: AssetKind, name: str, definition: Any = MISSING) -> Any:
        """Register ``definition`` under ``name``, or look it up when omitted."""
        table = self.options.get(kind.field)
        if definition is MISSING:
            return table.get(name) if isinstance(table, Mapping) else None

        composer = self.composer
        if kind is AssetKind.COMPONENT:
            if composer.diagnostics.enabled:
                for problem in composer.validate_name(name):
                    composer.diagnostics.warn(problem, name=name)
            if isinstance(definition, Mapping):
                definition = {**definition, OptionField.NAME.value: definition.get(OptionField.NAME) or name}
                definition = composer.extend(definition)
        elif kind is AssetKind.DIRECTIVE and callable(definition):
            definition = dict.fromkeys(DIRECTIVE_HOOKS, definition)

        if not isinstance(table, MutableMapping):
            composer.diagnostics.warn(f"No {kind.value} table to register into", kind=kind.value, name=name)
            return definition
        table[name] = definition
        return definition

    def component(self, name: str, definition: Any = MISSING) -> Any:
        return self.register_asset(AssetKind.COMPONENT, name, definition)

    def directive(self, name: str, definition: Any = MISSING) -> Any:
        return self.register_asset(AssetKind.DIRECTIVE, name, definition)

    def filter(self, name: str, definition: Any = MISSING) -> Any:
        return self.register_asset(AssetKind.FILTER, name, definition)

    def __repr__(self) -> str:
        return f"LineageNode(cid={self.cid}, name={self.name!r})"
