# src/optcompose/lineage/resolver.py
"""Constructor options resolution with identity-keyed caching.

Resolution runs on every instantiation, along a chain that may be many
levels deep. Each node caches the super options it was last resolved
against; while every ancestor still returns the same options object, a
node's options are returned unchanged.

When an ancestor's options were replaced (a global mixin, for example),
the node is recomputed from its own extend diff. Fields edited directly on
the node's resolved options after its last resolution are detected by
reference against the sealed snapshot and folded into the extend diff first,
so the edits survive recomputation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from optcompose.contracts.sentinels import MISSING
from optcompose.contracts.types import ResolvedOptions

if TYPE_CHECKING:
    from optcompose.lineage.node import LineageNode


def resolve_modified_options(node: LineageNode) -> dict[str, Any] | None:
    """Fields of ``node.options`` whose value is no longer the sealed one.

    Comparison is by identity: a structurally equal replacement still counts
    as an edit.
    """
    modified: dict[str, Any] | None = None
    latest = node.options
    sealed = node.sealed_options
    for key, value in latest.items():
        if value is not sealed.get(key, MISSING):
            if modified is None:
                modified = {}
            modified[key] = value
    return modified


def resolve_constructor_options(node: LineageNode) -> ResolvedOptions:
    """Return ``node``'s options, recomputing them if an ancestor changed."""
    options = node.options
    if node.super_node is None:
        return options

    super_options = resolve_constructor_options(node.super_node)
    if super_options is node.super_options:
        return options

    node.super_options = super_options
    late_edits = resolve_modified_options(node)
    if late_edits:
        node.extend_options.update(late_edits)

    options = node.options = node.composer.merge(super_options, node.extend_options)
    node.seal()
    if node.name is not None:
        node.register_self(node.name)
    return options


# Short alias for the resolution operation
resolve = resolve_constructor_options
