"""Single-inheritance lineages and cached constructor options resolution."""

from optcompose.lineage.node import LineageNode
from optcompose.lineage.resolver import resolve, resolve_constructor_options, resolve_modified_options

__all__ = [
    "LineageNode",
    "resolve",
    "resolve_constructor_options",
    "resolve_modified_options",
]
