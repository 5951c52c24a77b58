"""
optcompose: deterministic composition of layered component configuration.

Folds a component's own definition together with inherited definitions,
``extends`` targets and mixins into one normalized set of resolved options,
and keeps those options cached along single-inheritance lineages.
"""

from optcompose.composer import Composer
from optcompose.contracts import MISSING, AssetKind, Factory, OptionField, Value
from optcompose.core.config import ComposeSettings, load_settings
from optcompose.instance import Instance
from optcompose.lineage import LineageNode, resolve_constructor_options
from optcompose.options import AssetTable, StrategyRegistry, merge_options, resolve_asset

__version__ = "0.1.0"

__all__ = [
    "MISSING",
    "AssetKind",
    "AssetTable",
    "ComposeSettings",
    "Composer",
    "Factory",
    "Instance",
    "LineageNode",
    "OptionField",
    "StrategyRegistry",
    "Value",
    "load_settings",
    "merge_options",
    "resolve_asset",
    "resolve_constructor_options",
]
