"""Option normalization, merge strategies, merging and asset lookup."""

from optcompose.options.assets import AssetTable, resolve_asset
from optcompose.options.merge import as_options, check_components, merge_options
from optcompose.options.normalize import (
    normalize_definition,
    normalize_directives,
    normalize_inject,
    normalize_props,
)
from optcompose.options.strategies import (
    TABLE_FIELDS,
    StrategyRegistry,
    dedupe_hooks,
    default_strategy,
    merge_data,
)

# Short aliases for the two core operations
merge = merge_options

__all__ = [
    "AssetTable",
    "StrategyRegistry",
    "TABLE_FIELDS",
    "as_options",
    "check_components",
    "dedupe_hooks",
    "default_strategy",
    "merge",
    "merge_data",
    "merge_options",
    "normalize_definition",
    "normalize_directives",
    "normalize_inject",
    "normalize_props",
    "resolve_asset",
]
