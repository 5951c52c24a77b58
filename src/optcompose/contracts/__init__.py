"""Shared contracts: field names, sentinels, deferred values and protocols."""

from optcompose.contracts.deferred import Deferred, Factory, Value, as_deferred
from optcompose.contracts.enums import (
    BASE_KEY,
    DIRECTIVE_HOOKS,
    LIFECYCLE_HOOKS,
    OBSERVER_KEY,
    RESTRICTED_FIELDS,
    AssetKind,
    OptionField,
)
from optcompose.contracts.sentinels import MISSING, MissingSentinel, is_absent
from optcompose.contracts.types import Definition, MergeStrategy, ReactiveSetter, ResolvedOptions

__all__ = [
    # Enums and constants
    "AssetKind",
    "OptionField",
    "BASE_KEY",
    "DIRECTIVE_HOOKS",
    "LIFECYCLE_HOOKS",
    "OBSERVER_KEY",
    "RESTRICTED_FIELDS",
    # Sentinels
    "MISSING",
    "MissingSentinel",
    "is_absent",
    # Deferred values
    "Deferred",
    "Factory",
    "Value",
    "as_deferred",
    # Protocols
    "Definition",
    "MergeStrategy",
    "ReactiveSetter",
    "ResolvedOptions",
]
