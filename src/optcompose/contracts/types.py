"""Type contracts for definitions, resolved options and merge strategies."""

from collections.abc import Mapping
from typing import Any, Protocol, TypeAlias

# Author-supplied configuration before merge.
Definition: TypeAlias = Mapping[str, Any]

# Output of a merge. Conventionally immutable once returned by the engine.
ResolvedOptions: TypeAlias = dict[str, Any]


class MergeStrategy(Protocol):
    """Combines a parent and child value for one option field.

    ``parent`` or ``child`` is ``MISSING`` when the corresponding side does
    not declare the field. ``instance`` is None during ancestor/mixin merges
    and the instance context during instantiation.
    """

    def __call__(self, parent: Any, child: Any, instance: Any, key: str) -> Any: ...


class ReactiveSetter(Protocol):
    """Registers a new key on a state mapping so it becomes observable."""

    def __call__(self, target: dict[str, Any], key: str, value: Any) -> None: ...
