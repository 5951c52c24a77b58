"""Absence marker for option fields.

A child definition that does not mention a field and one that sets it to
None are different inputs: the default strategy keeps the parent value for
the first and overrides with None for the second. Strategies receive
``MISSING`` for an undeclared side.

    child_value = child.get(key, MISSING)
    if child_value is MISSING:
        merged = parent_value
"""

from typing import Final


class MissingSentinel:
    """Type of the ``MISSING`` singleton. Falsy; compare with ``is``."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<MISSING>"

    def __bool__(self) -> bool:
        return False


MISSING: Final[MissingSentinel] = MissingSentinel()


def is_absent(value: object) -> bool:
    """True for values the structured strategies treat as "not supplied"."""
    return value is MISSING or value is None
