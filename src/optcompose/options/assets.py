# src/optcompose/options/assets.py
"""Delegating asset tables and named asset resolution.

Named sub-extensions (nested components, behavior directives, value
filters) live in an AssetTable per kind. A table derived during a merge does
not copy its parent: it keeps an explicit link to the parent table and only
stores the child's registrations locally. Registrations added to the
parent later remain visible to every derived table that did not shadow the
same name.

Lookup order for resolve_asset():
1. local layer, exact name
2. local layer, camelCase name
3. local layer, capitalized camelCase name
4. full delegation chain, all three variants in the same order
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any

from optcompose.contracts.enums import AssetKind
from optcompose.contracts.sentinels import MISSING
from optcompose.core.diagnostics import Diagnostics
from optcompose.core.naming import camelize, capitalize


class AssetTable(MutableMapping[str, Any]):
    """Name -> implementation table with a fallback link to a parent table.

    Reads consult the local layer and then the parent chain. Writes and
    deletes only ever touch the local layer.

    Tables compare by identity: two tables holding the same names are still
    distinct lookup scopes.
    """

    __slots__ = ("_local", "_parent")

    def __init__(
        self,
        entries: Mapping[str, Any] | None = None,
        *,
        parent: AssetTable | None = None,
    ) -> None:
        self._local: dict[str, Any] = dict(entries) if entries else {}
        self._parent = parent

    @property
    def parent(self) -> AssetTable | None:
        """Table consulted for names not registered locally."""
        return self._parent

    def has_own(self, name: str) -> bool:
        """Whether ``name`` is registered on the local layer."""
        return name in self._local

    def own_items(self) -> list[tuple[str, Any]]:
        """Local registrations only, in registration order."""
        return list(self._local.items())

    def chain(self) -> Iterator[AssetTable]:
        """Yield this table followed by every ancestor table."""
        table: AssetTable | None = self
        while table is not None:
            yield table
            table = table._parent

    def __getitem__(self, name: str) -> Any:
        for table in self.chain():
            if name in table._local:
                return table._local[name]
        raise KeyError(name)

    def __setitem__(self, name: str, value: Any) -> None:
        self._local[name] = value

    def __delitem__(self, name: str) -> None:
        del self._local[name]

    def __contains__(self, name: object) -> bool:
        return any(name in table._local for table in self.chain())

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        for table in self.chain():
            for name in table._local:
                if name not in seen:
                    seen.add(name)
                    yield name

    def __len__(self) -> int:
        return sum(1 for _ in self)

    __eq__ = object.__eq__
    __hash__ = object.__hash__

    def __repr__(self) -> str:
        depth = sum(1 for _ in self.chain()) - 1
        return f"AssetTable(own={sorted(self._local)!r}, depth={depth})"


def _name_variants(name: str) -> tuple[str, str, str]:
    camelized = camelize(name)
    return name, camelized, capitalize(camelized)


def resolve_asset(
    options: Mapping[str, Any],
    kind: AssetKind | str,
    name: Any,
    *,
    warn_missing: bool = False,
    diagnostics: Diagnostics | None = None,
) -> Any:
    """Look up a named asset of ``kind`` in resolved options.

    Args:
        options: Resolved options holding one table per asset kind.
        kind: Asset kind (``AssetKind.COMPONENT`` or ``"component"``) or the
            raw field name (``"components"``).
        name: Requested name; non-string names are never found.
        warn_missing: Emit a diagnostic when nothing matches.
        diagnostics: Channel for the missing-asset diagnostic.

    Returns:
        The implementation, or MISSING if no variant of the name resolves.
    """
    if not isinstance(name, str):
        return MISSING

    if not isinstance(kind, AssetKind) and kind in AssetKind:
        kind = AssetKind(kind)
    if isinstance(kind, AssetKind):
        field, label = kind.field, kind.value
    else:
        field, label = kind, kind.removesuffix("s")

    assets = options.get(field)
    if not isinstance(assets, Mapping):
        assets = {}

    variants = _name_variants(name)

    # Local registrations take priority over anything inherited
    if isinstance(assets, AssetTable):
        for variant in variants:
            if assets.has_own(variant):
                return assets[variant]
    else:
        for variant in variants:
            if variant in assets:
                return assets[variant]

    for variant in variants:
        found = assets.get(variant, MISSING)
        if found is not MISSING:
            return found

    if warn_missing and diagnostics is not None:
        diagnostics.warn(f"Failed to resolve {label}: {name}", kind=label, name=name)
    return MISSING
