"""Fixed, ordered set of unit names known to a converter."""

from __future__ import annotations

from typing import Iterable, Iterator

from unitgraph.core.errors import DuplicateUnit, InvalidUnitName, UnknownUnit


class UnitRegistry:
    """Immutable registry of unit names in declaration order.

    Declaration order drives the closure engine's scan order, so two
    registries with the same names in a different order may derive
    different (equally valid) multipliers.

    Args:
        units: Unique, non-empty unit names.

    Raises:
        InvalidUnitName: If *units* is empty or contains a non-string or
            empty name.
        DuplicateUnit: If a name occurs more than once.
    """

    def __init__(self, units: Iterable[str]):
        names: list[str] = []
        index: dict[str, int] = {}
        for unit in units:
            if not isinstance(unit, str) or not unit:
                raise InvalidUnitName(f"Unit names must be non-empty strings, got {unit!r}")
            if unit in index:
                raise DuplicateUnit(unit)
            index[unit] = len(names)
            names.append(unit)
        if not names:
            raise InvalidUnitName("At least one unit must be declared")
        self._names: tuple[str, ...] = tuple(names)
        self._index = index

    @property
    def names(self) -> tuple[str, ...]:
        return self._names

    def check(self, unit: str) -> str:
        """Return *unit* unchanged if registered.

        Raises:
            UnknownUnit: If *unit* is not in the registry.
        """
        if not isinstance(unit, str) or unit not in self._index:
            raise UnknownUnit(unit)
        return unit

    def index(self, unit: str) -> int:
        """Declaration position of *unit*."""
        return self._index[self.check(unit)]

    def __contains__(self, unit: object) -> bool:
        return isinstance(unit, str) and unit in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"UnitRegistry({list(self._names)!r})"
