"""Inverse-consistent cache of known conversions.

The store maps ``(source, target)`` to a :class:`Conversion`. Every insertion
adds the conversion *and* its inverse, so whenever ``A→B`` is cached ``B→A``
is cached too. Entries are never removed or overwritten; self pairs are never
stored.
"""

from __future__ import annotations

from typing import Iterator

from unitgraph.core.conversion import Conversion, check_multiplier
from unitgraph.core.errors import SelfConversion
from unitgraph.core.registry import UnitRegistry


class ConversionStore:
    """Sparse adjacency map of cached conversions.

    Args:
        registry: Registry every stored unit must belong to.
    """

    def __init__(self, registry: UnitRegistry):
        self.registry = registry
        self._edges: dict[tuple[str, str], Conversion] = {}
        # Outgoing edges per unit, in insertion order
        self._adjacency: dict[str, dict[str, Conversion]] = {unit: {} for unit in registry}

    def put(self, source: str, target: str, multiplier: float) -> bool:
        """Insert ``source→target`` with *multiplier* and its inverse.

        Returns:
            True if the pair was inserted, False if it was already cached
            (the existing edge is kept).

        Raises:
            InvalidMultiplier: If the multiplier is not finite and > 0.
            UnknownUnit: If either unit is not registered.
            SelfConversion: If source and target are the same unit.
        """
        check_multiplier(multiplier)
        return self.add(Conversion(source, target, multiplier))

    def add(self, conversion: Conversion) -> bool:
        """Insert an already-built conversion and its inverse atomically."""
        source = self.registry.check(conversion.source)
        target = self.registry.check(conversion.target)
        if source == target:
            raise SelfConversion(source)
        if (source, target) in self._edges:
            return False

        # Build the inverse before touching the map so a failure leaves no half-edge
        inverse = conversion.invert()
        self._edges[(source, target)] = conversion
        self._edges[(target, source)] = inverse
        self._adjacency[source][target] = conversion
        self._adjacency[target][source] = inverse
        return True

    def get(self, source: str, target: str) -> Conversion | None:
        return self._edges.get((source, target))

    def contains(self, source: str, target: str) -> bool:
        return (source, target) in self._edges

    def neighbors(self, unit: str) -> list[tuple[str, Conversion]]:
        """Outgoing ``(target, conversion)`` pairs of *unit* in insertion order."""
        return list(self._adjacency[self.registry.check(unit)].items())

    def __contains__(self, pair: object) -> bool:
        return pair in self._edges

    def __iter__(self) -> Iterator[Conversion]:
        return iter(list(self._edges.values()))

    def __len__(self) -> int:
        return len(self._edges)

    def __repr__(self) -> str:
        return f"ConversionStore({len(self.registry)} units, {len(self._edges)} conversions)"
