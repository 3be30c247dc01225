"""Lazy unit converter built on the conversion graph.

The converter stores only the direct conversions it was given (plus their
inverses) and derives everything else on demand: a query for an unknown pair
runs the closure engine one step at a time until the pair appears or no
further derivation is possible.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable, Sequence

from unitgraph.core import closure
from unitgraph.core.config import MeasurementDefinition
from unitgraph.core.conversion import Conversion
from unitgraph.core.errors import DefinitionError, NoConversionPath
from unitgraph.core.registry import UnitRegistry
from unitgraph.core.store import ConversionStore

logger = logging.getLogger(__name__)


class UnitConverter:
    """Convert values between units connected by multiplicative conversions.

    Args:
        units: Unique unit names. Their order fixes the derivation order.
        conversions: Direct ``(source, target, multiplier)`` triples. A pair
            given twice (in either direction) keeps its first definition.

    Raises:
        DuplicateUnit: If a unit name is declared twice.
        InvalidUnitName: If no units are given or a name is not a non-empty string.
        DefinitionError: If a conversion is not a 3-item sequence.
        UnknownUnit: If a conversion references an undeclared unit.
        InvalidMultiplier: If a multiplier is not finite and > 0.
        SelfConversion: If a conversion maps a unit to itself.

    Usage::

        converter = UnitConverter(["m", "ft", "in"], [("m", "ft", 3.28084), ("ft", "in", 12)])
        converter.convert(2.0, "m", "in")   # 78.74016
        converter.get_conversion("in", "m").multiplier   # ≈ 0.0254

    Instances are safe to share between threads: every operation runs under a
    per-instance lock.
    """

    def __init__(
        self,
        units: Iterable[str],
        conversions: Iterable[Sequence[object]] = (),
    ):
        registry = UnitRegistry(units)
        store = ConversionStore(registry)
        for i, item in enumerate(conversions):
            if isinstance(item, (str, bytes)) or not isinstance(item, Sequence) or len(item) != 3:
                raise DefinitionError(
                    f"Conversion #{i} must be a (source, target, multiplier) triple, got {item!r}"
                )
            source, target, multiplier = item
            if not store.put(source, target, multiplier):
                logger.warning(
                    "Conversion %s → %s is defined more than once; keeping the first definition",
                    source,
                    target,
                )

        self._registry = registry
        self._store = store
        self._lock = threading.RLock()
        logger.debug("Created %r", self)

    @classmethod
    def from_definition(cls, definition: MeasurementDefinition) -> UnitConverter:
        """Build a converter from a measurement definition."""
        return cls(definition.unit_symbols(), definition.conversions)

    # --- Registry / store access ---

    @property
    def units(self) -> tuple[str, ...]:
        return self._registry.names

    @property
    def registry(self) -> UnitRegistry:
        return self._registry

    def conversions(self) -> list[Conversion]:
        """Snapshot of every cached conversion in insertion order."""
        with self._lock:
            return list(self._store)

    def is_cached(self, source: str, target: str) -> bool:
        """True if ``source→target`` is already in the store (never derives)."""
        with self._lock:
            return self._store.contains(self._registry.check(source), self._registry.check(target))

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    # --- Queries ---

    def get_conversion(self, source: str, target: str) -> Conversion:
        """Return the conversion from *source* to *target*, deriving it if needed.

        Intermediate conversions derived along the way stay cached, which
        speeds up later queries.

        Derivation always rescans from the first unit, so once a composed
        multiplier overflows or underflows, every later query that has to
        derive (even one between unrelated units) hits the same candidate
        first and raises the same :class:`InvalidMultiplier`. Queries for
        pairs that are already cached still succeed.

        Raises:
            UnknownUnit: If either unit is not registered.
            NoConversionPath: If the units are not connected.
            InvalidMultiplier: If a derived multiplier overflows or underflows.
        """
        self._registry.check(source)
        self._registry.check(target)

        if source == target:
            return Conversion(source, target, 1.0)

        with self._lock:
            conversion = self._store.get(source, target)
            if conversion is not None:
                return conversion

            logger.debug("Searching for a conversion from %s to %s", source, target)
            steps = 0
            while closure.derive_one(self._registry, self._store):
                steps += 1
                conversion = self._store.get(source, target)
                if conversion is not None:
                    logger.debug("Found %s after %d derivations", conversion, steps)
                    return conversion

        raise NoConversionPath(source, target)

    def convert(self, value: float, source: str, target: str) -> float:
        """Convert *value* from *source* units to *target* units."""
        return self.get_conversion(source, target).apply(value)

    # --- Closure / completeness ---

    def saturate(self) -> int:
        """Derive every reachable conversion.

        Returns:
            Number of derivation steps taken.
        """
        with self._lock:
            return closure.saturate(self._registry, self._store)

    def is_complete(self) -> bool:
        """True if every ordered pair of distinct units is cached.

        Self pairs are never cached and are not required. A converter whose
        graph is disconnected is never complete.
        """
        with self._lock:
            return all(
                self._store.contains(a, b)
                for a in self._registry
                for b in self._registry
                if a != b
            )

    def missing_pairs(self) -> list[tuple[str, str]]:
        """Ordered pairs of distinct units that are not cached yet."""
        with self._lock:
            return [
                (a, b)
                for a in self._registry
                for b in self._registry
                if a != b and not self._store.contains(a, b)
            ]

    def __repr__(self) -> str:
        return f"UnitConverter({len(self._registry)} units, {len(self._store)} conversions)"
