"""Reference multipliers from pint.

The conversion graph derives multipliers by composing hand-entered factors.
These helpers ask pint for the same factors so a catalogue (or a user
definition) can be checked against an independent source.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Mapping

import pint

from unitgraph.core.errors import NoConversionPath

if TYPE_CHECKING:
    from unitgraph.core.converter import UnitConverter

# Module-level unit registry (singleton)
_ureg = pint.UnitRegistry()


def get_unit_registry() -> pint.UnitRegistry:
    """Return the shared pint UnitRegistry instance."""
    return _ureg


Q_ = _ureg.Quantity


@lru_cache(maxsize=256)
def reference_multiplier(from_unit: str, to_unit: str) -> float:
    """Multiplier from *from_unit* to *to_unit* according to pint.

    Args:
        from_unit: pint unit expression (e.g. "foot", "meter**2").
        to_unit: pint unit expression.

    Returns:
        Value of one *from_unit* expressed in *to_unit*.

    Raises:
        pint.errors.UndefinedUnitError: If either expression is unknown to pint.
        pint.errors.DimensionalityError: If the units are incompatible.
    """
    return float(Q_(1.0, from_unit).to(to_unit).magnitude)


@dataclass
class ReferenceDeviation:
    """A derived multiplier that disagrees with pint."""

    source: str
    target: str
    derived: float
    reference: float

    @property
    def relative_error(self) -> float:
        return abs(self.derived - self.reference) / abs(self.reference)


def compare_with_reference(
    converter: UnitConverter,
    pint_names: Mapping[str, str],
    rel_tol: float = 1e-9,
) -> list[ReferenceDeviation]:
    """Compare converter multipliers against pint.

    Every ordered pair of distinct units that both have a pint expression is
    resolved through :meth:`UnitConverter.get_conversion` (deriving it if
    needed) and compared with :func:`reference_multiplier`. Pairs in
    different components of the graph have nothing to compare and are
    skipped; :meth:`UnitConverter.missing_pairs` reports them.

    Returns:
        Pairs whose relative error exceeds *rel_tol*.

    Raises:
        pint.errors.PintError: If a pint expression is unknown or two
            expressions are dimensionally incompatible.
    """
    deviations: list[ReferenceDeviation] = []
    units = [u for u in converter.units if pint_names.get(u)]
    for source in units:
        for target in units:
            if source == target:
                continue
            try:
                derived = converter.get_conversion(source, target).multiplier
            except NoConversionPath:
                continue
            reference = reference_multiplier(pint_names[source], pint_names[target])
            if not math.isclose(derived, reference, rel_tol=rel_tol):
                deviations.append(ReferenceDeviation(source, target, derived, reference))
    return deviations
