"""Multiplicative conversion between two units.

A conversion maps a value in its source unit to its target unit by a single
scale factor: ``value_in_target = value_in_source * multiplier``.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass

from unitgraph.core.errors import InvalidMultiplier


def check_multiplier(multiplier: object) -> float:
    """Return *multiplier* as a float, or raise if it cannot scale a value.

    Raises:
        InvalidMultiplier: If the multiplier is not a real number, is not
            finite, or is not strictly positive.
    """
    if isinstance(multiplier, bool) or not isinstance(multiplier, numbers.Real):
        raise InvalidMultiplier(multiplier, "not a real number")
    try:
        value = float(multiplier)
    except OverflowError:
        raise InvalidMultiplier(multiplier, "too large for a float") from None
    if not math.isfinite(value):
        raise InvalidMultiplier(multiplier, "not finite")
    if value <= 0.0:
        raise InvalidMultiplier(multiplier, "not positive")
    return value


@dataclass(frozen=True)
class Conversion:
    """A directed (source, target) pair with a positive finite multiplier."""

    source: str
    target: str
    multiplier: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "multiplier", check_multiplier(self.multiplier))

    @property
    def is_identity(self) -> bool:
        return self.source == self.target and self.multiplier == 1.0

    def apply(self, value: float) -> float:
        """Convert *value* from the source unit to the target unit."""
        return value * self.multiplier

    def invert(self) -> Conversion:
        """Return the conversion from target back to source.

        Raises:
            InvalidMultiplier: If ``1 / multiplier`` overflows.
        """
        return Conversion(self.target, self.source, 1.0 / self.multiplier)

    def combine(self, other: Conversion) -> Conversion:
        """Compose ``self`` (A→B) with *other* (B→C) into A→C.

        Raises:
            ValueError: If the conversions do not share the middle unit.
            InvalidMultiplier: If the product overflows or underflows.
        """
        if self.target != other.source:
            raise ValueError(
                f"Cannot combine {self.source}→{self.target} with "
                f"{other.source}→{other.target}: units do not chain"
            )
        return Conversion(self.source, other.target, self.multiplier * other.multiplier)

    def __str__(self) -> str:
        return f"{self.source} → {self.target}: × {self.multiplier:.10g}"
