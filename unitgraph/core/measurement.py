"""Measurements: a value paired with a unit of one converter.

A :class:`Measurement` is bound to the :class:`UnitConverter` that knows its
unit. Conversions, comparisons and arithmetic between two measurements go
through that converter, so both operands must share it.

Usage::

    length = build_converter("length")
    a = Measurement(100, "m", length)
    b = Measurement.parse("3 ft", length)
    (a + b).format("f", 2)      # "100.91 m"
    a.to("yd")                   # Measurement(value=109.36..., unit='yd')
"""

from __future__ import annotations

import math
import numbers
import re
from dataclasses import dataclass, field
from functools import total_ordering
from typing import TYPE_CHECKING

from unitgraph.core.errors import InvalidMeasurement

if TYPE_CHECKING:
    from unitgraph.core.converter import UnitConverter

_NUMBER = r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?"
_MEASUREMENT_RE = re.compile(rf"(?P<value>{_NUMBER})\s*(?P<unit>.+)")

_SPECIFIERS = ("e", "E", "f", "F", "g", "G")
_MAX_PRECISION = 17


def _check_real(value: object, what: str) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidMeasurement(f"{what} must be a real number, got {value!r}")
    try:
        value = float(value)
    except OverflowError:
        raise InvalidMeasurement(f"{what} is too large for a float") from None
    if not math.isfinite(value):
        raise InvalidMeasurement(f"{what} cannot be ±inf or NaN, got {value!r}")
    return value


def _normalize_zero(value: float) -> float:
    # -0.0 + 0.0 is +0.0
    return value + 0.0


def format_value(
    value: float,
    specifier: str = "f",
    precision: int | None = None,
    trim_zeros: bool = True,
) -> str:
    """Format a number with a printf-style specifier.

    Args:
        value: Finite number; -0.0 is written as 0.
        specifier: One of ``e E f F g G``.
        precision: Digits after the point (significant digits for ``g``);
            None uses the printf default of 6.
        trim_zeros: Strip trailing zeros and a trailing decimal point from
            the mantissa.

    Raises:
        ValueError: If the specifier or precision is invalid.
    """
    if specifier not in _SPECIFIERS:
        raise ValueError(f"Specifier must be one of {', '.join(_SPECIFIERS)}, got {specifier!r}")
    if precision is None:
        precision = 6
    if isinstance(precision, bool) or not isinstance(precision, int):
        raise ValueError(f"Precision must be None or an integer, got {precision!r}")
    if not 0 <= precision <= _MAX_PRECISION:
        raise ValueError(f"Precision must be between 0 and {_MAX_PRECISION}, got {precision}")

    text = f"{_normalize_zero(value):.{precision}{specifier}}"
    if trim_zeros:
        mantissa, sep, exponent = text.partition("e" if "e" in text else "E")
        if "." in mantissa:
            mantissa = mantissa.rstrip("0").rstrip(".")
        text = mantissa + sep + exponent
    return text


@total_ordering
@dataclass(frozen=True, eq=False)
class Measurement:
    """A finite value in one of a converter's units.

    Args:
        value: Finite real number.
        unit: A unit registered with *converter*.
        converter: Converter used for every unit change.

    Raises:
        InvalidMeasurement: If the value is not a finite real number.
        UnknownUnit: If the unit is not registered with the converter.
    """

    value: float
    unit: str
    converter: UnitConverter = field(repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _check_real(self.value, "Measurement value"))
        self.converter.registry.check(self.unit)

    # --- Parsing / formatting ---

    @classmethod
    def parse(cls, text: str, converter: UnitConverter) -> Measurement:
        """Parse text such as ``"123.45 mi"``, ``"12in"`` or ``"1.5e3 s"``.

        Whitespace between the number and the unit is optional; the unit is
        matched case-sensitively against the converter's units.

        Raises:
            InvalidMeasurement: If the text is not a number followed by a
                known unit.
        """
        match = _MEASUREMENT_RE.fullmatch(text.strip())
        if match is None or match.group("unit") not in converter.registry:
            raise InvalidMeasurement(f"'{text}' is not a valid measurement")
        return cls(float(match.group("value")), match.group("unit"), converter)

    @classmethod
    def try_parse(cls, text: str, converter: UnitConverter) -> Measurement | None:
        """Like :meth:`parse`, but return None instead of raising."""
        try:
            return cls.parse(text, converter)
        except InvalidMeasurement:
            return None

    def format(
        self,
        specifier: str = "f",
        precision: int | None = None,
        trim_zeros: bool = True,
        include_space: bool = True,
    ) -> str:
        """Format the value with :func:`format_value`, followed by the unit."""
        text = format_value(self.value, specifier, precision, trim_zeros)
        return text + (" " if include_space else "") + self.unit

    def __str__(self) -> str:
        text = repr(_normalize_zero(self.value))
        if text.endswith(".0"):
            text = text[:-2]
        return f"{text} {self.unit}"

    # --- Conversion ---

    def to(self, unit: str) -> Measurement:
        """Return the equivalent measurement in *unit*.

        Raises:
            UnknownUnit: If *unit* is not registered.
            NoConversionPath: If the units are not connected.
        """
        if unit == self.unit:
            return self
        return Measurement(self.converter.convert(self.value, self.unit, unit), unit, self.converter)

    def _value_of(self, other: object) -> float:
        """*other*'s value expressed in this measurement's unit."""
        if not isinstance(other, Measurement):
            raise TypeError(f"Expected a Measurement, got {type(other).__name__}")
        if other.converter is not self.converter:
            raise TypeError("Measurements belong to different converters")
        return other.to(self.unit).value

    # --- Comparison ---

    def compare(self, other: Measurement) -> int:
        """-1, 0 or 1 as this measurement is less than, equal to or greater than *other*.

        Only exactly equal values compare as 0; see :meth:`approx_compare`.
        """
        other_value = self._value_of(other)
        return (self.value > other_value) - (self.value < other_value)

    def approx_compare(self, other: Measurement, rel_tol: float = 1e-9, abs_tol: float = 0.0) -> int:
        """Like :meth:`compare`, but 0 when the values are within tolerance."""
        other_value = self._value_of(other)
        if math.isclose(self.value, other_value, rel_tol=rel_tol, abs_tol=abs_tol):
            return 0
        return 1 if self.value > other_value else -1

    def approx_equal(self, other: object, rel_tol: float = 1e-9, abs_tol: float = 0.0) -> bool:
        if not isinstance(other, Measurement) or other.converter is not self.converter:
            return False
        return self.approx_compare(other, rel_tol, abs_tol) == 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Measurement) or other.converter is not self.converter:
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: Measurement) -> bool:
        if not isinstance(other, Measurement):
            return NotImplemented
        return self.compare(other) < 0

    # --- Arithmetic ---

    def _operand(self, other_or_value: object, unit: str | None) -> float:
        if unit is None:
            return self._value_of(other_or_value)
        return self._value_of(Measurement(other_or_value, unit, self.converter))

    def add(self, other_or_value: object, unit: str | None = None) -> Measurement:
        """Sum in this measurement's unit.

        Accepts another measurement, or a value and its unit::

            a.add(b)
            a.add(50, "cm")
        """
        return Measurement(self.value + self._operand(other_or_value, unit), self.unit, self.converter)

    def sub(self, other_or_value: object, unit: str | None = None) -> Measurement:
        """Difference in this measurement's unit; arguments as for :meth:`add`."""
        return Measurement(self.value - self._operand(other_or_value, unit), self.unit, self.converter)

    def mul(self, factor: float) -> Measurement:
        return Measurement(self.value * _check_real(factor, "Multiplier"), self.unit, self.converter)

    def div(self, divisor: float) -> Measurement:
        divisor = _check_real(divisor, "Divisor")
        if divisor == 0.0:
            raise ZeroDivisionError("Divisor cannot be 0")
        return Measurement(self.value / divisor, self.unit, self.converter)

    def __add__(self, other: object) -> Measurement:
        if not isinstance(other, Measurement):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> Measurement:
        if not isinstance(other, Measurement):
            return NotImplemented
        return self.sub(other)

    def __mul__(self, factor: object) -> Measurement:
        if isinstance(factor, bool) or not isinstance(factor, numbers.Real):
            return NotImplemented
        return self.mul(factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: object) -> Measurement:
        if isinstance(divisor, bool) or not isinstance(divisor, numbers.Real):
            return NotImplemented
        return self.div(divisor)

    def __neg__(self) -> Measurement:
        return Measurement(-self.value, self.unit, self.converter)

    def __abs__(self) -> Measurement:
        return Measurement(abs(self.value), self.unit, self.converter)
