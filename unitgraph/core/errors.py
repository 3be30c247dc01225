"""Exceptions raised by the UnitGraph conversion engine."""

from __future__ import annotations

from typing import Any


class ConversionError(Exception):
    """Base class for every error raised by the conversion engine."""


class UnknownUnit(ConversionError, KeyError):
    """A unit name is not part of the converter's registry."""

    def __init__(self, unit: Any):
        self.unit = unit
        super().__init__(f"Unknown unit '{unit}'")

    def __str__(self) -> str:
        # KeyError would otherwise quote the message
        return str(self.args[0])


class InvalidMultiplier(ConversionError, ValueError):
    """A multiplier is not a finite, strictly positive real number."""

    def __init__(self, multiplier: Any, detail: str = ""):
        self.multiplier = multiplier
        message = f"Multiplier must be finite and > 0, got {multiplier!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class NoConversionPath(ConversionError, LookupError):
    """The two units lie in different connected components."""

    def __init__(self, source: str, target: str):
        self.source = source
        self.target = target
        super().__init__(f"No conversion between '{source}' and '{target}' could be found")


class InvalidMeasurement(ConversionError, ValueError):
    """A measurement value is not finite, or text does not parse as one."""


class DefinitionError(ConversionError, ValueError):
    """Malformed unit list or conversion definition."""


class DuplicateUnit(DefinitionError):
    def __init__(self, unit: str):
        self.unit = unit
        super().__init__(f"Unit '{unit}' is declared more than once")


class InvalidUnitName(DefinitionError):
    pass


class SelfConversion(DefinitionError):
    def __init__(self, unit: str):
        self.unit = unit
        super().__init__(f"Conversion from '{unit}' to itself cannot be stored")
