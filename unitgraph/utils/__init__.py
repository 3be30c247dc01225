"""Utility modules for UnitGraph."""

from unitgraph.utils.units import get_unit_registry, reference_multiplier

__all__ = ["get_unit_registry", "reference_multiplier"]
