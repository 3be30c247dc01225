"""Tests for the pint reference helpers."""

import pint
import pytest

from unitgraph.core.catalog import build_converter, load_measurement
from unitgraph.core.converter import UnitConverter
from unitgraph.utils.units import (
    ReferenceDeviation,
    compare_with_reference,
    get_unit_registry,
    reference_multiplier,
)


class TestReferenceMultiplier:
    def test_registry_singleton(self):
        assert get_unit_registry() is get_unit_registry()

    def test_foot_to_meter(self):
        assert reference_multiplier("foot", "meter") == pytest.approx(0.3048)

    def test_incompatible(self):
        with pytest.raises(pint.errors.DimensionalityError):
            reference_multiplier("meter", "second")


class TestCompareWithReference:
    @pytest.mark.parametrize("measurement", ["length", "mass", "volume", "memory"])
    def test_catalogue_agrees_with_pint(self, measurement):
        defn = load_measurement(measurement)
        conv = build_converter(measurement)
        assert compare_with_reference(conv, defn.pint_names()) == []

    def test_reports_deviation(self):
        conv = UnitConverter(["ft", "m"], [("ft", "m", 0.3)])
        deviations = compare_with_reference(conv, {"ft": "foot", "m": "meter"})
        assert len(deviations) == 2
        dev = deviations[0]
        assert isinstance(dev, ReferenceDeviation)
        assert (dev.source, dev.target) == ("ft", "m")
        assert dev.relative_error == pytest.approx(0.0048 / 0.3048)

    def test_disconnected_pairs_skipped(self):
        conv = UnitConverter(["m", "ft", "kg"], [("m", "ft", 3.28084)])
        names = {"m": "meter", "ft": "foot", "kg": "kilogram"}
        assert compare_with_reference(conv, names, rel_tol=1e-5) == []
        assert ("m", "kg") in conv.missing_pairs()

    def test_unknown_pint_expression(self):
        conv = UnitConverter(["m", "zz"], [("m", "zz", 2.0)])
        with pytest.raises(pint.errors.PintError):
            compare_with_reference(conv, {"m": "meter", "zz": "not_a_pint_unit"})

    def test_units_without_pint_name_skipped(self):
        conv = UnitConverter(["ft", "m", "px"], [("ft", "m", 0.3048), ("ft", "px", 1152)])
        assert compare_with_reference(conv, {"ft": "foot", "m": "meter"}) == []
        assert not conv.is_cached("m", "px")
