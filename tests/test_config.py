"""Tests for measurement definition persistence."""

import json

import numpy as np
import pytest

from unitgraph.core.config import (
    DefinitionMeta,
    MeasurementDefinition,
    UnitInfo,
    load_definition_json,
    save_definition_json,
)
from unitgraph.core.converter import UnitConverter


class TestMeasurementDefinition:
    def test_defaults(self):
        defn = MeasurementDefinition()
        assert defn.meta.name == "Untitled"
        assert defn.units == []
        assert defn.conversions == []

    def test_meta_touch(self):
        meta = DefinitionMeta(name="Test")
        meta.touch()
        assert meta.modified != ""

    def test_from_dict_plain_unit_names(self):
        defn = MeasurementDefinition.from_dict(
            {"units": ["a", "b"], "conversions": [["a", "b", 2]]}
        )
        assert defn.unit_symbols() == ["a", "b"]
        assert defn.pint_names() == {}

    def test_from_dict_unit_objects(self):
        defn = MeasurementDefinition.from_dict(
            {
                "meta": {"name": "Length"},
                "units": [{"symbol": "m", "name": "metre", "pint": "meter"}, {"symbol": "ft"}],
                "conversions": [("ft", "m", 0.3048)],
            }
        )
        assert defn.meta.name == "Length"
        assert defn.units[0] == UnitInfo("m", "metre", "meter")
        assert defn.conversions == [["ft", "m", 0.3048]]


class TestJsonPersistence:
    def test_save_and_load(self, tmp_path):
        defn = MeasurementDefinition(
            meta=DefinitionMeta(name="Imperial"),
            units=[UnitInfo("yd", "yard", "yard"), UnitInfo("ft", "foot", "foot")],
            conversions=[["yd", "ft", 3]],
        )
        path = tmp_path / "imperial.json"
        save_definition_json(defn, path)

        loaded = load_definition_json(path)
        assert loaded.meta.name == "Imperial"
        assert loaded.meta.created != ""
        assert loaded.unit_symbols() == ["yd", "ft"]
        assert loaded.pint_names() == {"yd": "yard", "ft": "foot"}
        assert UnitConverter.from_definition(loaded).convert(2, "yd", "ft") == pytest.approx(6.0)

    def test_numpy_serialization(self, tmp_path):
        """Numpy scalars in conversions should be written as plain numbers."""
        defn = MeasurementDefinition(
            units=[UnitInfo("a"), UnitInfo("b")],
            conversions=[["a", "b", np.float64(2.5)], ["b", "a", np.int64(4)]],
        )
        path = tmp_path / "np.json"
        save_definition_json(defn, path)

        with open(path) as f:
            data = json.load(f)
        assert data["conversions"][0][2] == 2.5
        assert data["conversions"][1][2] == 4
