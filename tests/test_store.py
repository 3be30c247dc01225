"""Tests for the conversion store."""

import pytest

from unitgraph.core.conversion import Conversion
from unitgraph.core.errors import InvalidMultiplier, SelfConversion, UnknownUnit
from unitgraph.core.registry import UnitRegistry
from unitgraph.core.store import ConversionStore


@pytest.fixture
def store():
    return ConversionStore(UnitRegistry(["m", "ft", "in", "kg"]))


class TestPut:
    def test_inserts_inverse(self, store):
        assert store.put("m", "ft", 3.28084) is True
        assert store.contains("m", "ft")
        assert store.contains("ft", "m")
        assert store.get("ft", "m").multiplier == pytest.approx(1 / 3.28084)
        assert len(store) == 2

    def test_existing_pair_kept(self, store):
        store.put("ft", "in", 12)
        assert store.put("in", "ft", 0.5) is False
        assert store.get("in", "ft").multiplier == pytest.approx(1 / 12)
        assert len(store) == 2

    @pytest.mark.parametrize("bad", [0, -3.0, float("inf"), float("nan")])
    def test_invalid_multiplier(self, store, bad):
        with pytest.raises(InvalidMultiplier):
            store.put("m", "ft", bad)
        assert len(store) == 0

    def test_unknown_unit(self, store):
        with pytest.raises(UnknownUnit):
            store.put("m", "yd", 1.09361)
        with pytest.raises(UnknownUnit):
            store.put("yd", "m", 0.9144)
        assert len(store) == 0

    def test_self_pair_rejected(self, store):
        with pytest.raises(SelfConversion):
            store.put("m", "m", 1.0)
        assert len(store) == 0

    def test_add_conversion(self, store):
        assert store.add(Conversion("kg", "m", 2.0))
        assert store.get("m", "kg").multiplier == 0.5


class TestAccess:
    def test_get_absent(self, store):
        assert store.get("m", "in") is None
        assert not store.contains("m", "in")
        assert ("m", "in") not in store

    def test_neighbors_in_insertion_order(self, store):
        store.put("ft", "in", 12)
        store.put("m", "ft", 3.28084)
        assert [unit for unit, _ in store.neighbors("ft")] == ["in", "m"]
        assert store.neighbors("kg") == []

    def test_neighbors_unknown_unit(self, store):
        with pytest.raises(UnknownUnit):
            store.neighbors("yd")

    def test_iteration_in_insertion_order(self, store):
        store.put("m", "ft", 3.28084)
        store.put("ft", "in", 12)
        pairs = [(c.source, c.target) for c in store]
        assert pairs == [("m", "ft"), ("ft", "m"), ("ft", "in"), ("in", "ft")]

    def test_inverse_consistency(self, store):
        store.put("m", "ft", 3.28084)
        store.put("ft", "in", 12)
        store.put("kg", "in", 7.5)
        for conv in store:
            inverse = store.get(conv.target, conv.source)
            assert inverse is not None
            assert inverse.multiplier == pytest.approx(1 / conv.multiplier, rel=1e-12)
