"""Tests for the closure engine."""

import logging

import pytest

from unitgraph.core.closure import derive_one, saturate
from unitgraph.core.errors import InvalidMultiplier
from unitgraph.core.registry import UnitRegistry
from unitgraph.core.store import ConversionStore


def make_store(units, conversions):
    store = ConversionStore(UnitRegistry(units))
    for source, target, multiplier in conversions:
        store.put(source, target, multiplier)
    return store


class TestDeriveOne:
    def test_derives_composition(self):
        store = make_store(["a", "b", "c"], [("a", "b", 2.0), ("b", "c", 3.0)])
        assert derive_one(store.registry, store) is True
        assert store.get("a", "c").multiplier == pytest.approx(6.0)
        assert store.get("c", "a").multiplier == pytest.approx(1 / 6.0)
        assert len(store) == 6

    def test_fixpoint_reports_false(self):
        store = make_store(["a", "b"], [("a", "b", 2.0)])
        assert derive_one(store.registry, store) is False
        assert len(store) == 2

    def test_one_edge_pair_per_step(self):
        store = make_store(
            ["a", "b", "c", "d"],
            [("a", "b", 2.0), ("b", "c", 3.0), ("c", "d", 5.0)],
        )
        before = len(store)
        derive_one(store.registry, store)
        assert len(store) == before + 2

    def test_scan_order(self):
        """The first unit in declaration order is extended first."""
        store = make_store(
            ["c", "b", "a"],
            [("a", "b", 2.0), ("b", "c", 3.0)],
        )
        derive_one(store.registry, store)
        derived = list(store)[-2:]
        assert (derived[0].source, derived[0].target) == ("c", "a")

    def test_first_path_wins(self):
        """Inconsistent parallel paths resolve to the first one scanned."""
        store = make_store(
            ["a", "b", "c", "d"],
            [("a", "b", 3.0), ("b", "d", 7.0), ("a", "c", 5.0), ("c", "d", 4.0)],
        )
        derive_one(store.registry, store)
        assert store.get("a", "d").multiplier == 21.0

        saturate(store.registry, store)
        assert store.get("a", "d").multiplier == 21.0
        assert store.get("c", "d").multiplier == 4.0

    def test_repeatable(self):
        conversions = [("a", "b", 1.1), ("b", "c", 1.3), ("c", "d", 1.7), ("a", "d", 2.9)]
        first = make_store(["a", "b", "c", "d"], conversions)
        second = make_store(["a", "b", "c", "d"], conversions)
        saturate(first.registry, first)
        saturate(second.registry, second)
        assert [(c.source, c.target, c.multiplier) for c in first] == [
            (c.source, c.target, c.multiplier) for c in second
        ]

    def test_overflow_surfaces(self):
        store = make_store(["a", "b", "c"], [("a", "b", 1e200), ("b", "c", 1e200)])
        with pytest.raises(InvalidMultiplier):
            derive_one(store.registry, store)
        assert len(store) == 4

    def test_logs_derivation(self, caplog):
        store = make_store(["a", "b", "c"], [("a", "b", 2.0), ("b", "c", 3.0)])
        with caplog.at_level(logging.DEBUG, logger="unitgraph.core.closure"):
            derive_one(store.registry, store)
        assert "Derived a → c via b" in caplog.text


class TestSaturate:
    def test_reaches_full_closure(self):
        store = make_store(
            ["a", "b", "c", "d"],
            [("a", "b", 2.0), ("b", "c", 3.0), ("c", "d", 5.0)],
        )
        steps = saturate(store.registry, store)
        assert steps == 3
        assert len(store) == 12
        assert store.get("a", "d").multiplier == pytest.approx(30.0)
        assert store.get("d", "a").multiplier == pytest.approx(1 / 30.0)

    def test_idempotent(self):
        store = make_store(["a", "b", "c"], [("a", "b", 2.0), ("b", "c", 3.0)])
        assert saturate(store.registry, store) == 1
        snapshot = list(store)
        assert saturate(store.registry, store) == 0
        assert list(store) == snapshot

    def test_disconnected(self):
        store = make_store(
            ["a", "b", "x", "y"],
            [("a", "b", 2.0), ("x", "y", 3.0)],
        )
        assert saturate(store.registry, store) == 0
        assert not store.contains("a", "x")

    def test_no_conversions(self):
        store = make_store(["m", "kg"], [])
        assert saturate(store.registry, store) == 0
        assert len(store) == 0
