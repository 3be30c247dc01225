"""Tests for conversion report generation."""

from unitgraph.core.catalog import build_converter
from unitgraph.core.converter import UnitConverter
from unitgraph.reports.summary import generate_text_report, save_text_report


class TestTextReport:
    def test_sections(self):
        conv = build_converter("memory")
        text = generate_text_report(conv, title="Memory")
        assert "UnitGraph — Conversion Report" in text
        assert "Memory" in text
        assert "UNITS" in text
        assert "CACHE" in text
        assert "B → b: × 8" in text
        assert "MISSING PAIRS" not in text

    def test_missing_pairs_listed(self):
        conv = UnitConverter(["m", "ft", "in"], [("m", "ft", 3.28084), ("ft", "in", 12)])
        text = generate_text_report(conv)
        assert "MISSING PAIRS" in text
        assert "m → in" in text
        assert len(conv) == 4

    def test_save(self, tmp_path):
        conv = build_converter("mass")
        conv.saturate()
        path = tmp_path / "mass.txt"
        save_text_report(conv, str(path), title="Mass")
        content = path.read_text()
        assert "Complete" in content
        assert "yes" in content
