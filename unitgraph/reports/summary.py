"""Conversion table report generation for UnitGraph.

Produces a plain-text report of a converter's cached conversions: unit list,
cache statistics, completeness, missing pairs and the conversion grid.
"""

from __future__ import annotations

from datetime import datetime, timezone

from unitgraph import __version__
from unitgraph.core.converter import UnitConverter
from unitgraph.core.matrix import dump_conversions, format_matrix


def generate_text_report(converter: UnitConverter, title: str = "Conversion Table") -> str:
    """Generate a plain-text conversion report.

    The report only reads the converter; it never derives conversions, so
    call :meth:`UnitConverter.saturate` first for a full table.

    Args:
        converter: Converter to report on.
        title: Heading printed at the top of the report.

    Returns:
        Multi-line text report string.
    """
    lines: list[str] = []
    _hr = "=" * 60
    units = converter.units
    n_pairs = len(units) * (len(units) - 1)

    lines.append(_hr)
    lines.append("  UnitGraph — Conversion Report")
    lines.append(f"  {title}")
    lines.append(_hr)
    lines.append("")

    lines.append("UNITS")
    lines.append("-" * 40)
    _add_param(lines, "Count", len(units))
    _add_param_str(lines, "Declared", ", ".join(units))
    lines.append("")

    lines.append("CACHE")
    lines.append("-" * 40)
    _add_param(lines, "Cached", len(converter))
    _add_param(lines, "Possible", n_pairs)
    if n_pairs:
        _add_param(lines, "Coverage", 100.0 * len(converter) / n_pairs, "%")
    _add_param_str(lines, "Complete", "yes" if converter.is_complete() else "no")
    lines.append("")

    missing = converter.missing_pairs()
    if missing:
        lines.append("MISSING PAIRS")
        lines.append("-" * 40)
        for source, target in missing:
            lines.append(f"  {source} → {target}")
        lines.append("")

    lines.append("CONVERSIONS")
    lines.append("-" * 40)
    for line in dump_conversions(converter):
        lines.append(f"  {line}")
    lines.append("")

    lines.append(format_matrix(converter))
    lines.append("")

    lines.append(_hr)
    lines.append(f"  Generated: {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M UTC')}")
    lines.append(f"  UnitGraph v{__version__}")
    lines.append(_hr)

    return "\n".join(lines)


def _add_param(lines: list[str], label: str, value: float | int, unit: str = "") -> None:
    """Add a numeric parameter line."""
    unit_str = f" {unit}" if unit else ""
    if isinstance(value, float):
        lines.append(f"  {label:<20s} {value:>12.2f}{unit_str}")
    else:
        lines.append(f"  {label:<20s} {value!s:>12}{unit_str}")


def _add_param_str(lines: list[str], label: str, value: str) -> None:
    """Add a string parameter line."""
    lines.append(f"  {label:<20s} {value:>12}")


def save_text_report(converter: UnitConverter, filepath: str, title: str = "Conversion Table") -> None:
    """Write :func:`generate_text_report` output to *filepath*."""
    with open(filepath, "w") as f:
        f.write(generate_text_report(converter, title))
