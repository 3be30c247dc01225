"""Read-only diagnostics over a converter's conversion cache.

Nothing here derives new conversions: cells that are not cached yet are
reported as unresolved (NaN in arrays, ``?`` in text).
"""

from __future__ import annotations

import numpy as np

from unitgraph.core.converter import UnitConverter


def conversion_matrix(converter: UnitConverter) -> np.ndarray:
    """Return the cached multipliers as an n×n array.

    Row *i* / column *j* holds the multiplier from ``units[i]`` to
    ``units[j]``. The diagonal is 1.0; unresolved cells are NaN.
    """
    units = converter.units
    index = {unit: i for i, unit in enumerate(units)}
    matrix = np.full((len(units), len(units)), np.nan)
    np.fill_diagonal(matrix, 1.0)
    for conversion in converter.conversions():
        matrix[index[conversion.source], index[conversion.target]] = conversion.multiplier
    return matrix


def format_cell(value: float) -> str:
    return "?" if np.isnan(value) else f"{value:.10g}"


def format_matrix(converter: UnitConverter, col_width: int = 20) -> str:
    """Render the cached multipliers as a fixed-width text grid.

    *col_width* is a minimum: columns widen to fit the longest cell or unit
    name so every row has the same length.
    """
    units = converter.units
    matrix = conversion_matrix(converter)
    cells = [[format_cell(v) for v in row] for row in matrix]
    label_width = max(6, *(len(u) for u in units))
    col_width = max(col_width, *(len(u) for u in units), *(len(c) for row in cells for c in row))

    rule = "+" + "-" * label_width + "+" + ("-" * col_width + "+") * len(units)
    lines = [rule]
    lines.append(
        "|" + " " * label_width + "|" + "".join(u.center(col_width) + "|" for u in units)
    )
    lines.append(rule)
    for unit, row in zip(units, cells):
        row_text = "".join(c.ljust(col_width) + "|" for c in row)
        lines.append("|" + unit.ljust(label_width) + "|" + row_text)
    lines.append(rule)
    return "\n".join(lines)


def dump_conversions(converter: UnitConverter) -> list[str]:
    """One line per cached conversion, in insertion order."""
    return [str(conversion) for conversion in converter.conversions()]
