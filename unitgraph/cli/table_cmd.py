"""CLI command for displaying the conversion grid."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from unitgraph.cli.common import fail, resolve_definition, source_options
from unitgraph.core.converter import UnitConverter
from unitgraph.core.errors import ConversionError
from unitgraph.core.matrix import conversion_matrix, format_cell, format_matrix


@click.command("table")
@source_options
@click.option(
    "--saturate/--no-saturate",
    default=False,
    show_default=True,
    help="Derive every reachable conversion before printing.",
)
@click.option("--plain", is_flag=True, help="Print a fixed-width text grid instead of a rich table.")
@click.pass_context
def table(
    ctx: click.Context,
    measurement: str | None,
    definition: str | None,
    saturate: bool,
    plain: bool,
) -> None:
    """Show cached multipliers, one row and column per unit ('?' = unresolved)."""
    console: Console = ctx.obj.get("console", Console())
    defn = resolve_definition(console, measurement, definition)

    try:
        converter = UnitConverter.from_definition(defn)
        if saturate:
            converter.saturate()
    except ConversionError as exc:
        fail(console, str(exc))

    if plain:
        click.echo(format_matrix(converter))
        return

    units = converter.units
    matrix = conversion_matrix(converter)

    grid = Table(title=f"{defn.meta.name} Conversions (row → column)")
    grid.add_column("", style="cyan")
    for unit in units:
        grid.add_column(unit, justify="right")
    for i, unit in enumerate(units):
        cells = [format_cell(v) for v in matrix[i]]
        grid.add_row(unit, *[f"[dim]{c}[/dim]" if c == "?" else c for c in cells])

    console.print(grid)
    status = "[green]complete[/green]" if converter.is_complete() else "[yellow]incomplete[/yellow]"
    console.print(f"\n{len(converter)} conversions cached — {status}")
