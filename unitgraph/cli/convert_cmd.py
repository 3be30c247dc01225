"""CLI command for converting a value between two units."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from unitgraph.cli.common import fail, resolve_definition, source_options
from unitgraph.core.converter import UnitConverter
from unitgraph.core.errors import ConversionError
from unitgraph.core.measurement import Measurement, format_value


@click.command("convert")
@click.argument("value", type=float)
@click.argument("source")
@click.argument("target")
@source_options
@click.pass_context
def convert(
    ctx: click.Context,
    value: float,
    source: str,
    target: str,
    measurement: str | None,
    definition: str | None,
) -> None:
    """Convert VALUE from SOURCE units to TARGET units."""
    console: Console = ctx.obj.get("console", Console())
    defn = resolve_definition(console, measurement, definition)

    try:
        converter = UnitConverter.from_definition(defn)
        cached_before = len(converter)
        quantity = Measurement(value, source, converter)
        result = quantity.to(target)
        conversion = converter.get_conversion(source, target)
    except ConversionError as exc:
        fail(console, str(exc))

    table = Table(title=f"{defn.meta.name} Conversion")
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_column("Unit", style="dim")

    table.add_row("Input", format_value(quantity.value, "g", 10), source)
    table.add_row("Result", format_value(result.value, "g", 10), target)
    table.add_row("Multiplier", f"{conversion.multiplier:.10g}", f"{target}/{source}")
    table.add_row("Derived Conversions", str(len(converter) - cached_before), "—")

    console.print(table)
