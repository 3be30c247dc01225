"""CLI command for listing bundled measurements and their units."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from unitgraph.cli.common import fail
from unitgraph.core.catalog import get_measurement_info, list_measurements


@click.group("info")
@click.pass_context
def info(ctx: click.Context) -> None:
    """Inspect the bundled measurement catalogue."""
    pass


@info.command("measurements")
@click.pass_context
def info_measurements(ctx: click.Context) -> None:
    """List available measurement types."""
    console: Console = ctx.obj.get("console", Console())
    table = Table(title="Available Measurements")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Units", justify="right")
    table.add_column("Conversions", justify="right")
    table.add_column("Description", style="dim")

    for measurement_id in list_measurements():
        info = get_measurement_info(measurement_id)
        table.add_row(
            measurement_id,
            info["name"],
            str(len(info["units"])),
            str(len(info["conversions"])),
            info.get("description", "—"),
        )
    console.print(table)


@info.command("units")
@click.argument("measurement")
@click.pass_context
def info_units(ctx: click.Context, measurement: str) -> None:
    """List the units and direct conversions of MEASUREMENT."""
    console: Console = ctx.obj.get("console", Console())
    try:
        info = get_measurement_info(measurement)
    except KeyError as exc:
        fail(console, exc.args[0])

    units = Table(title=f"{info['name']} Units")
    units.add_column("Symbol", style="cyan")
    units.add_column("Name", style="green")
    units.add_column("pint", style="dim")
    for unit in info["units"]:
        units.add_row(unit["symbol"], unit.get("name", "—"), unit.get("pint") or "—")
    console.print(units)

    conversions = Table(title=f"{info['name']} Direct Conversions")
    conversions.add_column("From", style="cyan")
    conversions.add_column("To", style="cyan")
    conversions.add_column("Multiplier", style="green", justify="right")
    for source, target, multiplier in info["conversions"]:
        conversions.add_row(source, target, f"{multiplier:.10g}")
    console.print(conversions)
