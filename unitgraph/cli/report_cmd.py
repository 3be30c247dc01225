"""CLI command for report generation."""

from __future__ import annotations

import click
from rich.console import Console

from unitgraph.cli.common import fail, resolve_definition, source_options
from unitgraph.core.converter import UnitConverter
from unitgraph.core.errors import ConversionError
from unitgraph.reports.summary import generate_text_report, save_text_report


@click.command("report")
@source_options
@click.option(
    "--saturate/--no-saturate",
    default=True,
    show_default=True,
    help="Derive every reachable conversion before reporting.",
)
@click.option(
    "--output", "-o",
    type=click.Path(),
    default=None,
    help="Output file path (printed to the console if not specified).",
)
@click.pass_context
def report(
    ctx: click.Context,
    measurement: str | None,
    definition: str | None,
    saturate: bool,
    output: str | None,
) -> None:
    """Generate a plain-text conversion report."""
    console: Console = ctx.obj.get("console", Console())
    defn = resolve_definition(console, measurement, definition)

    try:
        converter = UnitConverter.from_definition(defn)
        if saturate:
            converter.saturate()
    except ConversionError as exc:
        fail(console, str(exc))

    if output:
        save_text_report(converter, output, title=defn.meta.name)
        console.print(f"[green]Text report saved:[/green] {output}")
    else:
        click.echo(generate_text_report(converter, title=defn.meta.name))
