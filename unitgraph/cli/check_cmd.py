"""CLI command for checking a measurement definition."""

from __future__ import annotations

import click
import pint
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from unitgraph.cli.common import fail, resolve_definition, source_options
from unitgraph.core.converter import UnitConverter
from unitgraph.core.errors import ConversionError
from unitgraph.utils.units import compare_with_reference
from unitgraph.utils.validation import Severity, validate_definition

_STYLES = {Severity.ERROR: "red", Severity.WARNING: "yellow", Severity.INFO: "blue"}


@click.command("check")
@source_options
@click.option(
    "--reference/--no-reference",
    default=False,
    show_default=True,
    help="Compare derived multipliers with pint.",
)
@click.option(
    "--rel-tol",
    type=float,
    default=1e-9,
    show_default=True,
    help="Relative tolerance for the pint comparison.",
)
@click.pass_context
def check(
    ctx: click.Context,
    measurement: str | None,
    definition: str | None,
    reference: bool,
    rel_tol: float,
) -> None:
    """Validate a definition, derive every conversion and report gaps.

    Exits with status 1 if the definition is invalid, its units are not all
    connected, or (with --reference) a multiplier disagrees with pint.
    """
    console: Console = ctx.obj.get("console", Console())
    defn = resolve_definition(console, measurement, definition)

    console.print(f"\n[bold]UnitGraph — Check: {escape(defn.meta.name)}[/bold]\n")

    result = validate_definition(defn.unit_symbols(), defn.conversions)
    for msg in result.messages:
        style = _STYLES[msg.severity]
        console.print(
            f"[{style}]{msg.severity.value.upper()}[/{style}] {escape(msg.parameter)}: {escape(msg.message)}"
        )
    if not result.is_valid:
        fail(console, f"Definition has {len(result.errors)} error(s).")

    try:
        converter = UnitConverter.from_definition(defn)
        steps = converter.saturate()
    except ConversionError as exc:
        fail(console, str(exc))

    summary = Table(title="Closure Summary")
    summary.add_column("Parameter", style="cyan")
    summary.add_column("Value", style="green", justify="right")
    summary.add_row("Units", str(len(converter.units)))
    summary.add_row("Direct Conversions", str(len(defn.conversions)))
    summary.add_row("Derivation Steps", str(steps))
    summary.add_row("Cached Conversions", str(len(converter)))
    summary.add_row("Complete", "yes" if converter.is_complete() else "no")
    console.print(summary)

    failed = False
    missing = converter.missing_pairs()
    if missing:
        failed = True
        console.print(f"\n[yellow]{len(missing)} unit pairs have no conversion path:[/yellow]")
        for source, target in missing:
            console.print(f"  {escape(source)} → {escape(target)}")

    if reference:
        try:
            deviations = compare_with_reference(converter, defn.pint_names(), rel_tol=rel_tol)
        except (ConversionError, pint.errors.PintError) as exc:
            fail(console, f"pint reference check failed: {exc}")
        if deviations:
            failed = True
            dev_table = Table(title="Deviations from pint")
            dev_table.add_column("From", style="cyan")
            dev_table.add_column("To", style="cyan")
            dev_table.add_column("Derived", justify="right")
            dev_table.add_column("pint", justify="right")
            dev_table.add_column("Rel. Error", style="red", justify="right")
            for dev in deviations:
                dev_table.add_row(
                    dev.source,
                    dev.target,
                    f"{dev.derived:.10g}",
                    f"{dev.reference:.10g}",
                    f"{dev.relative_error:.2e}",
                )
            console.print(dev_table)
        else:
            console.print(f"\n[green]All multipliers agree with pint (rel. tol. {rel_tol:g}).[/green]")

    if failed:
        raise SystemExit(1)
    console.print("\n[green]OK[/green]")
