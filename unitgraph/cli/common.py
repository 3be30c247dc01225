"""Options and helpers shared by the CLI commands."""

from __future__ import annotations

from typing import Any, Callable

import click
from rich.console import Console
from rich.markup import escape

from unitgraph.core.catalog import load_measurement
from unitgraph.core.config import MeasurementDefinition, load_definition_json


def source_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add the ``--measurement`` / ``--definition`` options to a command."""
    func = click.option(
        "--definition",
        "-d",
        type=click.Path(exists=True, dir_okay=False),
        default=None,
        help="Measurement definition JSON file.",
    )(func)
    func = click.option(
        "--measurement",
        "-m",
        type=str,
        default=None,
        help="Bundled measurement type (see 'unitgraph info measurements').",
    )(func)
    return func


def resolve_definition(
    console: Console,
    measurement: str | None,
    definition: str | None,
) -> MeasurementDefinition:
    """Load the definition selected by the source options, or exit with status 1."""
    if (measurement is None) == (definition is None):
        fail(console, "Provide exactly one of --measurement or --definition.")
    if definition is not None:
        return load_definition_json(definition)
    try:
        return load_measurement(measurement)
    except KeyError as exc:
        fail(console, exc.args[0])


def fail(console: Console, message: str) -> None:
    """Print an error line and exit with status 1."""
    console.print(f"[red]Error:[/red] {escape(str(message))}", highlight=False)
    raise SystemExit(1)
