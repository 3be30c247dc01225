"""UnitGraph command-line interface.

Entry point for the ``unitgraph`` CLI tool.
"""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from unitgraph import __app_name__, __version__

console = Console()


@click.group()
@click.version_option(version=__version__, prog_name=__app_name__)
@click.option("--verbose", "-v", is_flag=True, help="Log every derivation step.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """UnitGraph — derive unit conversions over a conversion graph.

    Conversions that are not given directly are derived on demand by
    chaining the known ones.
    """
    ctx.ensure_object(dict)
    ctx.obj["console"] = console
    if verbose:
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s", handlers=[handler])


# Import and register sub-commands
from unitgraph.cli.convert_cmd import convert  # noqa: E402
from unitgraph.cli.table_cmd import table  # noqa: E402
from unitgraph.cli.check_cmd import check  # noqa: E402
from unitgraph.cli.report_cmd import report  # noqa: E402
from unitgraph.cli.info_cmd import info  # noqa: E402

cli.add_command(convert)
cli.add_command(table)
cli.add_command(check)
cli.add_command(report)
cli.add_command(info)


def main() -> None:
    """Convenience wrapper for entry-point scripts."""
    cli()
