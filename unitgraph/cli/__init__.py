"""UnitGraph command-line interface package."""

from unitgraph.cli.main import cli, main

__all__ = ["cli", "main"]
