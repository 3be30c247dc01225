"""UnitGraph — conversion factors derived over a graph of measurement units."""

__app_name__ = "unitgraph"
__version__ = "0.1.0"
