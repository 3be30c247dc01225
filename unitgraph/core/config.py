"""Measurement definitions and their JSON persistence.

A definition is the *input* to a converter: its units and the direct
conversions between them. Derived conversions are never written out; a
converter rebuilds them lazily from the definition.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import numpy as np

logger = logging.getLogger(__name__)


# --- Definition metadata ---


@dataclass
class DefinitionMeta:
    """Top-level definition metadata."""

    name: str = "Untitled"
    description: str = ""
    author: str = ""
    version: str = "0.1.0"
    created: str = ""
    modified: str = ""

    def touch(self) -> None:
        """Update the modified timestamp."""
        self.modified = datetime.now(timezone.utc).isoformat()


@dataclass
class UnitInfo:
    """A single unit declaration."""

    symbol: str
    name: str = ""
    pint: str = ""  # pint expression used for reference checks


@dataclass
class MeasurementDefinition:
    """Units and direct conversions of one measurement type.

    Conversions are stored as ``[source, target, multiplier]`` lists in the
    order they were declared.
    """

    meta: DefinitionMeta = field(default_factory=DefinitionMeta)
    units: list[UnitInfo] = field(default_factory=list)
    conversions: list[list[Any]] = field(default_factory=list)

    def unit_symbols(self) -> list[str]:
        return [u.symbol for u in self.units]

    def pint_names(self) -> dict[str, str]:
        """Map of unit symbol to pint expression, for units that have one."""
        return {u.symbol: u.pint for u in self.units if u.pint}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MeasurementDefinition:
        """Build a definition from parsed JSON.

        Units may be given as plain symbol strings or as objects with
        ``symbol``, ``name`` and ``pint`` keys.
        """
        meta = DefinitionMeta(**data.get("meta", {}))
        units = [
            UnitInfo(symbol=u) if isinstance(u, str) else UnitInfo(**u)
            for u in data.get("units", [])
        ]
        conversions = [list(c) for c in data.get("conversions", [])]
        return cls(meta=meta, units=units, conversions=conversions)


# --- JSON serialization ---


class _NumpyEncoder(json.JSONEncoder):
    """JSON encoder that handles numpy types."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        if isinstance(obj, (np.integer,)):
            return int(obj)
        if isinstance(obj, (np.floating,)):
            return float(obj)
        return super().default(obj)


def save_definition_json(definition: MeasurementDefinition, path: str | Path) -> None:
    """Save a measurement definition to a JSON file."""
    path = Path(path)
    if not definition.meta.created:
        definition.meta.created = datetime.now(timezone.utc).isoformat()
    definition.meta.touch()

    with open(path, "w") as f:
        json.dump(asdict(definition), f, indent=2, cls=_NumpyEncoder)

    logger.info("Saved definition '%s' to %s", definition.meta.name, path)


def load_definition_json(path: str | Path) -> MeasurementDefinition:
    """Load a measurement definition from a JSON file."""
    path = Path(path)
    with open(path) as f:
        data = json.load(f)
    return MeasurementDefinition.from_dict(data)
