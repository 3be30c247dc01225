"""Bundled measurement catalogue for UnitGraph.

Loads the measurement definitions shipped in ``data/measurements.json`` and
builds converters from them.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from unitgraph.core.config import DefinitionMeta, MeasurementDefinition, UnitInfo
from unitgraph.core.converter import UnitConverter

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).resolve().parent.parent / "data"
_MEASUREMENTS_DB_PATH = _DATA_DIR / "measurements.json"


@lru_cache(maxsize=1)
def _load_measurements_db() -> dict[str, Any]:
    if not _MEASUREMENTS_DB_PATH.exists():
        logger.warning("Measurement catalogue not found at %s", _MEASUREMENTS_DB_PATH)
        return {}
    with open(_MEASUREMENTS_DB_PATH) as f:
        db = json.load(f)
    logger.info("Loaded %d measurement types from %s", len(db), _MEASUREMENTS_DB_PATH)
    return db


def list_measurements() -> list[str]:
    """Return all measurement identifiers in the catalogue."""
    return list(_load_measurements_db().keys())


def get_measurement_info(measurement_id: str) -> dict[str, Any]:
    """Return the raw catalogue record.

    Raises:
        KeyError: If measurement_id is not in the catalogue.
    """
    db = _load_measurements_db()
    for key, val in db.items():
        if key.lower() == measurement_id.lower():
            return val
    raise KeyError(f"Measurement '{measurement_id}' not found. Available: {list(db.keys())}")


def load_measurement(measurement_id: str) -> MeasurementDefinition:
    """Return the catalogue entry as a :class:`MeasurementDefinition`."""
    info = get_measurement_info(measurement_id)
    return MeasurementDefinition(
        meta=DefinitionMeta(name=info["name"], description=info.get("description", "")),
        units=[UnitInfo(**u) for u in info["units"]],
        conversions=[list(c) for c in info["conversions"]],
    )


def build_converter(measurement_id: str) -> UnitConverter:
    """Create a fresh converter for a catalogue measurement.

    Each call returns a new instance with its own conversion cache.
    """
    return UnitConverter.from_definition(load_measurement(measurement_id))
