"""Definition checking and input validation for UnitGraph.

Unlike :class:`~unitgraph.core.converter.UnitConverter`, which stops at the
first bad input, these checks collect every finding so a whole definition can
be reported at once.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Sequence

from unitgraph.core.conversion import check_multiplier
from unitgraph.core.errors import InvalidMultiplier


class Severity(Enum):
    """Severity level for validation messages."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationMessage:
    """A single validation finding."""

    severity: Severity
    parameter: str
    message: str
    value: Any = None


@dataclass
class ValidationResult:
    """Aggregated validation result."""

    messages: list[ValidationMessage] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not any(m.severity == Severity.ERROR for m in self.messages)

    @property
    def has_warnings(self) -> bool:
        return any(m.severity == Severity.WARNING for m in self.messages)

    @property
    def errors(self) -> list[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.WARNING]

    def add(self, severity: Severity, parameter: str, message: str, **kwargs: Any) -> None:
        self.messages.append(
            ValidationMessage(severity=severity, parameter=parameter, message=message, **kwargs)
        )

    def error(self, parameter: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.ERROR, parameter, message, **kwargs)

    def warning(self, parameter: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.WARNING, parameter, message, **kwargs)

    def info(self, parameter: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.INFO, parameter, message, **kwargs)


# --- Common validators ---


def validate_multiplier(name: str, value: Any, result: ValidationResult) -> bool:
    """Validate that a multiplier is finite and strictly positive."""
    try:
        check_multiplier(value)
    except InvalidMultiplier as exc:
        result.error(name, str(exc), value=value)
        return False
    return True


def validate_units(units: Iterable[Any], result: ValidationResult) -> list[str]:
    """Validate a unit list; return the distinct valid names in order."""
    names: list[str] = []
    for unit in units:
        if not isinstance(unit, str) or not unit:
            result.error("units", f"Unit names must be non-empty strings, got {unit!r}", value=unit)
        elif unit in names:
            result.error("units", f"Unit '{unit}' is declared more than once", value=unit)
        else:
            names.append(unit)
    if not names:
        result.error("units", "At least one unit must be declared")
    return names


def connected_components(units: Sequence[str], edges: Iterable[tuple[str, str]]) -> list[list[str]]:
    """Group *units* into connected components of the undirected edge set.

    Components are listed in order of their first unit, and units keep their
    declaration order within a component.
    """
    parent = {unit: unit for unit in units}

    def find(unit: str) -> str:
        while parent[unit] != unit:
            parent[unit] = parent[parent[unit]]
            unit = parent[unit]
        return unit

    for a, b in edges:
        root_a, root_b = find(a), find(b)
        if root_a != root_b:
            parent[root_b] = root_a

    groups: dict[str, list[str]] = {}
    for unit in units:
        groups.setdefault(find(unit), []).append(unit)
    return list(groups.values())


def validate_definition(
    units: Iterable[Any],
    conversions: Iterable[Any],
) -> ValidationResult:
    """Run validation checks on a unit list and its direct conversions.

    Errors make the definition unusable by a converter. Warnings flag
    definitions that build but are probably not what was intended: a pair
    defined twice, units without any conversion, and graphs that fall apart
    into several components.
    """
    result = ValidationResult()
    names = validate_units(units, result)
    known = set(names)

    seen: set[frozenset[str]] = set()
    edges: list[tuple[str, str]] = []
    for i, item in enumerate(conversions):
        param = f"conversions[{i}]"
        if isinstance(item, (str, bytes)) or not isinstance(item, Sequence) or len(item) != 3:
            result.error(param, f"Expected a (source, target, multiplier) triple, got {item!r}", value=item)
            continue

        source, target, multiplier = item
        ok = validate_multiplier(param, multiplier, result)
        for unit in (source, target):
            if not isinstance(unit, str) or unit not in known:
                result.error(param, f"Unknown unit '{unit}'", value=unit)
                ok = False
        if source == target:
            result.error(param, f"Conversion from '{source}' to itself", value=source)
            ok = False
        if not ok:
            continue

        pair = frozenset((source, target))
        if pair in seen:
            result.warning(
                param,
                f"Conversion between '{source}' and '{target}' is defined more than once; "
                "the first definition wins",
            )
            continue
        seen.add(pair)
        edges.append((source, target))

    linked = {unit for edge in edges for unit in edge}
    for unit in names:
        if unit not in linked and len(names) > 1:
            result.warning("units", f"Unit '{unit}' has no direct conversions", value=unit)

    components = connected_components(names, edges)
    if len(components) > 1:
        listing = "; ".join(", ".join(c) for c in components)
        result.warning("conversions", f"Units form {len(components)} disconnected groups: {listing}")

    result.info(
        "conversions",
        f"{len(names)} units, {len(edges)} direct conversions, {len(components)} connected group(s)",
    )

    return result
