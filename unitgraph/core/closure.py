"""Closure engine: derive new conversions by composing known ones.

Given ``A→B`` and ``B→C`` in the store, ``A→C`` is derived with multiplier
``m(A→B) * m(B→C)``. Candidates are scanned in a fixed order:

- A: units in registry declaration order
- B: A's cached neighbours in store insertion order
- C: B's cached neighbours in store insertion order

The first ``(A, B, C)`` with ``A != C`` and ``A→C`` not yet cached wins. When
several paths join the same two units their products may differ in the last
few bits; the fixed order commits to the first path found, and a cached edge
is never replaced.
"""

from __future__ import annotations

import logging

from unitgraph.core.registry import UnitRegistry
from unitgraph.core.store import ConversionStore

logger = logging.getLogger(__name__)


def derive_one(registry: UnitRegistry, store: ConversionStore) -> bool:
    """Derive and cache a single new conversion.

    Args:
        registry: Units in scan order.
        store: Store to read from and insert into.

    Returns:
        True if a conversion (and its inverse) was inserted, False if the
        store is already at its fixpoint.

    Raises:
        InvalidMultiplier: If the composed multiplier overflows or underflows.
    """
    for a in registry:
        for b, a_to_b in store.neighbors(a):
            for c, b_to_c in store.neighbors(b):
                if c == a or store.contains(a, c):
                    continue
                derived = a_to_b.combine(b_to_c)
                store.add(derived)
                logger.debug(
                    "Derived %s → %s via %s: %.10g × %.10g = %.10g",
                    a,
                    c,
                    b,
                    a_to_b.multiplier,
                    b_to_c.multiplier,
                    derived.multiplier,
                )
                return True
    return False


def saturate(registry: UnitRegistry, store: ConversionStore) -> int:
    """Run :func:`derive_one` until the store reaches its fixpoint.

    Each productive step adds two edges and the store holds at most
    ``n * (n - 1)`` edges, so the loop always terminates. Every step rescans
    from the first unit, which makes this an offline/diagnostic operation.

    Returns:
        Number of derivation steps taken (0 if already saturated).
    """
    steps = 0
    while derive_one(registry, store):
        steps += 1
    logger.info(
        "Saturated %d units after %d derivations (%d conversions cached)",
        len(registry),
        steps,
        len(store),
    )
    return steps
