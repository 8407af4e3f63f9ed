"""Orbit decomposition and simple structural predicates for chamber systems."""

from __future__ import annotations

from collections import deque
from typing import Dict, List, Optional, Sequence, Tuple

from .model import Chamber, ChamberSystem, Orbit


def orbits(system: ChamberSystem, i: int, j: Optional[int] = None) -> List[Orbit]:
    """Return the orbits of the index pair ``(i, j)``, ``j`` defaulting to ``i + 1``.

    Each orbit is traced by applying ``i`` and ``j`` alternately, starting
    with ``i``. A chamber that is fixed (or left undefined) by one of the two
    functions ends a chain; the walk then turns around at that chamber and
    carries on with the other function. The trace is complete once it is back
    at its start chamber with ``i`` up next.
    """
    if j is None:
        j = i + 1
    partner = None if j == i + 1 else j
    seen = [False] * (system.size() + 1)
    result: List[Orbit] = []

    for D in range(1, system.size() + 1):
        if seen[D]:
            continue
        elements = [D]
        seen[D] = True
        is_chain = False
        E, k = D, i

        while True:
            Ek = system.index(k, E)
            if Ek == E or Ek == 0:
                is_chain = True
            else:
                E = Ek
            k = j if k == i else i

            if not seen[E]:
                seen[E] = True
                elements.append(E)

            if E == D and k == i:
                break

        result.append(Orbit(i, tuple(elements), is_chain, partner))

    return result


def all_orbits(system: ChamberSystem) -> List[Orbit]:
    """Orbits of all adjacent index pairs, ordered by pair index."""
    result: List[Orbit] = []
    for i in range(system.dim()):
        result.extend(orbits(system, i))
    return result


def orbit_index(orbs: Sequence[Orbit]) -> Dict[Tuple[int, Chamber], int]:
    """Map ``(pair index, chamber)`` to the position of its orbit in ``orbs``."""
    lookup: Dict[Tuple[int, Chamber], int] = {}
    for n, orb in enumerate(orbs):
        for D in orb.elements:
            lookup[(orb.index, D)] = n
    return lookup


def is_loopless(system: ChamberSystem) -> bool:
    for i in range(system.dim() + 1):
        for D in range(1, system.size() + 1):
            if system.index(i, D) == D:
                return False
    return True


def partial_orientation(system: ChamberSystem) -> List[int]:
    """Two-colour the chambers with +1/-1 across every edge that moves a chamber.

    Returned list is indexed by chamber, position 0 is unused. Every connected
    component is seeded at its smallest chamber with +1.
    """
    ori = [0] * (system.size() + 1)

    for seed in range(1, system.size() + 1):
        if ori[seed]:
            continue
        ori[seed] = 1
        queue = deque([seed])
        while queue:
            D = queue.popleft()
            for i in range(system.dim() + 1):
                Di = system.index(i, D)
                if Di and Di != D and not ori[Di]:
                    ori[Di] = -ori[D]
                    queue.append(Di)

    return ori


def is_weakly_oriented(system: ChamberSystem) -> bool:
    ori = partial_orientation(system)
    for i in range(system.dim() + 1):
        for D in range(1, system.size() + 1):
            Di = system.index(i, D)
            if Di and Di != D and ori[Di] == ori[D]:
                return False
    return True


def is_connected(system: ChamberSystem) -> bool:
    seen = {1}
    queue = deque([1])
    while queue:
        D = queue.popleft()
        for i in range(system.dim() + 1):
            Di = system.index(i, D)
            if Di and Di not in seen:
                seen.add(Di)
                queue.append(Di)
    return len(seen) == system.size()
