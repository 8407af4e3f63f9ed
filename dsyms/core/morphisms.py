"""Automorphisms of chamber systems and their action on orbits."""

from __future__ import annotations

from collections import deque
from typing import List, Optional, Sequence

from .model import Automorphism, Chamber, ChamberSystem, Orbit, OrbitMap, OrbitMapError
from .orbits import orbit_index


def morphism(system: ChamberSystem, d0: Chamber) -> Optional[Automorphism]:
    """Extend ``1 -> d0`` to an automorphism, or return ``None`` if that fails.

    The map is grown breadth-first: whenever ``D`` is matched with ``E``, each
    neighbour ``index(i, D)`` must be matched with ``index(i, E)``.
    """
    size = system.size()
    img = [0] * (size + 1)
    img[1] = d0
    queue = deque([(1, d0)])

    while queue:
        D, E = queue.popleft()
        for i in range(system.dim() + 1):
            Di = system.index(i, D)
            Ei = system.index(i, E)
            if Di == 0 and Ei == 0:
                continue
            if Di == 0 or Ei == 0:
                return None
            if img[Di] == 0:
                img[Di] = Ei
                queue.append((Di, Ei))
            elif img[Di] != Ei:
                return None

    result = tuple(img[1:])
    if 0 in result or len(set(result)) != size:
        return None
    return result


def automorphisms(system: ChamberSystem) -> List[Automorphism]:
    """All automorphisms found by extending from each possible image of chamber 1."""
    result: List[Automorphism] = []
    for d0 in range(1, system.size() + 1):
        m = morphism(system, d0)
        if m is not None and m not in result:
            result.append(m)
    return result


def on_orbits(m: Automorphism, orbs: Sequence[Orbit], system: ChamberSystem) -> OrbitMap:
    """The permutation of orbit positions induced by the chamber map ``m``."""
    lookup = orbit_index(orbs)
    orb_map: List[Optional[int]] = [None] * len(orbs)

    for n, orb in enumerate(orbs):
        for D in orb.elements:
            target = lookup[(orb.index, m[D - 1])]
            if orb_map[n] is None:
                orb_map[n] = target
            elif orb_map[n] != target:
                raise OrbitMapError(
                    f"automorphism {m} splits orbit {n} between orbits {orb_map[n]} and {target}"
                )

    return tuple(orb_map)  # type: ignore[arg-type]
