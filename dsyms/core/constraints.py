"""Curvature, signature and canonicity tests for branching-number vectors."""

from __future__ import annotations

from fractions import Fraction
from typing import Iterable, List, Optional, Sequence, Tuple

from .model import ChamberSystem, Orbit, OrbitMap
from .orbits import is_loopless, is_weakly_oriented, orbits

# spherical 2-orbifolds with small branchings
ADMISSIBLE_SIGNATURES = frozenset([
    "", "*", "x",
    "532", "432", "332",
    "422", "322", "222",
    "44", "33", "22",
    "*532", "*432", "*332", "3*2",
    "*422", "*322", "*222", "2*4", "2*3", "2*2",
    "*44", "*33", "*22", "4*", "3*", "2*", "4x", "3x", "2x",
])


def curvature(system: ChamberSystem, orbs: Sequence[Orbit], vs: Sequence[int]) -> Fraction:
    result = Fraction(-system.size(), 2)
    for orb, v in zip(orbs, vs):
        result += Fraction(orb.weight, v)
    return result


def is_minimally_hyperbolic(system: ChamberSystem, orbs: Sequence[Orbit], vs: Sequence[int]) -> bool:
    """True if the curvature is negative but lowering any raised entry by one makes it non-negative."""
    curv = curvature(system, orbs, vs)
    if curv >= 0:
        return False

    for orb, v in zip(orbs, vs):
        if v > orb.min_v:
            k = orb.weight
            if curv - Fraction(k, v) + Fraction(k, v - 1) < 0:
                return False

    return True


def signature_key(cones: Iterable[int], corners: Iterable[int], loopless: bool, weakly_oriented: bool) -> str:
    front = "".join(str(v) for v in sorted(cones, reverse=True))
    middle = "" if loopless else "*"
    back = "".join(str(v) for v in sorted(corners, reverse=True))
    cross = "" if weakly_oriented else "x"
    return front + middle + back + cross


def branch_points(system: ChamberSystem, orbs: Sequence[Orbit], vs: Sequence[int]) -> Tuple[List[int], List[int]]:
    """Split the nontrivial branchings into cone points and corners.

    In dimension 2 the orbits of the non-adjacent pair (0, 2) carry a fixed
    branching of 2 and are included as well.
    """
    cones: List[int] = []
    corners: List[int] = []

    if system.dim() == 2:
        for orb in orbits(system, 0, 2):
            if orb.is_chain and len(orb) == 1:
                corners.append(2)
            elif not orb.is_chain and len(orb) == 2:
                cones.append(2)

    for orb, v in zip(orbs, vs):
        if v > 1:
            (corners if orb.is_chain else cones).append(v)

    return cones, corners


def orbifold_signature(
    system: ChamberSystem,
    orbs: Sequence[Orbit],
    vs: Sequence[int],
    loopless: Optional[bool] = None,
    weakly_oriented: Optional[bool] = None,
) -> str:
    """Signature key of ``vs``; pass the loop and orientation flags to skip recomputing them."""
    if loopless is None:
        loopless = is_loopless(system)
    if weakly_oriented is None:
        weakly_oriented = is_weakly_oriented(system)
    cones, corners = branch_points(system, orbs, vs)
    return signature_key(cones, corners, loopless, weakly_oriented)


def is_admissible(key: str) -> bool:
    return key in ADMISSIBLE_SIGNATURES


def is_good_result(
    system: ChamberSystem,
    orbs: Sequence[Orbit],
    vs: Sequence[int],
    curv: Fraction,
    loopless: Optional[bool] = None,
    weakly_oriented: Optional[bool] = None,
    check_signatures: bool = True,
) -> bool:
    """Hyperbolic and flat vectors pass; spherical ones need an admissible signature."""
    if curv <= 0 or not check_signatures:
        return True
    return is_admissible(orbifold_signature(system, orbs, vs, loopless, weakly_oriented))


def permuted(vs: Sequence[int], m: OrbitMap) -> Tuple[int, ...]:
    return tuple(vs[m[k]] for k in range(len(vs)))


def is_canonical(vs: Sequence[int], orbit_maps: Iterable[OrbitMap]) -> bool:
    vs = tuple(vs)
    for m in orbit_maps:
        if permuted(vs, m) > vs:
            return False
    return True
