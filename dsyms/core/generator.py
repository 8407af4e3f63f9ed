"""Enumeration of Delaney symbols over a fixed Delaney set.

Every orbit of an adjacent index pair gets a branching number. The search
assigns them in orbit order, starting from the smallest geometrically
meaningful value, and prunes on the sign of the curvature: once a prefix is
hyperbolic, only minimally hyperbolic extensions are kept. Complete vectors
are filtered for admissible spherical signatures and for canonical form
under the automorphisms of the set.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from fractions import Fraction
from typing import FrozenSet, Iterator, List, Optional, Tuple

from .backtrack import Cursor, backtrack
from .constraints import (
    curvature,
    is_canonical,
    is_good_result,
    is_minimally_hyperbolic,
    orbifold_signature,
)
from .dset import DelaneySet, validate
from .model import Automorphism, DSym, Orbit, OrbitMap, SearchOptions
from .morphisms import automorphisms, on_orbits
from .orbits import all_orbits, is_connected, is_loopless, is_weakly_oriented

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DSymState:
    vs: Tuple[int, ...]
    curvature: Fraction
    next: int


class DSymGenerator:
    """Backtracking problem whose results are the symbols over ``dset``.

    Iterating over a generator starts a fresh traversal each time.
    """

    def __init__(self, dset: DelaneySet, options: Optional[SearchOptions] = None) -> None:
        validate(dset)
        self.dset = dset
        self.options = options or SearchOptions()

        self._orbits: Tuple[Orbit, ...] = tuple(all_orbits(dset))
        self._automorphisms: Tuple[Automorphism, ...] = tuple(automorphisms(dset))
        self._orbit_maps: FrozenSet[OrbitMap] = frozenset(
            on_orbits(m, self._orbits, dset) for m in self._automorphisms
        )
        self._loopless = is_loopless(dset)
        self._weakly_oriented = is_weakly_oriented(dset)

        if not is_connected(dset):
            logger.warning(f"Delaney set of size {dset.size()} is not connected; no automorphisms apply")
        logger.debug(
            f"size {dset.size()}: {len(self._orbits)} orbits, "
            f"{len(self._automorphisms)} automorphisms, {len(self._orbit_maps)} orbit maps"
        )

    @property
    def orbits(self) -> Tuple[Orbit, ...]:
        return self._orbits

    @property
    def automorphisms(self) -> Tuple[Automorphism, ...]:
        return self._automorphisms

    @property
    def orbit_maps(self) -> FrozenSet[OrbitMap]:
        return self._orbit_maps

    def root(self) -> DSymState:
        vs = tuple(orb.min_v for orb in self._orbits)
        return DSymState(vs, curvature(self.dset, self._orbits, vs), 0)

    def children(self, st: DSymState) -> List[DSymState]:
        count = len(self._orbits)
        if st.next >= count:
            return []
        if st.curvature < 0:
            return [replace(st, next=count)]

        result: List[DSymState] = []
        for v in range(st.vs[st.next], self.options.max_branching + 1):
            vs = st.vs[:st.next] + (v,) + st.vs[st.next + 1:]
            curv = curvature(self.dset, self._orbits, vs)

            if curv >= 0 or is_minimally_hyperbolic(self.dset, self._orbits, vs):
                result.append(DSymState(vs, curv, st.next + 1))

            if curv < 0:
                break

        return result

    def extract(self, st: DSymState) -> Optional[DSym]:
        if (
            st.next >= len(self._orbits)
            and self.is_good_result(st)
            and is_canonical(st.vs, self._orbit_maps)
        ):
            return DSym(self.dset, st.vs)
        return None

    def is_good_result(self, st: DSymState) -> bool:
        return is_good_result(
            self.dset,
            self._orbits,
            st.vs,
            st.curvature,
            self._loopless,
            self._weakly_oriented,
            self.options.check_signatures,
        )

    def signature(self, vs: Tuple[int, ...]) -> str:
        return orbifold_signature(self.dset, self._orbits, vs, self._loopless, self._weakly_oriented)

    def __iter__(self) -> Iterator[DSym]:
        return self.cursor()

    def cursor(self) -> Cursor[DSymState, DSym]:
        return backtrack(self)


def dsyms(dset: DelaneySet, options: Optional[SearchOptions] = None) -> Iterator[DSym]:
    """Convenience wrapper yielding the symbols over ``dset``."""
    return iter(DSymGenerator(dset, options))
