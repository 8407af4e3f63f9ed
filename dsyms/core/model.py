from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from fractions import Fraction
from typing import TYPE_CHECKING, Dict, Optional, Protocol, Tuple

if TYPE_CHECKING:  # pragma: no cover
    from .dset import DelaneySet


Chamber = int
Automorphism = Tuple[int, ...]
OrbitMap = Tuple[int, ...]


class InvalidDelaneySetError(ValueError):
    """A chamber system violates the range or involution requirements."""


class OrbitMapError(RuntimeError):
    """An automorphism does not map orbits onto orbits."""


class SymbolSyntaxError(ValueError):
    """Text or YAML data that does not describe a Delaney set or symbol."""


class ChamberSystem(Protocol):
    """Read-only view of a Delaney set used by the search."""

    def size(self) -> int: ...

    def dim(self) -> int: ...

    def index(self, i: int, D: Chamber) -> Chamber: ...


@dataclass(frozen=True)
class Orbit:
    """Chambers connected by alternating the index functions ``index`` and ``partner``."""
    index: int
    elements: Tuple[Chamber, ...]
    is_chain: bool
    partner: Optional[int] = None

    def __len__(self) -> int:
        return len(self.elements)

    @property
    def pair(self) -> Tuple[int, int]:
        return (self.index, self.index + 1 if self.partner is None else self.partner)

    @property
    def r(self) -> int:
        return len(self) if self.is_chain else (len(self) + 1) // 2

    @property
    def min_v(self) -> int:
        return -(-3 // self.r)

    @property
    def weight(self) -> int:
        """Numerator of the orbit's curvature contribution."""
        return 1 if self.is_chain else 2


@dataclass(frozen=True)
class SearchOptions:
    """Tunable parameters of the branching-number search."""
    max_branching: int = 7
    check_signatures: bool = True

    def __post_init__(self) -> None:
        if self.max_branching < 1:
            raise ValueError(f"max_branching must be positive, got {self.max_branching}")


@dataclass(frozen=True)
class DSym:
    """A Delaney set together with one branching number per orbit."""
    dset: "DelaneySet"
    vs: Tuple[int, ...]

    def size(self) -> int:
        return self.dset.size()

    def dim(self) -> int:
        return self.dset.dim()

    def index(self, i: int, D: Chamber) -> Chamber:
        return self.dset.index(i, D)

    @cached_property
    def orbits(self) -> Tuple[Orbit, ...]:
        from .orbits import all_orbits

        return tuple(all_orbits(self.dset))

    @cached_property
    def curvature(self) -> Fraction:
        from .constraints import curvature

        return curvature(self.dset, self.orbits, self.vs)

    @cached_property
    def _orbit_lookup(self) -> Dict[Tuple[int, Chamber], int]:
        from .orbits import orbit_index

        return orbit_index(self.orbits)

    def _orbit_number(self, i: int, j: int, D: Chamber) -> Optional[int]:
        if abs(i - j) != 1:
            return None
        try:
            return self._orbit_lookup[(min(i, j), D)]
        except KeyError:
            raise KeyError(f"chamber {D} has no orbit for indices {i},{j}") from None

    def v(self, i: int, j: int, D: Chamber) -> int:
        if not 1 <= D <= self.size():
            return 0
        n = self._orbit_number(i, j, D)
        if n is not None:
            return self.vs[n]
        if i != j and self.index(i, D) == self.index(j, D):
            return 2
        return 1

    def r(self, i: int, j: int, D: Chamber) -> int:
        if not 1 <= D <= self.size():
            return 0
        n = self._orbit_number(i, j, D)
        if n is not None:
            return self.orbits[n].r
        if i != j and self.index(i, D) == self.index(j, D):
            return 1
        return 2

    def m(self, i: int, j: int, D: Chamber) -> int:
        return self.r(i, j, D) * self.v(i, j, D)
