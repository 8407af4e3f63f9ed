from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from .model import Chamber, ChamberSystem, InvalidDelaneySetError


def validate(system: ChamberSystem) -> None:
    """Raise ``InvalidDelaneySetError`` unless every index function is a partial involution."""
    size = system.size()
    dim = system.dim()
    if size < 1:
        raise InvalidDelaneySetError(f"size must be positive, got {size}")
    if dim < 0:
        raise InvalidDelaneySetError(f"dimension must be non-negative, got {dim}")
    for i in range(dim + 1):
        for D in range(1, size + 1):
            E = system.index(i, D)
            if E == 0:
                continue
            if not 1 <= E <= size:
                raise InvalidDelaneySetError(f"index {i} maps {D} to {E}, outside 1..{size}")
            back = system.index(i, E)
            if back != D:
                raise InvalidDelaneySetError(
                    f"index {i} is not an involution: {D} -> {E} -> {back}"
                )


@dataclass(frozen=True)
class DelaneySet:
    """Immutable chamber system with ``dim + 1`` index functions.

    ``ops[i][D - 1]`` is the image of chamber ``D`` under index function
    ``i``; 0 marks an undefined value.
    """
    ops: Tuple[Tuple[Chamber, ...], ...]

    def __post_init__(self) -> None:
        if not self.ops:
            raise InvalidDelaneySetError("a Delaney set needs at least one index function")
        lengths = {len(op) for op in self.ops}
        if len(lengths) != 1:
            raise InvalidDelaneySetError(f"index tables differ in length: {sorted(lengths)}")
        validate(self)

    @classmethod
    def from_lists(cls, ops: Sequence[Sequence[int]]) -> "DelaneySet":
        try:
            return cls(tuple(tuple(int(E) for E in op) for op in ops))
        except TypeError as exc:
            raise InvalidDelaneySetError(f"index tables must be lists of integers: {ops!r}") from exc

    def size(self) -> int:
        return len(self.ops[0])

    def dim(self) -> int:
        return len(self.ops) - 1

    def index(self, i: int, D: Chamber) -> Chamber:
        return self.ops[i][D - 1]
