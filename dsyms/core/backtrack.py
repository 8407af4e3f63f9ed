"""Generic lazy backtracking over an implicit enumeration tree.

A problem describes its tree through three functions: ``root`` gives the
state at the root, ``children`` lists the states below a node, and
``extract`` turns a node state into a finished result or returns ``None``
for an unfinished one. Only the path from the root to the current node is
ever held in memory.

Example::

    class Partitions:
        def __init__(self, n):
            self.n = n

        def root(self):
            return ((), self.n, 1)

        def children(self, st):
            xs, left, top = st
            return [(xs + (i,), left - i, i) for i in range(top, left + 1)]

        def extract(self, st):
            return st[0] if st[1] == 0 else None

    for p in backtrack(Partitions(5)):
        print(p)
"""

from __future__ import annotations

import copy
from typing import Generic, Iterator, List, Optional, Protocol, Sequence, TypeVar

S = TypeVar("S")
R = TypeVar("R")
R_co = TypeVar("R_co", covariant=True)

Stack = List[List[S]]


class BackTracker(Protocol[S, R_co]):
    def root(self) -> S: ...

    def children(self, st: S) -> Sequence[S]: ...

    def extract(self, st: S) -> Optional[R_co]: ...


class Cursor(Generic[S, R]):
    """Position of a depth-first traversal of a ``BackTracker`` tree.

    The position is a stack of stacks: for each node on the path from the
    root, the siblings still to be visited, in reverse order so that the
    next one is last. The current node is the last entry of the last list.
    ``advance`` mutates this stack in place; use ``snapshot`` to keep a
    position around.
    """

    def __init__(self, problem: BackTracker[S, R], stack: Optional[Stack] = None) -> None:
        self.problem = problem
        self.stack: Stack = [[problem.root()]] if stack is None else stack

    def advance(self) -> Optional[R]:
        """Return the next result, or ``None`` once the tree is exhausted."""
        stack = self.stack

        while stack:
            current = stack[-1][-1]
            value = self.problem.extract(current)
            nxt = list(self.problem.children(current))

            if nxt:
                nxt.reverse()
                stack.append(nxt)
            else:
                # drop to the deepest level that still has unvisited siblings
                while stack and len(stack[-1]) < 2:
                    stack.pop()
                if stack:
                    stack[-1].pop()

            if value is not None:
                return value

        return None

    def snapshot(self) -> Stack:
        return copy.deepcopy(self.stack)

    @property
    def exhausted(self) -> bool:
        return not self.stack

    def __iter__(self) -> Iterator[R]:
        return self

    def __next__(self) -> R:
        value = self.advance()
        if value is None:
            raise StopIteration
        return value


def backtrack(problem: BackTracker[S, R]) -> Cursor[S, R]:
    """Start a fresh traversal of ``problem``'s tree."""
    return Cursor(problem)
