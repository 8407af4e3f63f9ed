from dsyms.core.backtrack import Cursor, backtrack


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


class Tree:
    """Every node is a result; the tree is given as a dict of child lists."""

    def __init__(self, edges):
        self.edges = edges

    def root(self):
        return "root"

    def children(self, st):
        return self.edges.get(st, [])

    def extract(self, st):
        return st


def test_partitions_depth_first():
    assert list(backtrack(Partitions(4))) == [
        (1, 1, 1, 1),
        (1, 1, 2),
        (1, 3),
        (2, 2),
        (4,),
    ]


def test_partition_count():
    assert len(list(backtrack(Partitions(10)))) == 42


def test_pre_order():
    tree = Tree({"root": ["a", "b"], "a": ["a1", "a2"], "b": ["b1"]})
    assert list(backtrack(tree)) == ["root", "a", "a1", "a2", "b", "b1"]


def test_advance_returns_none_when_exhausted():
    cursor = backtrack(Tree({}))
    assert cursor.advance() == "root"
    assert cursor.advance() is None
    assert cursor.advance() is None
    assert cursor.exhausted


def test_resume_from_snapshot():
    problem = Partitions(6)
    everything = list(backtrack(problem))

    cursor = backtrack(problem)
    head = [cursor.advance(), cursor.advance(), cursor.advance()]
    snap = cursor.snapshot()

    rest = list(cursor)
    assert head + rest == everything

    resumed = Cursor(problem, snap)
    assert list(resumed) == rest


def test_snapshot_is_independent():
    problem = Partitions(5)
    cursor = backtrack(problem)
    cursor.advance()
    snap = cursor.snapshot()
    list(cursor)
    assert cursor.exhausted
    assert snap
    assert len(list(Cursor(problem, snap))) == len(list(backtrack(problem))) - 1


def test_early_stop_needs_no_cleanup():
    cursor = backtrack(Partitions(8))
    first = next(cursor)
    assert first == (1,) * 8
    # a new traversal is unaffected by the abandoned one
    assert next(backtrack(Partitions(8))) == first
