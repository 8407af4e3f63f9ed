from fractions import Fraction

import pytest

from dsyms.core.constraints import is_good_result, orbifold_signature, permuted
from dsyms.core.dset import DelaneySet
from dsyms.core.generator import DSymGenerator, DSymState, dsyms
from dsyms.core.model import DSym, InvalidDelaneySetError, SearchOptions
from dsyms.core.orbits import all_orbits

SINGLE = DelaneySet(((1,), (1,), (1,)))
SWAP = DelaneySet(((2, 1), (1, 2), (1, 2)))
ODD = DelaneySet(((2, 1, 3), (1, 3, 2), (3, 2, 1)))
SQUARE = DelaneySet(((2, 1, 4, 3), (4, 3, 2, 1), (2, 1, 4, 3)))


def test_single_chamber_symbols():
    result = [sym.vs for sym in DSymGenerator(SINGLE)]
    assert result == [
        (3, 3), (3, 4), (3, 5), (3, 6), (3, 7),
        (4, 3), (4, 4), (4, 5),
        (5, 3), (5, 4),
        (6, 3),
        (7, 3),
    ]


def test_root_state():
    gen = DSymGenerator(SINGLE)
    assert gen.root() == DSymState((3, 3), Fraction(1, 6), 0)


def test_children_of_root():
    gen = DSymGenerator(SINGLE)
    kids = gen.children(gen.root())
    assert [k.vs for k in kids] == [(3, 3), (4, 3), (5, 3), (6, 3), (7, 3)]
    assert all(k.next == 1 for k in kids)
    assert kids[-1].curvature == Fraction(-1, 42)


def test_hyperbolic_state_has_single_child():
    gen = DSymGenerator(SINGLE)
    st = DSymState((7, 3), Fraction(-1, 42), 1)
    assert gen.children(st) == [DSymState((7, 3), Fraction(-1, 42), 2)]


def test_complete_state_has_no_children():
    gen = DSymGenerator(SINGLE)
    assert gen.children(DSymState((3, 3), Fraction(1, 6), 2)) == []


def test_over_hyperbolic_branch_pruned():
    gen = DSymGenerator(SINGLE)
    kids = gen.children(DSymState((6, 3), Fraction(0), 1))
    assert [k.vs for k in kids] == [(6, 3)]


def test_extract_returns_symbol():
    gen = DSymGenerator(SINGLE)
    assert gen.extract(DSymState((3, 3), Fraction(1, 6), 2)) == DSym(SINGLE, (3, 3))
    assert gen.extract(DSymState((3, 3), Fraction(1, 6), 1)) is None


def test_max_branching_option():
    result = [sym.vs for sym in dsyms(SINGLE, SearchOptions(max_branching=5))]
    assert len(result) == 8
    assert max(max(vs) for vs in result) == 5


def test_inadmissible_signature_dropped():
    gen = DSymGenerator(ODD)
    st = DSymState((1, 1), Fraction(1, 2), 2)
    assert gen.signature(st.vs) == "*x"
    assert gen.extract(st) is None

    lax = DSymGenerator(ODD, SearchOptions(check_signatures=False))
    assert lax.extract(st) == DSym(ODD, (1, 1))


def test_generator_filter_matches_constraints():
    for dset in [SINGLE, SWAP, ODD]:
        gen = DSymGenerator(dset)
        orbs = all_orbits(dset)
        vs = gen.root().vs
        curv = gen.root().curvature
        assert gen.signature(vs) == orbifold_signature(dset, orbs, vs)
        assert gen.is_good_result(gen.root()) == is_good_result(dset, orbs, vs, curv)


def test_cycle_orbit_symbols():
    gen = DSymGenerator(SQUARE)
    assert [o.weight for o in gen.orbits] == [2, 2]
    assert gen.root().curvature == 0
    assert [sym.vs for sym in gen] == [(2, 2), (2, 3), (3, 2)]


def test_isomorphs_rejected():
    result = [sym.vs for sym in DSymGenerator(SWAP)]
    assert (2, 4, 3) in result
    assert (2, 3, 4) not in result


@pytest.mark.parametrize("dset", [SINGLE, SWAP, SQUARE])
def test_results_are_canonical_representatives(dset):
    gen = DSymGenerator(dset)
    result = [sym.vs for sym in gen]
    assert len(result) == len(set(result))
    for vs in result:
        for m in gen.orbit_maps:
            assert permuted(vs, m) <= vs
    # no two results lie in the same automorphism orbit
    classes = {max(permuted(vs, m) for m in gen.orbit_maps) for vs in result}
    assert len(classes) == len(result)


@pytest.mark.parametrize("dset", [SINGLE, SWAP, SQUARE])
def test_results_respect_bounds(dset):
    gen = DSymGenerator(dset)
    for sym in gen:
        assert len(sym.vs) == len(gen.orbits)
        for orb, v in zip(gen.orbits, sym.vs):
            assert orb.min_v <= v <= 7


def test_orbits_round_trip():
    gen = DSymGenerator(SWAP)
    for sym in gen:
        orbs = all_orbits(sym.dset)
        assert len(orbs) == len(gen.orbits)
        assert [o.is_chain for o in orbs] == [o.is_chain for o in gen.orbits]


def test_restartable():
    gen = DSymGenerator(SWAP)
    assert list(gen) == list(gen)


def test_cursor_resumes_from_snapshot():
    gen = DSymGenerator(SINGLE)
    cursor = gen.cursor()
    cursor.advance()
    snap = cursor.snapshot()
    rest = [sym.vs for sym in cursor]
    resumed = type(cursor)(gen, snap)
    assert [sym.vs for sym in resumed] == rest


def test_read_only_derived_data():
    gen = DSymGenerator(SWAP)
    assert gen.automorphisms == ((1, 2), (2, 1))
    assert gen.orbit_maps == frozenset({(0, 1, 2), (0, 2, 1)})
    assert len(gen.orbits) == 3


def test_malformed_system_rejected_up_front():
    class Broken:
        def size(self):
            return 2

        def dim(self):
            return 2

        def index(self, i, D):
            return 1

    with pytest.raises(InvalidDelaneySetError):
        DSymGenerator(Broken())


def test_symbol_accessors():
    sym = DSym(SWAP, (2, 4, 3))
    assert sym.curvature == Fraction(1, 12)
    assert sym.m(0, 1, 1) == 4
    assert sym.m(1, 2, 1) == 4
    assert sym.m(1, 2, 2) == 3
    assert sym.v(0, 2, 1) == 1
    assert sym.m(0, 2, 1) == 2


def test_symbol_orbits_computed_once():
    sym = DSym(SQUARE, (2, 3))
    assert sym.orbits is sym.orbits
    assert sym.curvature == Fraction(-1, 3)
    assert [sym.r(0, 1, D) for D in range(1, 5)] == [2, 2, 2, 2]
    assert [sym.v(1, 2, D) for D in range(1, 5)] == [3, 3, 3, 3]
    assert sym == DSym(SQUARE, (2, 3))
