"""
Tests for the Filter Lattice
"""

import pytest

from uniformity import constants
from uniformity.errors import CarrierMismatchError, NotMonotoneError
from uniformity.filters import Filter, HasBasis, tendsto
from uniformity.monotone import MonotoneMap, as_monotone
from uniformity.relations import image
from uniformity.space import power_set

X = frozenset({0, 1, 2})
Y = frozenset({"a", "b"})


def f(x):
    return "b" if x == 2 else "a"


def all_filters(universe):
    return [Filter.principal(universe, k) for k in power_set(universe)]


class TestMembership:
    def test_principal(self):
        F = Filter.principal(X, {0, 1})
        assert {0, 1} in F
        assert X in F
        assert {0} not in F

    def test_top_and_bot(self):
        assert Filter.top(X).mem(X)
        assert not Filter.top(X).mem({0, 1})
        assert Filter.bot(X).mem(set())
        assert Filter.bot(X).is_bot
        assert not Filter.bot(X).ne_bot
        assert Filter.pure(X, 2).ne_bot

    def test_kernel_must_stay_in_carrier(self):
        with pytest.raises(CarrierMismatchError):
            Filter.principal(X, {7})

    def test_generate(self):
        F = Filter.generate(X, [{0, 1}, {1, 2}])
        assert F == Filter.pure(X, 1)
        assert Filter.generate(X, []) == Filter.top(X)

    def test_basis_and_members(self):
        F = Filter.principal(X, {0})
        assert list(F.basis()) == [frozenset({0})]
        members = list(F.members())
        assert len(members) == 4
        assert members[0] == frozenset({0})
        assert all(m in F for m in members)

    def test_eventually_and_frequently(self):
        F = Filter.principal(X, {0, 2})
        assert F.eventually(lambda x: x % 2 == 0)
        assert not F.eventually(lambda x: x == 0)
        assert F.frequently(lambda x: x == 0)
        assert not F.frequently(lambda x: x == 1)


class TestOrder:
    def test_order_is_kernel_inclusion(self):
        finer = Filter.principal(X, {0})
        coarser = Filter.principal(X, {0, 1})
        assert finer <= coarser
        assert finer < coarser
        assert coarser > finer
        assert not coarser <= finer
        assert Filter.bot(X) <= finer <= Filter.top(X)

    def test_different_carriers(self):
        with pytest.raises(CarrierMismatchError):
            Filter.top(X) <= Filter.top(Y)

    def test_meet_and_join(self):
        for F in all_filters(X):
            for G in all_filters(X):
                meet, join = F & G, F | G
                assert meet <= F and meet <= G
                assert F <= join and G <= join
                for H in all_filters(X):
                    if H <= F and H <= G:
                        assert H <= meet
                    if F <= H and G <= H:
                        assert join <= H

    def test_empty_families(self):
        assert Filter.infi(X, []) == Filter.top(X)
        assert Filter.supr(X, []) == Filter.bot(X)

    def test_infi_over_family(self):
        family = [Filter.principal(X, {0, 1}), Filter.principal(X, {1, 2})]
        assert Filter.infi(X, family) == Filter.pure(X, 1)
        assert Filter.supr(X, family) == Filter.top(X)


class TestFunctoriality:
    def test_galois_law(self):
        for F in all_filters(X):
            for G in all_filters(Y):
                assert (F.map(f, Y) <= G) == (F <= G.comap(f, X))

    def test_map_kernel(self):
        F = Filter.principal(X, {0, 1})
        assert F.map(f, Y) == Filter.pure(Y, "a")

    def test_comap_composes(self):
        g = {"a": 0, "b": 1}.get
        G = Filter.pure(X, 0)
        direct = G.comap(lambda x: g(f(x)), X)
        staged = G.comap(g, Y).comap(f, X)
        assert direct == staged

    def test_tendsto(self):
        F = Filter.principal(X, {0, 1})
        assert tendsto(f, F, Filter.pure(Y, "a"))
        assert not tendsto(f, Filter.top(X), Filter.pure(Y, "a"))

    def test_lift_of_principal(self):
        F = Filter.principal(X, {0, 2})
        lifted = F.lift(lambda s: Filter.principal(Y, image(f, s)))
        assert lifted == F.map(f, Y)
        assert F.lift_prime(lambda s: image(f, s), Y) == F.map(f, Y)

    def test_prod(self):
        F = Filter.principal(X, {0, 1})
        G = Filter.pure(Y, "b")
        P = F.prod(G)
        assert P.kernel == frozenset({(0, "b"), (1, "b")})
        assert len(P.universe) == 6


class TestMonotone:
    def test_wrapping(self):
        m = MonotoneMap(lambda s: s, name="identity")
        assert as_monotone(m) is m
        assert as_monotone(len).name == "len"

    def test_check_detects_violation(self):
        complement = MonotoneMap(lambda s: X - s, name="complement")
        with pytest.raises(NotMonotoneError):
            complement.check(Filter.pure(X, 0).members(), X)

    def test_check_compares_list_results_as_sets(self):
        as_list = MonotoneMap(lambda s: sorted(s), name="sorted")
        as_list.check(Filter.principal(X, {1}).members(), X)
        complement = MonotoneMap(lambda s: sorted(X - s), name="sorted complement")
        with pytest.raises(NotMonotoneError):
            complement.check(Filter.principal(X, {1}).members(), X)

    def test_check_on_filter_results(self):
        principal = MonotoneMap(lambda s: Filter.principal(X, s), name="principal")
        principal.check(Filter.pure(X, 0).members(), X)
        with pytest.raises(NotMonotoneError):
            MonotoneMap(lambda s: Filter.principal(X, X - s)).check(Filter.pure(X, 0).members(), X)

    def test_lift_prime_verifies_list_valued_maps(self, monkeypatch):
        monkeypatch.setattr(constants, "VERIFY_MONOTONE", True)
        F = Filter.principal(X, {0, 1})
        assert F.lift_prime(lambda s: sorted(s), X) == F

    def test_lift_prime_verifies_when_enabled(self, monkeypatch):
        monkeypatch.setattr(constants, "VERIFY_MONOTONE", True)
        F = Filter.pure(X, 0)
        assert F.lift_prime(lambda s: s, X) == F
        with pytest.raises(NotMonotoneError):
            F.lift_prime(lambda s: X - s, X)


class TestHasBasis:
    def test_check(self):
        F = Filter.principal(X, {0, 1})
        basis = HasBasis(F, (frozenset({0, 1}), frozenset({0, 1, 2})))
        assert len(basis) == 2
        assert basis.check()
        assert basis.mem_iff({0, 1, 2})
        assert not basis.mem_iff({0})

    def test_check_rejects_non_members(self):
        F = Filter.principal(X, {0, 1})
        assert not HasBasis(F, (frozenset({0}),)).check()
        assert not HasBasis(F, (X,)).check()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
