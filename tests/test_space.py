"""
Tests for Uniform Spaces
"""

import pytest
from structlog.testing import capture_logs

from uniformity.errors import AxiomViolation, CarrierMismatchError, NoLimitError
from uniformity.filters import Filter
from uniformity.models import discrete_space, indiscrete_space, linked_space
from uniformity.relations import id_rel
from uniformity.space import UniformSpace


@pytest.fixture
def linked():
    return linked_space()


class TestNeighbourhoods:
    def test_left_and_right_agree(self, linked):
        for x in linked.points:
            assert linked.nhds(x) == linked.nhds_right(x)

    def test_nhds_kernels(self, linked):
        assert linked.nhds(0).kernel == frozenset({0, 1, 2})
        assert linked.nhds(3).kernel == frozenset({3})


class TestTopology:
    def test_open_sets(self, linked):
        assert linked.is_open({0, 1, 2})
        assert linked.is_open({3})
        assert not linked.is_open({0})
        assert linked.to_topology() == frozenset({
            frozenset(),
            frozenset({3}),
            frozenset({0, 1, 2}),
            frozenset({0, 1, 2, 3}),
        })

    def test_interior(self, linked):
        assert linked.interior({0, 1}) == frozenset()
        assert linked.interior({0, 1, 2}) == frozenset({0, 1, 2})

    def test_closure(self, linked):
        assert linked.closure({0}) == frozenset({0, 1, 2})
        assert linked.closure({3}) == frozenset({3})
        for s in ({0}, {1, 3}, set()):
            assert linked.closure(s) == linked.closure_via_entourages(s)
        assert linked.is_closed({3})
        assert not linked.is_closed({0})

    def test_density(self, linked):
        assert linked.dense({0, 3})
        assert not linked.dense({0})
        assert linked.dense_range(lambda b: 3 * b, {0, 1})

    def test_closure_of_relation(self):
        space = discrete_space({0, 1, 2})
        t = frozenset({(0, 1)})
        assert space.closure_of_relation(t) == t
        assert indiscrete_space({0, 1}).closure_of_relation(t) == frozenset(
            {(0, 0), (0, 1), (1, 0), (1, 1)}
        )

    def test_supplied_topology_accepted(self, linked):
        space = UniformSpace(linked.core, is_open=linked.derived_is_open, name="checked")
        assert space.is_open({3})

    def test_supplied_topology_rejected(self, linked):
        with pytest.raises(AxiomViolation) as exc:
            UniformSpace(linked.core, is_open=lambda s: True)
        assert exc.value.axiom == "topology"

    def test_large_carrier_skips_check(self):
        points = range(11)
        with capture_logs() as logs:
            space = UniformSpace(UniformSpace.discrete(points).core, is_open=lambda s: True)
        assert space.is_open({0})
        assert any(entry["event"] == "exhaustive_check_skipped" for entry in logs)


class TestContinuity:
    def test_identity_into_discrete(self, linked):
        target = discrete_space(linked.points)
        identity = lambda x: x
        assert not linked.continuous_at(identity, 0, target)
        assert linked.continuous_at(identity, 3, target)
        assert not linked.continuous(identity, target)
        assert not linked.uniformly_continuous(identity, target)
        assert target.uniformly_continuous(identity, linked)

    def test_collapse_blocks(self, linked):
        target = discrete_space({"block", "alone"})
        collapse = lambda x: "alone" if x == 3 else "block"
        assert linked.continuous(collapse, target)
        assert linked.uniformly_continuous(collapse, target)


class TestCauchyAndLimits:
    def test_is_cauchy(self, linked):
        assert linked.is_cauchy(Filter.pure(linked.points, 0))
        assert linked.is_cauchy(Filter.principal(linked.points, {0, 2}))
        assert not linked.is_cauchy(Filter.principal(linked.points, {0, 3}))
        assert not linked.is_cauchy(Filter.bot(linked.points))

    def test_filter_on_other_carrier(self, linked):
        with pytest.raises(CarrierMismatchError):
            linked.is_cauchy(Filter.pure({0, 1}, 0))

    def test_find_limit(self, linked):
        # not separated: first candidate in carrier order
        assert linked.find_limit(Filter.pure(linked.points, 1)) == 0
        assert linked.find_limit(Filter.pure(linked.points, 3)) == 3
        assert discrete_space({0, 1}).find_limit(Filter.pure({0, 1}, 1)) == 1

    def test_no_limit(self, linked):
        with pytest.raises(NoLimitError):
            linked.find_limit(Filter.principal(linked.points, {0, 3}))

    def test_converges(self, linked):
        F = Filter.pure(linked.points, 2)
        assert linked.converges(F, 0)
        assert not linked.converges(F, 3)


class TestConstructions:
    def test_subspace(self, linked):
        sub = linked.subspace({0, 3})
        assert sub.points == frozenset({0, 3})
        assert sub.separated
        with pytest.raises(CarrierMismatchError):
            linked.subspace({9})

    def test_product_and_sum(self, linked):
        two = discrete_space({"a", "b"})
        assert len(linked.product(two).points) == 8
        assert len(linked.sum(two).points) == 6
        assert len(linked.square().points) == 16

    def test_separation(self, linked):
        assert not linked.separated
        assert discrete_space({0, 1}).separated
        assert discrete_space({0, 1}).uniformity.kernel == id_rel({0, 1})


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
