"""
Tests for the Completion and Extension Engine
"""

from fractions import Fraction

import pytest

from uniformity.completion import (
    Extension,
    InducedCompleteness,
    complete_product,
    complete_subspace,
    complete_sum,
    uniformly_extend,
)
from uniformity.core import inl, inr
from uniformity.embedding import DenseEmbedding, DenseInducing, UniformInducing
from uniformity.errors import NoLimitError, PreconditionError
from uniformity.filters import Filter
from uniformity.models import (
    NEG_INF,
    POS_INF,
    discrete_space,
    extended_line,
    indiscrete_space,
    line_witness,
    linked_space,
    rationals_in_extended_line,
    two_point_discrete,
)
from uniformity.space import UniformSpace

SAMPLE_RATIONALS = [0, 1, -3, Fraction(1, 2), Fraction(-7, 3), 100]


def identity(x):
    return x


def double(q):
    return 2 * q


def shifted_witness(a, n):
    if a == POS_INF:
        return Fraction(n + 1) + Fraction(1, n + 1)
    if a == NEG_INF:
        return -Fraction(n + 1) - Fraction(1, n + 1)
    return a + Fraction(1, 10 * (n + 1))


@pytest.fixture
def finite_extension():
    """α has blocks {0, 1} and {2, 3}; β = {0, 2}; γ = {"a", "b"}."""
    alpha = UniformSpace.from_relation({0, 1, 2, 3}, {(0, 1), (2, 3)}, name="α")
    beta = discrete_space({0, 2}, name="β")
    gamma = discrete_space({"a", "b"}, name="γ")
    e = DenseEmbedding(identity, beta, alpha)
    return uniformly_extend(e, {0: "a", 2: "b"}.__getitem__, gamma)


@pytest.fixture
def rational_extension():
    e = rationals_in_extended_line()
    return uniformly_extend(
        e,
        double,
        extended_line("γ"),
        modulus=lambda n: 2 * n + 1,
        sample_points=SAMPLE_RATIONALS,
    )


class TestFiniteExtension:
    def test_values(self, finite_extension):
        assert isinstance(finite_extension, Extension)
        assert [finite_extension(a) for a in (0, 1, 2, 3)] == ["a", "a", "b", "b"]

    def test_agrees_on_dense_part(self, finite_extension):
        assert finite_extension.agrees_on([0, 2])

    def test_uniformly_continuous(self, finite_extension):
        assert finite_extension.uniformly_continuous()

    def test_unique_continuous_extension(self, finite_extension):
        tables = finite_extension.continuous_extensions()
        assert tables == [{0: "a", 1: "a", 2: "b", 3: "b"}]

    def test_candidate_differing_off_the_dense_part(self, finite_extension):
        candidate = {0: "a", 1: "b", 2: "b", 3: "b"}.__getitem__
        assert not finite_extension.is_extension(candidate, [0, 2], [0, 1, 2, 3])
        assert finite_extension.is_extension(finite_extension, [0, 2], [0, 1, 2, 3])

    def test_certify(self, finite_extension):
        certificate = finite_extension.certify()
        assert certificate.ok
        assert certificate.entourages_checked == 1
        assert certificate.pairs_checked == 8


class TestPreconditions:
    def test_target_not_separated(self):
        alpha = indiscrete_space({0, 1})
        e = DenseEmbedding(identity, alpha, alpha)
        with pytest.raises(PreconditionError):
            uniformly_extend(e, identity, indiscrete_space({0, 1}))

    def test_embedding_not_dense(self):
        space = discrete_space({0, 1})
        with pytest.raises(PreconditionError):
            uniformly_extend(UniformInducing(identity, space, space), identity, space)

    def test_map_not_uniformly_continuous(self):
        alpha = indiscrete_space({0, 1})
        e = DenseEmbedding(identity, alpha, alpha)
        with pytest.raises(PreconditionError):
            uniformly_extend(e, {0: "a", 1: "b"}.__getitem__, discrete_space({"a", "b"}))

    def test_target_without_limits(self):
        e = rationals_in_extended_line()
        incomplete = extended_line().comap(identity, name="no limits")
        with pytest.raises(PreconditionError):
            uniformly_extend(e, double, incomplete)

    def test_broken_modulus(self):
        e = rationals_in_extended_line()
        with pytest.raises(PreconditionError):
            uniformly_extend(e, double, extended_line(), modulus=lambda n: n,
                             sample_points=[0, Fraction(1, 2)])

    def test_finite_only_checks(self, rational_extension):
        with pytest.raises(PreconditionError):
            rational_extension.certify()
        with pytest.raises(PreconditionError):
            rational_extension.continuous_extensions()


class TestRationalExtension:
    def test_agrees_exactly_on_rationals(self, rational_extension):
        assert rational_extension.agrees_on(SAMPLE_RATIONALS)
        assert rational_extension(Fraction(1, 3)) == Fraction(2, 3)

    def test_values_at_infinity(self, rational_extension):
        assert rational_extension(POS_INF) == POS_INF
        assert rational_extension(NEG_INF) == NEG_INF

    def test_extension_is_continuous(self, rational_extension):
        assert rational_extension.is_extension(
            rational_extension, SAMPLE_RATIONALS, [POS_INF, NEG_INF, Fraction(1, 3)]
        )

    def test_uniqueness_against_second_candidate(self, rational_extension):
        def candidate(x):
            if x == POS_INF:
                return Fraction(0)
            return 2 * x

        assert not rational_extension.is_extension(candidate, SAMPLE_RATIONALS, [POS_INF])
        assert not rational_extension.is_continuous_at(candidate, POS_INF)
        assert rational_extension.is_continuous_at(candidate, NEG_INF)


class TestMovingWitnesses:
    """Extensions whose density witnesses never sit on the point itself."""

    @pytest.fixture
    def shifted_extension(self):
        e = DenseEmbedding(identity, rationals_in_extended_line().source, extended_line(),
                           witness=shifted_witness)
        return uniformly_extend(e, double, extended_line("γ"), modulus=lambda n: 2 * n + 1,
                                sample_points=SAMPLE_RATIONALS)

    def test_exact_on_rationals(self, shifted_extension):
        assert shifted_extension(0) == 0
        assert shifted_extension(Fraction(1, 3)) == Fraction(2, 3)
        assert shifted_extension.agrees_on(SAMPLE_RATIONALS)

    def test_limit_of_non_stationary_filter(self, shifted_extension):
        F = shifted_extension.embedding.pullback_nhds(POS_INF)
        samples = F.samples()
        assert len(set(samples)) == len(samples)
        assert shifted_extension(POS_INF) == POS_INF
        assert shifted_extension(NEG_INF) == NEG_INF

    def test_continuous_at_infinity(self, shifted_extension):
        assert shifted_extension.is_continuous_at(shifted_extension, POS_INF)


class TestDerivedEmbeddings:
    def test_extend_along_composite(self):
        line = extended_line()
        composite = rationals_in_extended_line().compose(
            DenseInducing(identity, line, line, witness=line_witness)
        )
        psi = uniformly_extend(composite, double, extended_line("γ"), modulus=lambda n: 2 * n + 1,
                               sample_points=SAMPLE_RATIONALS)
        assert psi.agrees_on(SAMPLE_RATIONALS)
        assert psi(POS_INF) == POS_INF
        assert psi(NEG_INF) == NEG_INF

    def test_extend_along_product(self):
        e = rationals_in_extended_line()
        target = extended_line().product(extended_line())
        psi = uniformly_extend(e.prod(e), lambda p: (2 * p[0], 2 * p[1]), target,
                               modulus=lambda n: 2 * n + 1,
                               sample_points=[(0, 1), (Fraction(1, 2), -3), (100, Fraction(-7, 3))])
        assert psi((1, 2)) == (2, 4)
        assert psi((POS_INF, Fraction(1, 2))) == (POS_INF, 1)
        assert psi((NEG_INF, POS_INF)) == (NEG_INF, POS_INF)


class TestCompletenessTransfer:
    def test_subspace(self):
        space = linked_space()
        completeness = complete_subspace(space, {0, 3})
        assert completeness.separated
        assert completeness.find_limit(Filter.pure({0, 3}, 3)) == 3
        with pytest.raises(NoLimitError):
            completeness.find_limit(Filter.principal({0, 3}, {0, 3}))

    def test_separated_follows_the_source(self):
        linked = linked_space()
        completeness = InducedCompleteness(inducing=UniformInducing(identity, linked, linked))
        assert not completeness.separated
        assert complete_subspace(linked, {0, 1}).separated is False

    def test_product(self):
        left, right = two_point_discrete(), linked_space()
        completeness = complete_product(left, right)
        prod = left.product(right)
        assert not completeness.separated
        assert completeness.find_limit(Filter.pure(prod.points, (1, 2))) == (1, 0)

    def test_sum(self):
        left, right = two_point_discrete(), two_point_discrete("x", "y")
        completeness = complete_sum(left, right)
        total = left.sum(right)
        assert completeness.separated
        assert completeness.find_limit(Filter.pure(total.points, inl(0))) == inl(0)
        assert completeness.find_limit(Filter.pure(total.points, inr("y"))) == inr("y")
        with pytest.raises(NoLimitError):
            completeness.find_limit(Filter.principal(total.points, {inl(0), inr("x")}))
        with pytest.raises(NoLimitError):
            completeness.find_limit(Filter.bot(total.points))

    def test_extend_into_transferred_target(self, finite_extension):
        e = finite_extension.embedding
        target = complete_subspace(discrete_space({"a", "b", "c"}), {"a", "b"})
        ext = uniformly_extend(e, finite_extension.fn, target)
        assert target.points == frozenset({"a", "b"})
        assert [ext(a) for a in (0, 1, 2, 3)] == ["a", "a", "b", "b"]

    def test_extend_into_product_target(self, finite_extension):
        e = finite_extension.embedding
        target = complete_product(two_point_discrete("a", "b"), two_point_discrete())
        ext = uniformly_extend(e, lambda b: (finite_extension.fn(b), b // 2), target)
        assert ext(3) == ("b", 1)

    def test_finite_source_needs_enumerable_target(self, finite_extension):
        with pytest.raises(PreconditionError):
            uniformly_extend(finite_extension.embedding, lambda b: Fraction(b), extended_line())


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
