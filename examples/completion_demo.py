"""
Demonstration of the Completion Extension Theorem

This script walks through the package bottom-up:
1. Filters and uniform cores on a small finite carrier
2. Entourage bases derived by the shrink combinator
3. Extending a map along a dense embedding, on a finite space and on
   the rationals inside the extended rational line
"""

from fractions import Fraction

from uniformity import (
    DenseEmbedding,
    Filter,
    UniformSpace,
    closed_basis,
    setup_logging,
    shrink,
    uniformly_extend,
)
from uniformity.models import (
    NEG_INF,
    POS_INF,
    discrete_space,
    extended_line,
    linked_space,
    rationals_in_extended_line,
)


def print_section(title):
    """Print a formatted section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def demonstrate_filters_and_cores():
    print_section("PART 1: Filters and Uniform Cores")

    space = linked_space()
    print(f"\nSpace: {space}")
    print(f"  Smallest entourage: {len(space.uniformity.kernel)} pairs")
    print(f"  Separated: {space.separated}")
    for x in sorted(space.points):
        print(f"  𝓝 {x} kernel: {sorted(space.nhds(x).kernel)}")

    F = Filter.principal(space.points, {0, 2})
    print(f"\nFilter {F}")
    print(f"  Cauchy: {space.is_cauchy(F)}")
    print(f"  Limit: {space.find_limit(F)}")

    total = discrete_space({0, 1}).sum(discrete_space({0, 1}))
    print(f"\nDisjoint union {total}: separated = {total.separated}")


def demonstrate_entourage_bases():
    print_section("PART 2: Entourage Bases")

    space = linked_space()
    loose = space.uniformity.kernel | {(0, 3), (3, 0)}
    record = shrink(space.core, loose, steps=2)
    print(f"\nShrunk {len(loose)} pairs to {len(record.entourage)} pairs")
    print(f"  Generation {record.generation}: T^{record.power} ⊆ S holds = {record.verify()}")
    print(f"  Closed basis presents 𝓤: {closed_basis(space).check()}")


def demonstrate_finite_extension():
    print_section("PART 3: Extension on a Finite Space")

    alpha = UniformSpace.from_relation({0, 1, 2, 3}, {(0, 1), (2, 3)}, name="α")
    beta = discrete_space({0, 2}, name="β")
    gamma = discrete_space({"a", "b"}, name="γ")
    e = DenseEmbedding(lambda b: b, beta, alpha)
    psi = uniformly_extend(e, {0: "a", 2: "b"}.__getitem__, gamma)

    for a in sorted(alpha.points):
        print(f"  ψ({a}) = {psi(a)}")
    certificate = psi.certify()
    print(f"\nSqueeze certificate ok: {certificate.ok} ({certificate.pairs_checked} pairs)")
    print(f"Continuous extensions found: {len(psi.continuous_extensions())}")


def demonstrate_rational_extension():
    print_section("PART 4: Extending q ↦ 2q from ℚ to the Extended Line")

    e = rationals_in_extended_line()
    samples = [0, 1, Fraction(-7, 3), 100]
    psi = uniformly_extend(
        e,
        lambda q: 2 * q,
        extended_line("γ"),
        modulus=lambda n: 2 * n + 1,
        sample_points=samples,
    )
    for a in samples + [POS_INF, NEG_INF]:
        print(f"  ψ({a}) = {psi(a)}")
    print(f"\nAgrees with f on ℚ samples: {psi.agrees_on(samples)}")


def main():
    setup_logging(level="WARNING")

    print("\n" + "=" * 70)
    print("  UNIFORM SPACES: COMPLETION EXTENSION DEMO")
    print("=" * 70)

    demonstrate_filters_and_cores()
    demonstrate_entourage_bases()
    demonstrate_finite_extension()
    demonstrate_rational_extension()

    print("\n" + "=" * 70 + "\n")


if __name__ == "__main__":
    main()
