"""
Completion and Extension Engine

Given a dense uniformly inducing e : β → α and a uniformly continuous
f : β → γ into a complete separated γ, build the unique continuous
ψ : α → γ with ψ ∘ e = f.

================================================================================
ALGORITHM (uniformly_extend)
================================================================================

1. For a ∈ α form comap e (𝓝 a) on β. Density keeps it non-trivial, and it
   is Cauchy because 𝓝 a is.
2. Push it forward: map f (comap e (𝓝 a)) is Cauchy in γ because f is
   uniformly continuous.
3. γ's completeness capability (find_limit) supplies its limit c; ψ(a) := c.
   Separation of γ makes c unique.
4. certify() replays the squeeze-by-nested-balls argument on finite spaces:
   for a target entourage D, shrink twice to S with S ○ S ○ S ⊆ D, pull S
   back to an α-entourage m, and for points x₁, x₂ close under m pick
   density witnesses a, b near them; then (ψx₁, fa), (fa, fb), (fb, ψx₂) ∈ S
   puts (ψx₁, ψx₂) in D.
5. Uniqueness needs no search: two continuous maps agreeing on a dense set
   into a separated space agree everywhere. is_extension() tests a
   candidate against that characterisation.

Preconditions are checked once, in uniformly_extend, and raise
PreconditionError; the returned Extension is total.

================================================================================
COMPLETENESS TRANSFER
================================================================================

A Cauchy filter is carried through a uniformly inducing map into a complete
space, its limit is found there, and a preimage limit is read back:
complete_of_inducing, complete_subspace, complete_product, complete_sum.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import product
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Optional, Protocol, Tuple, Union

import structlog

from .core import inl, inr, is_inl, untag
from .embedding import DenseInducing, UniformInducing
from .entourages import comp_comp_symm_mem, open_entourage
from .errors import NoLimitError, PreconditionError
from .filters import Filter
from .fun_space import FunUniformSpace
from .relations import ball, fst, ordered, preimage, prod_map, snd
from .space import UniformSpace

logger = structlog.get_logger("uniformity.completion")

Space = Union[UniformSpace, FunUniformSpace]


class CompleteSeparatedSpace(Protocol):
    """What uniformly_extend asks of its target."""
    separated: bool
    is_complete: bool

    def find_limit(self, F: Any) -> Any:
        ...


def _require_target(target: Space) -> None:
    if not getattr(target, "is_complete", False):
        raise PreconditionError("a complete target", getattr(target, "name", repr(target)))
    if not target.separated:
        raise PreconditionError("a separated target", getattr(target, "name", repr(target)))


def uniformly_extend(embedding: DenseInducing, f: Callable[[Any], Any], target: CompleteSeparatedSpace,
                     modulus: Optional[Callable[[int], int]] = None,
                     sample_points: Optional[Iterable[Any]] = None) -> Extension:
    """
    Extend f along a dense uniformly inducing map.

    Args:
        embedding: Dense inducing e : β → α
        f: Uniformly continuous map β → γ
        target: Complete separated γ
        modulus: Modulus of uniform continuity of f (distance-defined β only)
        sample_points: Points of β the modulus is checked on

    Returns:
        The extension ψ : α → γ

    Raises:
        PreconditionError: a precondition does not hold
    """
    if not isinstance(embedding, DenseInducing):
        raise PreconditionError("a dense inducing map", type(embedding).__name__)
    _require_target(target)

    source = embedding.source
    if isinstance(embedding.target, UniformSpace) and not hasattr(target, "points"):
        raise PreconditionError("an enumerable target", "finite spaces push filters onto a carrier")
    if isinstance(source, UniformSpace) and isinstance(target, UniformSpace):
        if not source.uniformly_continuous(f, target):
            raise PreconditionError("a uniformly continuous map", f"{source.name} → {target.name}")
    elif modulus is not None and sample_points is not None:
        if not source.uniformly_continuous_on(f, target, sample_points, modulus):
            raise PreconditionError("a uniformly continuous map", f"modulus fails on {source.name}")
    else:
        logger.info("uniform_continuity_certified_by_caller", source=source.name)

    return Extension(embedding=embedding, fn=f, target=target)


@dataclass(frozen=True)
class ExtensionCertificate:
    """
    Outcome of Extension.certify.

    Attributes:
        entourages_checked: Target entourages D the squeeze was run for
        pairs_checked: Pairs (x₁, x₂) of α the squeeze was run for
        failures: (D size, x₁, x₂, reason) for every broken step
    """
    entourages_checked: int
    pairs_checked: int
    failures: Tuple[Tuple[int, Any, Any, str], ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failures


@dataclass(frozen=True)
class Extension:
    """
    ψ : α → γ with ψ ∘ e = f.

    Attributes:
        embedding: The dense inducing e : β → α
        fn: The extended map f : β → γ
        target: The complete separated γ
    """
    embedding: DenseInducing
    fn: Callable[[Any], Any]
    target: Space
    _cache: Dict[Any, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def _finite(self) -> bool:
        return isinstance(self.target, UniformSpace) and isinstance(self.embedding.target, UniformSpace)

    def limit_along(self, g: Callable[[Any], Any], a: Any) -> Any:
        """lim of g along comap e (𝓝 a)."""
        F = self.embedding.pullback_nhds(a)
        if isinstance(F, Filter):
            G = F.map(g, self.target.points)
        else:
            G = F.map(g)
        return self.target.find_limit(G)

    def __call__(self, a: Any) -> Any:
        if a in self._cache:
            return self._cache[a]
        value = self.limit_along(self.fn, a)
        self._cache[a] = value
        logger.debug("extension_point_computed", point=repr(a), value=repr(value))
        return value

    # -------------------------------------------------------------------------
    # Checks
    # -------------------------------------------------------------------------

    def agrees_on(self, points: Iterable[Any]) -> bool:
        """ψ(e b) = f(b) for the given points of β."""
        e = self.embedding.fn
        return all(self(e(b)) == self.fn(b) for b in points)

    def is_continuous_at(self, g: Callable[[Any], Any], a: Any) -> bool:
        """
        Continuity of a candidate g : α → γ at a.

        Finite spaces use the neighbourhood filters directly. On
        distance-defined spaces g(a) must be the limit of g ∘ e along
        comap e (𝓝 a).
        """
        if self._finite:
            return self.embedding.target.continuous_at(g, a, self.target)
        e = self.embedding.fn
        try:
            return self.limit_along(lambda b: g(e(b)), a) == g(a)
        except NoLimitError:
            return False

    def is_extension(self, g: Callable[[Any], Any], points_b: Iterable[Any],
                     points_a: Iterable[Any]) -> bool:
        """g agrees with f on e(points_b) and is continuous at every point of points_a."""
        e = self.embedding.fn
        if any(g(e(b)) != self.fn(b) for b in points_b):
            return False
        return all(self.is_continuous_at(g, a) for a in points_a)

    def uniformly_continuous(self) -> bool:
        """ψ is uniformly continuous (finite spaces)."""
        self._require_finite("uniformly_continuous")
        return self.embedding.target.uniformly_continuous(self, self.target)

    def _require_finite(self, what: str) -> None:
        if not self._finite:
            raise PreconditionError("finite spaces", f"{what} enumerates the carrier")

    def continuous_extensions(self) -> List[Dict[Any, Any]]:
        """
        Every continuous g : α → γ with g ∘ e = f, by enumeration.

        Uniqueness says the list has exactly one element (the table of ψ).
        """
        self._require_finite("continuous_extensions")
        alpha = ordered(self.embedding.target.points)
        gamma = ordered(self.target.points)
        source_points = self.embedding.source.points
        found = []
        for values in product(gamma, repeat=len(alpha)):
            table = dict(zip(alpha, values))
            if self.is_extension(table.__getitem__, source_points, alpha):
                found.append(table)
        return found

    def certify(self) -> ExtensionCertificate:
        """
        Replay the three-entourage squeeze for every target basis entourage.

        Raises:
            PreconditionError: f is not uniformly continuous or e is not
                inducing (no entourage to pull back)
        """
        self._require_finite("certify")
        alpha = self.embedding.target
        beta = self.embedding.source
        gamma = self.target
        e, f = self.embedding.fn, self.fn
        beta_square = beta.uniformity.universe

        failures = []
        entourages = 0
        pairs_checked = 0
        for D in gamma.uniformity.basis():
            entourages += 1
            S = comp_comp_symm_mem(gamma.core, D)
            P = frozenset(p for p in beta_square if (f(p[0]), f(p[1])) in S)
            if P not in beta.uniformity:
                raise PreconditionError("a uniformly continuous map", "f does not pull S back to an entourage")
            m = next(
                (m for m in alpha.uniformity.basis()
                 if preimage(prod_map(e, e), m, beta_square) <= P),
                None,
            )
            if m is None:
                raise PreconditionError("a uniformly inducing map", "no α-entourage pulls back into f⁻¹(S)")
            M = comp_comp_symm_mem(alpha.core, open_entourage(alpha, m))

            for x1, x2 in ordered(M):
                pairs_checked += 1
                a = self._density_witness(x1, M)
                b = self._density_witness(x2, M)
                steps = (
                    ((e(a), e(b)) in m, "witness images not m-close"),
                    ((f(a), f(b)) in S, "f(a), f(b) not S-close"),
                    ((self(x1), f(a)) in S, "ψ(x₁), f(a) not S-close"),
                    ((f(b), self(x2)) in S, "f(b), ψ(x₂) not S-close"),
                    ((self(x1), self(x2)) in D, "ψ(x₁), ψ(x₂) not D-close"),
                )
                for holds, reason in steps:
                    if not holds:
                        failures.append((len(D), x1, x2, reason))

        certificate = ExtensionCertificate(entourages, pairs_checked, tuple(failures))
        logger.info(
            "extension_certified",
            ok=certificate.ok,
            entourages=entourages,
            pairs=pairs_checked,
        )
        return certificate

    def _density_witness(self, x: Any, M: Any) -> Any:
        """Some b ∈ β with e(b) ∈ ball(x, M)."""
        near = ball(x, M)
        for b in ordered(self.embedding.source.points):
            if self.embedding.fn(b) in near:
                return b
        raise PreconditionError("a dense range", f"no image point near {x!r}")


# ═══════════════════════════════════════════════════════════════════════════
# COMPLETENESS TRANSFER
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class InducedCompleteness:
    """
    Completeness of a source space pulled back through a uniformly inducing
    map into a complete space: lim F is a point whose image the pushed
    filter converges to. Needs the range to be closed.
    """
    inducing: UniformInducing
    is_complete: bool = True

    @property
    def separated(self) -> bool:
        return self.inducing.source.separated

    @property
    def points(self) -> FrozenSet[Any]:
        return self.inducing.source.points

    @property
    def name(self) -> str:
        return self.inducing.source.name

    def find_limit(self, F: Filter) -> Any:
        source, target = self.inducing.source, self.inducing.target
        if not source.is_cauchy(F):
            raise NoLimitError(f"{F!r} is not Cauchy in {source.name}")
        pushed = F.map(self.inducing.fn, target.points)
        for b in ordered(source.points):
            if target.converges(pushed, self.inducing.fn(b)):
                return b
        raise NoLimitError(f"limit in {target.name} lies outside the range of the map")


def complete_of_inducing(inducing: UniformInducing) -> InducedCompleteness:
    return InducedCompleteness(inducing=inducing)


def complete_subspace(space: UniformSpace, s: Iterable[Any]) -> InducedCompleteness:
    """Completeness of the subspace on s through its inclusion."""
    sub = space.subspace(s)
    return complete_of_inducing(UniformInducing(lambda x: x, sub, space))


@dataclass(frozen=True)
class ProductCompleteness:
    """lim F = (lim map fst F, lim map snd F)."""
    left: UniformSpace
    right: UniformSpace
    is_complete: bool = True

    @property
    def separated(self) -> bool:
        return self.left.separated and self.right.separated

    @property
    def points(self) -> FrozenSet[Any]:
        return frozenset(product(self.left.points, self.right.points))

    @property
    def name(self) -> str:
        return f"{self.left.name}×{self.right.name}"

    def find_limit(self, F: Filter) -> Tuple[Any, Any]:
        return (
            self.left.find_limit(F.map(fst, self.left.points)),
            self.right.find_limit(F.map(snd, self.right.points)),
        )


def complete_product(left: UniformSpace, right: UniformSpace) -> ProductCompleteness:
    return ProductCompleteness(left=left, right=right)


@dataclass(frozen=True)
class SumCompleteness:
    """
    A Cauchy filter on a disjoint union lives eventually in one summand;
    its limit is found there and injected back.
    """
    left: UniformSpace
    right: UniformSpace
    is_complete: bool = True

    @property
    def separated(self) -> bool:
        return self.left.separated and self.right.separated

    @property
    def points(self) -> FrozenSet[Any]:
        return frozenset(inl(x) for x in self.left.points) | frozenset(inr(y) for y in self.right.points)

    @property
    def name(self) -> str:
        return f"{self.left.name}⊕{self.right.name}"

    def find_limit(self, F: Filter) -> Any:
        if not F.ne_bot:
            raise NoLimitError("trivial filter on a disjoint union")
        if F.eventually(is_inl):
            return inl(self.left.find_limit(F.map(untag, self.left.points)))
        if F.eventually(lambda p: not is_inl(p)):
            return inr(self.right.find_limit(F.map(untag, self.right.points)))
        raise NoLimitError("filter meets both summands, so it is not Cauchy")


def complete_sum(left: UniformSpace, right: UniformSpace) -> SumCompleteness:
    return SumCompleteness(left=left, right=right)
