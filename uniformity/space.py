"""
Uniform Spaces

A UniformSpace is a UniformCore together with its topology. The topology is
derived from the uniformity:

    IsOpen s  ⟺  ∀ x ∈ s, {(p₁, p₂) | p₁ = x → p₂ ∈ s} ∈ 𝓤

and the neighbourhood filter of x is the pullback of 𝓤 along y ↦ (x, y).
A caller may supply its own open-set predicate; it is compared with the
derived one once, on construction, and the two are interchangeable after.

Finite uniform spaces are complete: a non-trivial Cauchy filter converges
to every point of its kernel. find_limit exposes that as the completeness
capability the completion engine asks of its target.
"""

from __future__ import annotations

from itertools import combinations
from typing import Any, Callable, FrozenSet, Iterable, Iterator, Optional

import structlog

from . import constants
from .core import UniformCore
from .errors import AxiomViolation, CarrierMismatchError, NoLimitError
from .filters import Filter, tendsto
from .relations import Rel, comp_rel, image, ordered, prod_map, symmetrize

logger = structlog.get_logger("uniformity.space")


def power_set(points: Iterable[Any]) -> Iterator[FrozenSet[Any]]:
    """All subsets of a finite carrier, smallest first."""
    items = ordered(points)
    for k in range(len(items) + 1):
        for combo in combinations(items, k):
            yield frozenset(combo)


class UniformSpace:
    """
    Uniform space on a finite carrier.

    Args:
        core: The validated uniform core
        is_open: Optional open-set predicate; must agree with the one derived
            from the core
        name: Label used in logs
    """

    def __init__(self, core: UniformCore,
                 is_open: Optional[Callable[[FrozenSet[Any]], bool]] = None,
                 name: str = "space"):
        self.core = core
        self.name = name
        self._is_open = is_open
        if is_open is not None:
            self._check_topology(is_open)

    def __repr__(self) -> str:
        return f"UniformSpace({self.name}, {len(self.points)} points)"

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def of_entourage(cls, points: Iterable[Any], U: Rel, name: str = "space") -> UniformSpace:
        return cls(UniformCore.of_entourage(points, U), name=name)

    @classmethod
    def from_relation(cls, points: Iterable[Any], relation: Rel, name: str = "space") -> UniformSpace:
        return cls(UniformCore.from_relation(points, relation), name=name)

    @classmethod
    def discrete(cls, points: Iterable[Any], name: str = "discrete") -> UniformSpace:
        return cls(UniformCore.bot(points), name=name)

    @classmethod
    def indiscrete(cls, points: Iterable[Any], name: str = "indiscrete") -> UniformSpace:
        return cls(UniformCore.top(points), name=name)

    @property
    def points(self) -> FrozenSet[Any]:
        return self.core.points

    @property
    def uniformity(self) -> Filter:
        return self.core.uniformity

    @property
    def separated(self) -> bool:
        return self.core.separated

    @property
    def is_complete(self) -> bool:
        return True

    # -------------------------------------------------------------------------
    # Topology
    # -------------------------------------------------------------------------

    def _check_topology(self, is_open: Callable[[FrozenSet[Any]], bool]) -> None:
        if len(self.points) > constants.MAX_EXHAUSTIVE_POINTS:
            logger.warning(
                "exhaustive_check_skipped",
                space=self.name,
                points=len(self.points),
                limit=constants.MAX_EXHAUSTIVE_POINTS,
            )
            return
        for s in power_set(self.points):
            if bool(is_open(s)) != self.derived_is_open(s):
                raise AxiomViolation("topology", f"open-set predicate disagrees with 𝓤 on {set(s)!r}")

    def derived_is_open(self, s: Iterable[Any]) -> bool:
        s = frozenset(s)
        square = self.uniformity.universe
        return all(
            self.uniformity.mem(frozenset(p for p in square if p[0] != x or p[1] in s))
            for x in s
        )

    def is_open(self, s: Iterable[Any]) -> bool:
        if self._is_open is not None:
            return bool(self._is_open(frozenset(s)))
        return self.derived_is_open(s)

    def to_topology(self) -> FrozenSet[FrozenSet[Any]]:
        """All open sets (enumerates the power set)."""
        return frozenset(s for s in power_set(self.points) if self.is_open(s))

    def nhds(self, x: Any) -> Filter:
        """𝓝 x = comap (y ↦ (x, y)) 𝓤."""
        return self.uniformity.comap(lambda y: (x, y), self.points)

    def nhds_right(self, x: Any) -> Filter:
        """comap (y ↦ (y, x)) 𝓤; equal to nhds x because 𝓤 is symmetric."""
        return self.uniformity.comap(lambda y: (y, x), self.points)

    def interior(self, s: Iterable[Any]) -> FrozenSet[Any]:
        s = frozenset(s)
        return frozenset(x for x in self.points if s in self.nhds(x))

    def closure(self, s: Iterable[Any]) -> FrozenSet[Any]:
        s = frozenset(s)
        return frozenset(
            x for x in self.points
            if self.nhds(x).inf(Filter.principal(self.points, s)).ne_bot
        )

    def closure_via_entourages(self, s: Iterable[Any]) -> FrozenSet[Any]:
        """closure s = ⋂_{V ∈ 𝓤} {x | ball(x, V) meets s}."""
        s = frozenset(s)
        result = self.points
        for V in self.uniformity.basis():
            result = result & frozenset(x for x in self.points if any((x, y) in V for y in s))
        return result

    def closure_of_relation(self, t: Rel) -> Rel:
        """
        Closure of a relation in X × X: ⋂ V ○ t ○ V over symmetric entourages.

        The meet is attained on the basis since V ○ t ○ V is monotone in V.
        """
        result = self.uniformity.universe
        for V in self.uniformity.basis():
            W = symmetrize(V)
            result = result & comp_rel(comp_rel(W, t), W)
        return result

    def is_closed(self, s: Iterable[Any]) -> bool:
        s = frozenset(s)
        return self.closure(s) == s

    def dense(self, s: Iterable[Any]) -> bool:
        return self.closure(s) == self.points

    def dense_range(self, f: Callable[[Any], Any], domain: Iterable[Any]) -> bool:
        return self.dense(image(f, domain))

    # -------------------------------------------------------------------------
    # Continuity
    # -------------------------------------------------------------------------

    def continuous_at(self, f: Callable[[Any], Any], x: Any, target: UniformSpace) -> bool:
        return tendsto(f, self.nhds(x), target.nhds(f(x)))

    def continuous(self, f: Callable[[Any], Any], target: UniformSpace) -> bool:
        return all(self.continuous_at(f, x, target) for x in self.points)

    def uniformly_continuous(self, f: Callable[[Any], Any], target: UniformSpace) -> bool:
        """Tendsto (f × f) 𝓤 𝓤."""
        return tendsto(prod_map(f, f), self.uniformity, target.uniformity)

    # -------------------------------------------------------------------------
    # Cauchy filters and limits
    # -------------------------------------------------------------------------

    def _own(self, F: Filter) -> None:
        if F.universe != self.points:
            raise CarrierMismatchError(f"filter does not live on {self.name}")

    def is_cauchy(self, F: Filter) -> bool:
        """F is non-trivial and F ×ˢ F ≤ 𝓤."""
        self._own(F)
        return F.ne_bot and F.prod(F) <= self.uniformity

    def converges(self, F: Filter, x: Any) -> bool:
        self._own(F)
        return F <= self.nhds(x)

    def find_limit(self, F: Filter) -> Any:
        """
        A point the Cauchy filter F converges to.

        Unique when the space is separated; otherwise the first candidate in
        the carrier's deterministic order.

        Raises:
            NoLimitError: F is trivial or not Cauchy
        """
        if not self.is_cauchy(F):
            raise NoLimitError(f"{F!r} is not a Cauchy filter on {self.name}")
        candidates = [x for x in ordered(self.points) if self.converges(F, x)]
        logger.debug("limit_found", space=self.name, candidates=len(candidates))
        return candidates[0]

    # -------------------------------------------------------------------------
    # Constructions
    # -------------------------------------------------------------------------

    def comap(self, f: Callable[[Any], Any], domain: Iterable[Any], name: str = "induced") -> UniformSpace:
        return UniformSpace(self.core.comap(f, domain), name=name)

    def subspace(self, s: Iterable[Any], name: str = "subspace") -> UniformSpace:
        s = frozenset(s)
        if not s <= self.points:
            raise CarrierMismatchError("subspace must be a subset of the carrier")
        return self.comap(lambda x: x, s, name=name)

    def product(self, other: UniformSpace) -> UniformSpace:
        return UniformSpace(self.core.product(other.core), name=f"{self.name}×{other.name}")

    def sum(self, other: UniformSpace) -> UniformSpace:
        return UniformSpace(self.core.sum(other.core), name=f"{self.name}⊕{other.name}")

    def square(self) -> UniformSpace:
        """X × X; its topology is the one entourages are open/closed in."""
        return self.product(self)
