"""
Distance-Defined Uniform Spaces

UniformSpace.ofFun for arbitrary carriers: a distance-like function d with
d(x, x) = 0, d(x, y) = d(y, x) and the triangle inequality defines the
uniformity with basic entourages

    U_n = {(x, y) | d(x, y) < r_n},   r_n = radius(n) = 1/(n+1)

The axioms hold by arithmetic: U_n contains the diagonal, is symmetric, and
U_{2n+1} ○ U_{2n+1} ⊆ U_n since 2·r_{2n+1} = r_n.

Nothing here is enumerable. Neighbourhood filters are SequentialFilters
whose levels are balls carrying their centre as chosen point, and
completeness is a capability: a `limit` callable that reads the limit of a
Cauchy filter off the chosen points of its basis levels.
"""

from __future__ import annotations

from itertools import combinations
from typing import Any, Callable, Iterable, List, Optional

import structlog

from . import constants
from .constants import radius
from .errors import NoLimitError, PreconditionError
from .sequential import Region, SequentialFilter

logger = structlog.get_logger("uniformity.fun_space")


class FunUniformSpace:
    """
    Uniform space generated by a distance-like function.

    Args:
        dist: Pseudo-distance on the carrier (values comparable with Fraction)
        contains: Carrier membership predicate; everything by default
        limit: Completeness capability, samples ↦ limit point
        separated: Whether d(x, y) = 0 forces x = y
        name: Label used in logs and errors
    """

    def __init__(self, dist: Callable[[Any, Any], Any],
                 contains: Optional[Callable[[Any], bool]] = None,
                 limit: Optional[Callable[[List[Any]], Any]] = None,
                 separated: bool = True,
                 name: str = "fun_space"):
        self.dist = dist
        self._contains = contains
        self._limit = limit
        self.separated = separated
        self.name = name

    def __repr__(self) -> str:
        return f"FunUniformSpace({self.name})"

    @property
    def is_complete(self) -> bool:
        return self._limit is not None

    def contains(self, x: Any) -> bool:
        return True if self._contains is None else bool(self._contains(x))

    # -------------------------------------------------------------------------
    # Entourages and neighbourhoods
    # -------------------------------------------------------------------------

    def entourage(self, n: int) -> Region:
        r = radius(n)
        return Region(
            contains=lambda p: self.contains(p[0]) and self.contains(p[1]) and self.dist(p[0], p[1]) < r,
            label=f"U_{n}",
        )

    @staticmethod
    def half(n: int) -> int:
        """Level m with U_m ○ U_m ⊆ U_n."""
        return 2 * n + 1

    def ball(self, x: Any, n: int) -> Region:
        r = radius(n)
        return Region(
            contains=lambda y: self.contains(y) and self.dist(x, y) < r,
            chosen=lambda: x,
            label=f"ball({x!r}, {r})",
        )

    def nhds(self, x: Any) -> SequentialFilter:
        if not self.contains(x):
            raise PreconditionError(f"a point of {self.name}", repr(x))
        return SequentialFilter(lambda n: self.ball(x, n), label=f"𝓝 {x!r}")

    # -------------------------------------------------------------------------
    # Constructions
    # -------------------------------------------------------------------------

    def comap(self, f: Callable[[Any], Any],
              contains: Optional[Callable[[Any], bool]] = None,
              name: str = "induced") -> FunUniformSpace:
        """Induced structure: d'(x, y) = d(f x, f y)."""
        return FunUniformSpace(
            dist=lambda x, y: self.dist(f(x), f(y)),
            contains=contains,
            separated=self.separated,
            name=name,
        )

    def product(self, other: FunUniformSpace) -> FunUniformSpace:
        """
        Product structure with the max distance, so U_n of the product is
        the product of the factors' U_n. Limits are taken coordinatewise when
        both factors are complete.
        """
        limit = None
        if self._limit is not None and other._limit is not None:
            left, right = self._limit, other._limit

            def limit(samples: List[Any]) -> Any:
                return left([s[0] for s in samples]), right([s[1] for s in samples])

        return FunUniformSpace(
            dist=lambda p, q: max(self.dist(p[0], q[0]), other.dist(p[1], q[1])),
            contains=lambda p: (isinstance(p, tuple) and len(p) == 2
                                and self.contains(p[0]) and other.contains(p[1])),
            limit=limit,
            separated=self.separated and other.separated,
            name=f"{self.name}×{other.name}",
        )

    # -------------------------------------------------------------------------
    # Probes
    # -------------------------------------------------------------------------

    def looks_cauchy(self, samples: List[Any]) -> bool:
        """Trailing samples are pairwise closer than r_{len/2}."""
        if not samples:
            return False
        tail = samples[-constants.STABILITY_WINDOW:]
        r = radius(len(samples) // 2)
        return all(self.dist(a, b) < r for a, b in combinations(tail, 2))

    def uniformly_continuous_on(self, f: Callable[[Any], Any], target: FunUniformSpace,
                                points: Iterable[Any], modulus: Callable[[int], int],
                                levels: int = 8) -> bool:
        """
        Check a modulus of uniform continuity on sample points.

        Args:
            f: The map under test
            target: Codomain structure
            points: Sample points of this space
            modulus: n ↦ m such that (f × f)(U_m) ⊆ U_n is claimed
            levels: Target levels n checked
        """
        pairs = list(combinations(list(points), 2))
        for n in range(levels):
            m = modulus(n)
            for x, y in pairs:
                if self.dist(x, y) < radius(m) and not target.dist(f(x), f(y)) < radius(n):
                    logger.debug("modulus_broken", space=self.name, level=n, x=repr(x), y=repr(y))
                    return False
        return True

    # -------------------------------------------------------------------------
    # Completeness
    # -------------------------------------------------------------------------

    def find_limit(self, F: SequentialFilter, depth: Optional[int] = None) -> Any:
        """
        Limit of a Cauchy filter, read off the chosen points of its levels.

        Raises:
            PreconditionError: the space carries no completeness capability
            NoLimitError: the sampled levels do not look Cauchy
        """
        if self._limit is None:
            raise PreconditionError("a complete space", f"{self.name} has no limit capability")
        samples = F.samples(depth)
        if not self.looks_cauchy(samples):
            raise NoLimitError(f"{F!r} does not look Cauchy in {self.name}")
        value = self._limit(samples)
        logger.debug("limit_found", space=self.name, filter=F.label, value=repr(value))
        return value
