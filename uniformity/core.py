"""
Uniform Space Core

A uniform core on a finite carrier X is a filter 𝓤 on X × X (the
*uniformity*; its members are *entourages*) subject to three axioms:

    (refl)  𝓟 IdRel ≤ 𝓤                    every entourage contains the diagonal
    (symm)  map swap 𝓤 ≤ 𝓤                 swapping coordinates keeps entourages
    (comp)  𝓤.lift' (V ↦ V ○ V) ≤ 𝓤        every entourage contains some V ○ V

The axioms are checked once, on construction, as filter inequalities.
Afterwards a core is an opaque immutable value: everything downstream may
assume them.

Cores on a fixed carrier form a complete lattice:
    ⊥ = 𝓟 IdRel (discrete), ⊤ = ⊤ filter (indiscrete),
    inf = filter inf, sup = inf of all cores above both operands.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import product
from typing import Any, Callable, FrozenSet, Iterable, Iterator

import structlog

from .errors import AxiomViolation, CarrierMismatchError
from .filters import Filter
from .monotone import MonotoneMap
from .relations import (
    Rel,
    ball,
    comp_rel,
    equivalence_closure,
    fst,
    id_rel,
    pairs,
    prod_map,
    snd,
    swap,
)

logger = structlog.get_logger("uniformity.core")

DOUBLE = MonotoneMap(lambda V: comp_rel(V, V), name="V ○ V")


def inl(x: Any) -> tuple:
    """Left injection into a disjoint union."""
    return ("inl", x)


def inr(y: Any) -> tuple:
    """Right injection into a disjoint union."""
    return ("inr", y)


def is_inl(p: tuple) -> bool:
    return p[0] == "inl"


def untag(p: tuple) -> Any:
    return p[1]


@dataclass(frozen=True)
class UniformCore:
    """
    A uniformity on a finite carrier, validated once.

    Attributes:
        points: The carrier X
        uniformity: Filter on X × X satisfying refl / symm / comp
    """
    points: FrozenSet[Any]
    uniformity: Filter

    def __post_init__(self):
        object.__setattr__(self, "points", frozenset(self.points))
        if self.uniformity.universe != pairs(self.points):
            raise CarrierMismatchError("uniformity must be a filter on points × points")
        self._validate()
        logger.debug(
            "core_validated",
            points=len(self.points),
            kernel_pairs=len(self.uniformity.kernel),
        )

    def _validate(self) -> None:
        U = self.uniformity
        if not Filter.principal(U.universe, id_rel(self.points)) <= U:
            missing = sorted(id_rel(self.points) - U.kernel, key=repr)
            raise AxiomViolation("refl", f"entourages miss diagonal pairs {missing!r}")
        if not U.map(swap, U.universe) <= U:
            raise AxiomViolation("symm", "uniformity is not invariant under swap")
        if not U.lift_prime(DOUBLE, U.universe) <= U:
            raise AxiomViolation("comp", "some entourage contains no V ○ V")

    def __repr__(self) -> str:
        return f"UniformCore({len(self.points)} points, kernel={len(self.uniformity.kernel)} pairs)"

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def of_entourage(cls, points: Iterable[Any], U: Rel) -> UniformCore:
        """Core whose entourages are the supersets of U."""
        points = frozenset(points)
        return cls(points=points, uniformity=Filter.principal(pairs(points), U))

    @classmethod
    def from_relation(cls, points: Iterable[Any], relation: Rel) -> UniformCore:
        """Finest core whose every entourage contains `relation`."""
        points = frozenset(points)
        return cls.of_entourage(points, equivalence_closure(frozenset(relation), points))

    @classmethod
    def bot(cls, points: Iterable[Any]) -> UniformCore:
        """Discrete uniformity 𝓟 IdRel."""
        points = frozenset(points)
        return cls.of_entourage(points, id_rel(points))

    @classmethod
    def top(cls, points: Iterable[Any]) -> UniformCore:
        """Indiscrete uniformity: X × X is the only entourage."""
        points = frozenset(points)
        return cls(points=points, uniformity=Filter.top(pairs(points)))

    @classmethod
    def infi(cls, points: Iterable[Any], cores: Iterable[UniformCore]) -> UniformCore:
        """Meet of a family (filter meet); the empty meet is ⊤."""
        points = frozenset(points)
        cores = list(cores)
        for c in cores:
            if c.points != points:
                raise CarrierMismatchError("infi over cores on different carriers")
        return cls(points=points, uniformity=Filter.infi(pairs(points), (c.uniformity for c in cores)))

    @classmethod
    def supr(cls, points: Iterable[Any], cores: Iterable[UniformCore]) -> UniformCore:
        """
        Join of a family: the meet of every core lying above all of them.

        The cores above the family are exactly those whose smallest
        entourage contains the union of the family's smallest entourages,
        so their meet is the core generated by that union. The empty join
        is ⊥.
        """
        points = frozenset(points)
        cores = list(cores)
        for c in cores:
            if c.points != points:
                raise CarrierMismatchError("supr over cores on different carriers")
        upper = Filter.supr(pairs(points), (c.uniformity for c in cores))
        return cls.from_relation(points, upper.kernel)

    # -------------------------------------------------------------------------
    # Lattice
    # -------------------------------------------------------------------------

    def __le__(self, other: UniformCore) -> bool:
        return self.uniformity <= other.uniformity

    def __ge__(self, other: UniformCore) -> bool:
        return other.uniformity <= self.uniformity

    def inf(self, other: UniformCore) -> UniformCore:
        return UniformCore.infi(self.points, (self, other))

    def sup(self, other: UniformCore) -> UniformCore:
        return UniformCore.supr(self.points, (self, other))

    __and__ = inf
    __or__ = sup

    # -------------------------------------------------------------------------
    # Entourages
    # -------------------------------------------------------------------------

    def is_entourage(self, V: Iterable[Any]) -> bool:
        return self.uniformity.mem(V)

    def entourages(self) -> Iterator[Rel]:
        return self.uniformity.members()

    def ball(self, x: Any, V: Rel) -> FrozenSet[Any]:
        return ball(x, V)

    @property
    def separation_relation(self) -> Rel:
        """⋂ 𝓤: pairs no entourage can tell apart."""
        return self.uniformity.kernel

    @property
    def separated(self) -> bool:
        return self.separation_relation == id_rel(self.points)

    # -------------------------------------------------------------------------
    # Constructions
    # -------------------------------------------------------------------------

    def comap(self, f: Callable[[Any], Any], domain: Iterable[Any]) -> UniformCore:
        """Induced core: pullback of 𝓤 along f × f."""
        domain = frozenset(domain)
        return UniformCore(
            points=domain,
            uniformity=self.uniformity.comap(prod_map(f, f), pairs(domain)),
        )

    def product(self, other: UniformCore) -> UniformCore:
        """Product core: meet of the pullbacks along both projections."""
        carrier = frozenset(product(self.points, other.points))
        square = pairs(carrier)
        left = self.uniformity.comap(prod_map(fst, fst), square)
        right = other.uniformity.comap(prod_map(snd, snd), square)
        return UniformCore(points=carrier, uniformity=left.inf(right))

    def sum(self, other: UniformCore) -> UniformCore:
        """
        Disjoint-union core: *join* of the pushforwards along the injections.

        Each pushforward only relates points of its own summand, so the
        smallest entourage never relates a left point to a right point.
        """
        carrier = frozenset(inl(x) for x in self.points) | frozenset(inr(y) for y in other.points)
        square = pairs(carrier)
        left = self.uniformity.map(prod_map(inl, inl), square)
        right = other.uniformity.map(prod_map(inr, inr), square)
        return UniformCore(points=carrier, uniformity=left.sup(right))
