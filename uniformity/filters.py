"""
Filter Lattice

Filters on a finite carrier: upward-closed, intersection-closed families of
subsets read as "eventually true" conditions.

================================================================================
REPRESENTATION
================================================================================

On a finite carrier every filter is principal: the intersection of all its
members (the *kernel*) is itself a member, and a set is a member exactly when
it contains the kernel. A Filter therefore stores its carrier and its kernel;
``basis()`` yields the kernel as a one-element generating basis. The bottom
filter has the empty kernel and contains every set.

================================================================================
ORDER
================================================================================

F ≤ G iff every member of G is a member of F (F is finer). Meets take the
union of member families (kernel intersection), joins take the intersection
of member families (kernel union). The empty meet is ⊤, the empty join is ⊥.

Operations:
- principal, top, bot, pure, generate
- mem / ``s in F``, basis, members, eventually, frequently, ne_bot
- inf (&), sup (|), infi, supr
- comap, map (a Galois pair: map f F ≤ G ⟺ F ≤ comap f G)
- lift, lift_prime (monotone arguments only)
- prod, tendsto
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations, product
from typing import Any, Callable, FrozenSet, Iterable, Iterator, Tuple

import structlog

from . import constants
from .errors import CarrierMismatchError
from .monotone import MonotoneMap, as_monotone
from .relations import fst, image, preimage, snd

logger = structlog.get_logger("uniformity.filters")


@dataclass(frozen=True)
class Filter:
    """
    A filter on a finite carrier, stored by its kernel.

    Attributes:
        universe: The carrier X
        kernel: Intersection of all members; S is a member iff kernel ⊆ S
    """
    universe: FrozenSet[Any]
    kernel: FrozenSet[Any]

    def __post_init__(self):
        object.__setattr__(self, "universe", frozenset(self.universe))
        object.__setattr__(self, "kernel", frozenset(self.kernel))
        if not self.kernel <= self.universe:
            stray = set(self.kernel - self.universe)
            raise CarrierMismatchError(f"Filter kernel leaves its carrier: {stray!r}")

    def __repr__(self) -> str:
        if self.is_bot:
            return f"Filter(⊥ on {len(self.universe)} points)"
        if self.kernel == self.universe:
            return f"Filter(⊤ on {len(self.universe)} points)"
        return f"Filter(kernel={set(self.kernel)!r})"

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def principal(cls, universe: Iterable[Any], s: Iterable[Any]) -> Filter:
        """𝓟 s: members are exactly the supersets of s."""
        return cls(universe=frozenset(universe), kernel=frozenset(s))

    @classmethod
    def top(cls, universe: Iterable[Any]) -> Filter:
        universe = frozenset(universe)
        return cls(universe=universe, kernel=universe)

    @classmethod
    def bot(cls, universe: Iterable[Any]) -> Filter:
        return cls(universe=frozenset(universe), kernel=frozenset())

    @classmethod
    def pure(cls, universe: Iterable[Any], x: Any) -> Filter:
        return cls.principal(universe, {x})

    @classmethod
    def generate(cls, universe: Iterable[Any], sets: Iterable[Iterable[Any]]) -> Filter:
        """Smallest filter containing every set of the family."""
        universe = frozenset(universe)
        kernel = universe
        for s in sets:
            kernel = kernel & frozenset(s)
        return cls(universe=universe, kernel=kernel)

    @classmethod
    def infi(cls, universe: Iterable[Any], family: Iterable[Filter]) -> Filter:
        """⨅ of a family; the empty meet is ⊤."""
        universe = frozenset(universe)
        kernel = universe
        for F in family:
            if F.universe != universe:
                raise CarrierMismatchError("infi over filters on different carriers")
            kernel = kernel & F.kernel
        return cls(universe=universe, kernel=kernel)

    @classmethod
    def supr(cls, universe: Iterable[Any], family: Iterable[Filter]) -> Filter:
        """⨆ of a family; the empty join is ⊥."""
        universe = frozenset(universe)
        kernel: FrozenSet[Any] = frozenset()
        for F in family:
            if F.universe != universe:
                raise CarrierMismatchError("supr over filters on different carriers")
            kernel = kernel | F.kernel
        return cls(universe=universe, kernel=kernel)

    # -------------------------------------------------------------------------
    # Membership
    # -------------------------------------------------------------------------

    def mem(self, s: Iterable[Any]) -> bool:
        """Monotone membership: s ∈ F iff kernel ⊆ s."""
        return self.kernel <= frozenset(s)

    def __contains__(self, s: Iterable[Any]) -> bool:
        return self.mem(s)

    def basis(self) -> Iterator[FrozenSet[Any]]:
        """Generating basis: every member contains one of these sets."""
        yield self.kernel

    def members(self) -> Iterator[FrozenSet[Any]]:
        """All members, smallest first. Exponential in |universe \\ kernel|."""
        rest = sorted(self.universe - self.kernel, key=repr)
        for k in range(len(rest) + 1):
            for extra in combinations(rest, k):
                yield self.kernel | frozenset(extra)

    @property
    def is_bot(self) -> bool:
        return not self.kernel

    @property
    def ne_bot(self) -> bool:
        """Non-trivial: ∅ is not a member."""
        return bool(self.kernel)

    def eventually(self, p: Callable[[Any], bool]) -> bool:
        """∀ᶠ x in F, p x."""
        return all(p(x) for x in self.kernel)

    def frequently(self, p: Callable[[Any], bool]) -> bool:
        """∃ᶠ x in F, p x  (not eventually not p)."""
        return any(p(x) for x in self.kernel)

    # -------------------------------------------------------------------------
    # Order
    # -------------------------------------------------------------------------

    def _same_carrier(self, other: Filter) -> None:
        if self.universe != other.universe:
            raise CarrierMismatchError("Filters live on different carriers")

    def __le__(self, other: Filter) -> bool:
        self._same_carrier(other)
        return all(self.mem(b) for b in other.basis())

    def __ge__(self, other: Filter) -> bool:
        return other <= self

    def __lt__(self, other: Filter) -> bool:
        return self <= other and self != other

    def __gt__(self, other: Filter) -> bool:
        return other < self

    def inf(self, other: Filter) -> Filter:
        self._same_carrier(other)
        return Filter(universe=self.universe, kernel=self.kernel & other.kernel)

    def sup(self, other: Filter) -> Filter:
        self._same_carrier(other)
        return Filter(universe=self.universe, kernel=self.kernel | other.kernel)

    __and__ = inf
    __or__ = sup

    # -------------------------------------------------------------------------
    # Functoriality
    # -------------------------------------------------------------------------

    def comap(self, f: Callable[[Any], Any], domain: Iterable[Any]) -> Filter:
        """
        Pullback along f: domain → universe.

        A set is a member iff it contains f⁻¹(M) for some member M.
        comap (g ∘ f) = comap f ∘ comap g.
        """
        domain = frozenset(domain)
        return Filter.generate(domain, (preimage(f, b, domain) for b in self.basis()))

    def map(self, f: Callable[[Any], Any], codomain: Iterable[Any]) -> Filter:
        """
        Pushforward along f: universe → codomain.

        A set is a member iff its preimage is a member of self.
        """
        return Filter(universe=frozenset(codomain), kernel=image(f, self.kernel))

    def lift(self, g: Callable[[FrozenSet[Any]], Filter]) -> Filter:
        """
        F.lift g = ⨅_{s ∈ F} g s for monotone g : Set X → Filter Y.

        By monotonicity the meet over the basis equals the meet over all
        members.
        """
        g = self._certified(g)
        results = [g(b) for b in self.basis()]
        return Filter.infi(results[0].universe, results)

    def lift_prime(self, h: Callable[[FrozenSet[Any]], Iterable[Any]], codomain: Iterable[Any]) -> Filter:
        """F.lift' h = F.lift (𝓟 ∘ h) for monotone h : Set X → Set Y."""
        h = self._certified(h)
        codomain = frozenset(codomain)
        return Filter.infi(codomain, (Filter.principal(codomain, h(b)) for b in self.basis()))

    def _certified(self, g: Callable[[FrozenSet[Any]], Any]) -> MonotoneMap:
        g = as_monotone(g)
        if constants.VERIFY_MONOTONE:
            logger.debug("monotone_check", name=g.name, free_points=len(self.universe - self.kernel))
            g.check(self.members(), self.universe)
        return g

    def prod(self, other: Filter) -> Filter:
        """F ×ˢ G = comap fst F ⊓ comap snd G on the product carrier."""
        carrier = frozenset(product(self.universe, other.universe))
        return self.comap(fst, carrier).inf(other.comap(snd, carrier))


def tendsto(f: Callable[[Any], Any], F: Filter, G: Filter) -> bool:
    """Tendsto f F G: map f F ≤ G."""
    return F.map(f, G.universe) <= G


@dataclass(frozen=True)
class HasBasis:
    """
    A family of sets presenting a filter: t ∈ F iff some basis set ⊆ t.

    Attributes:
        filter: The filter being presented
        sets: The basis sets
    """
    filter: Filter
    sets: Tuple[FrozenSet[Any], ...]

    def __iter__(self) -> Iterator[FrozenSet[Any]]:
        return iter(self.sets)

    def __len__(self) -> int:
        return len(self.sets)

    def mem_iff(self, t: Iterable[Any]) -> bool:
        t = frozenset(t)
        return any(b <= t for b in self.sets)

    def check(self) -> bool:
        """Every basis set is a member and every member contains a basis set."""
        return (
            all(b in self.filter for b in self.sets)
            and all(self.mem_iff(m) for m in self.filter.basis())
        )
