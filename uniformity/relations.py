"""
Relation Algebra on Pairs

Plain set operations on binary relations, independent of any filter:

Structure:
    id_rel(X)        - Diagonal {(x, x)}
    swap_rel(V)      - {(y, x) | (x, y) ∈ V}
    symmetrize(V)    - V ∩ swap(V)

Composition:
    V ○ W            - {(x, y) | ∃z, (x, z) ∈ V ∧ (z, y) ∈ W}
    comp_pow(V, n)   - V ○ V ○ ... ○ V (n factors)

Balls:
    ball(x, V)       - {y | (x, y) ∈ V}

Matrices:
    relation_matrix  - Boolean adjacency matrix over an ordered carrier
    equivalence_closure - Smallest equivalence relation containing V

A relation is a frozenset of 2-tuples. The composition convention is fixed:
the middle point is the *second* coordinate of the left factor.
"""

from __future__ import annotations

from collections import defaultdict
from itertools import product
from typing import Any, Callable, FrozenSet, Iterable, List, Sequence, Tuple

import numpy as np

Pair = Tuple[Any, Any]
Rel = FrozenSet[Pair]


# ═══════════════════════════════════════════════════════════════════════════
# CARRIER HELPERS
# ═══════════════════════════════════════════════════════════════════════════

def ordered(universe: Iterable[Any]) -> List[Any]:
    """Deterministic ordering of a carrier (points may be of mixed types)."""
    return sorted(universe, key=repr)


def pairs(universe: FrozenSet[Any]) -> Rel:
    """The full relation X × X."""
    return frozenset(product(universe, universe))


def image(f: Callable[[Any], Any], s: Iterable[Any]) -> FrozenSet[Any]:
    return frozenset(f(x) for x in s)


def preimage(f: Callable[[Any], Any], s: FrozenSet[Any], domain: Iterable[Any]) -> FrozenSet[Any]:
    return frozenset(x for x in domain if f(x) in s)


def prod_map(f: Callable[[Any], Any], g: Callable[[Any], Any]) -> Callable[[Pair], Pair]:
    """(f × g)(a, b) = (f a, g b)."""
    def mapped(p: Pair) -> Pair:
        return (f(p[0]), g(p[1]))
    return mapped


def fst(p: Pair) -> Any:
    return p[0]


def snd(p: Pair) -> Any:
    return p[1]


# ═══════════════════════════════════════════════════════════════════════════
# STRUCTURE
# ═══════════════════════════════════════════════════════════════════════════

def id_rel(universe: Iterable[Any]) -> Rel:
    """IdRel: the diagonal of the carrier."""
    return frozenset((x, x) for x in universe)


def swap(p: Pair) -> Pair:
    return (p[1], p[0])


def swap_rel(V: Rel) -> Rel:
    return frozenset(swap(p) for p in V)


def is_symmetric(V: Rel) -> bool:
    return swap_rel(V) == V


def symmetrize(V: Rel) -> Rel:
    """
    V ∩ swap(V).

    Idempotent, monotone, always symmetric and always contained in V.
    """
    return V & swap_rel(V)


def is_reflexive(V: Rel, universe: Iterable[Any]) -> bool:
    return id_rel(universe) <= V


def is_transitive(V: Rel) -> bool:
    return comp_rel(V, V) <= V


# ═══════════════════════════════════════════════════════════════════════════
# COMPOSITION
# ═══════════════════════════════════════════════════════════════════════════

def comp_rel(V: Rel, W: Rel) -> Rel:
    """
    V ○ W = {(x, y) | ∃z, (x, z) ∈ V ∧ (z, y) ∈ W}.

    Associative and monotone in both arguments; IdRel is a two-sided unit
    on relations over the same carrier.
    """
    successors = defaultdict(set)
    for z, y in W:
        successors[z].add(y)
    return frozenset((x, y) for x, z in V for y in successors.get(z, ()))


def comp_pow(V: Rel, n: int) -> Rel:
    """V composed with itself, n >= 1 factors."""
    if n < 1:
        raise ValueError(f"comp_pow needs at least one factor, got {n}")
    result = V
    for _ in range(n - 1):
        result = comp_rel(result, V)
    return result


def entourage_prod(V: Rel, W: Rel) -> Rel:
    """
    Relation on pairs relating (a₁, b₁) to (a₂, b₂) when (a₁, a₂) ∈ V
    and (b₁, b₂) ∈ W.
    """
    return frozenset(((a1, b1), (a2, b2)) for a1, a2 in V for b1, b2 in W)


# ═══════════════════════════════════════════════════════════════════════════
# BALLS
# ═══════════════════════════════════════════════════════════════════════════

def ball(x: Any, V: Rel) -> FrozenSet[Any]:
    """
    ball(x, V) = {y | (x, y) ∈ V}.

    Triangle law: y ∈ ball(x, V) and z ∈ ball(y, W) give z ∈ ball(x, V ○ W).
    """
    return frozenset(y for a, y in V if a == x)


# ═══════════════════════════════════════════════════════════════════════════
# MATRICES
# ═══════════════════════════════════════════════════════════════════════════

def relation_matrix(V: Rel, points: Sequence[Any]) -> np.ndarray:
    """Boolean adjacency matrix M with M[i, j] iff (points[i], points[j]) ∈ V."""
    index = {p: i for i, p in enumerate(points)}
    M = np.zeros((len(points), len(points)), dtype=bool)
    for x, y in V:
        if x not in index or y not in index:
            raise ValueError(f"Pair {(x, y)!r} is outside the carrier")
        M[index[x], index[y]] = True
    return M


def from_matrix(M: np.ndarray, points: Sequence[Any]) -> Rel:
    rows, cols = np.nonzero(M)
    return frozenset((points[i], points[j]) for i, j in zip(rows.tolist(), cols.tolist()))


def compose_matrices(A: np.ndarray, B: np.ndarray) -> np.ndarray:
    """Boolean matrix product: the matrix form of comp_rel."""
    return (A.astype(np.int64) @ B.astype(np.int64)) > 0


def equivalence_closure(V: Rel, universe: FrozenSet[Any]) -> Rel:
    """
    Smallest equivalence relation on the carrier containing V.

    Reflexive-symmetric closure first, then Warshall-style squaring
    C ← C | (C @ C) until the number of pairs stops growing.
    """
    points = ordered(universe)
    C = relation_matrix(V | id_rel(universe), points)
    C = C | C.T
    while True:
        nxt = C | compose_matrices(C, C)
        if nxt.sum() == C.sum():
            break
        C = nxt
    return from_matrix(C, points)
