"""
Reference Models

Small concrete uniform spaces used by the demos and the test-suite.

Finite:
- discrete_space / indiscrete_space / two_point_discrete
- linked_space: discrete except for one block of mutually close points

Distance-defined:
- extended_line: ℚ ∪ {-∞, +∞} with d(x, y) = |t(x) - t(y)| where
  t(x) = x / (1 + |x|) squashes the line onto [-1, 1] (t(±∞) = ±1).
  ℚ ∪ {±∞} is not complete (its completion is the extended real line), so
  its limit capability is a test double that only answers what it can
  decide exactly: an eventually constant tail is its own limit, a tail
  whose squashed gap to ±1 keeps shrinking below r_{depth/4} tends to ±∞.
  Every other tail raises NoLimitError; nothing is approximated.
- rationals_in_extended_line: the dense embedding ℚ ↪ extended line, with
  ℚ carrying the induced structure and density witnesses
  witness(±∞, n) = ±(n+1), witness(q, n) = q.
"""

from __future__ import annotations

import math
from fractions import Fraction
from itertools import combinations
from typing import Any, Iterable, List

from . import constants
from .constants import radius
from .embedding import DenseEmbedding
from .errors import NoLimitError
from .fun_space import FunUniformSpace
from .space import UniformSpace

POS_INF = math.inf
NEG_INF = -math.inf


# =============================================================================
# Finite models
# =============================================================================

def discrete_space(points: Iterable[Any], name: str = "discrete") -> UniformSpace:
    return UniformSpace.discrete(points, name=name)


def indiscrete_space(points: Iterable[Any], name: str = "indiscrete") -> UniformSpace:
    return UniformSpace.indiscrete(points, name=name)


def two_point_discrete(a: Any = 0, b: Any = 1, name: str = "two-point") -> UniformSpace:
    return UniformSpace.discrete((a, b), name=name)


def linked_space(points: Iterable[Any] = (0, 1, 2, 3), block: Iterable[Any] = (0, 1, 2),
                 name: str = "linked") -> UniformSpace:
    """Discrete uniformity plus one entourage linking every point of `block`."""
    link = frozenset(combinations(list(block), 2))
    return UniformSpace.from_relation(points, link, name=name)


# =============================================================================
# Extended rational line
# =============================================================================

def is_rational(x: Any) -> bool:
    return isinstance(x, (int, Fraction)) and not isinstance(x, bool)


def is_extended_rational(x: Any) -> bool:
    return is_rational(x) or x == POS_INF or x == NEG_INF


def squash(x: Any) -> Fraction:
    """t(x) = x / (1 + |x|), t(±∞) = ±1."""
    if x == POS_INF:
        return Fraction(1)
    if x == NEG_INF:
        return Fraction(-1)
    q = Fraction(x)
    return q / (1 + abs(q))


def unsquash(t: Fraction) -> Any:
    if t >= 1:
        return POS_INF
    if t <= -1:
        return NEG_INF
    return t / (1 - abs(t))


def line_distance(x: Any, y: Any) -> Fraction:
    return abs(squash(x) - squash(y))


def line_limit(samples: List[Any]) -> Any:
    """
    Limit capability of the extended line (exact answers only).

    Raises:
        NoLimitError: the tail is neither eventually constant nor escaping
            to ±∞
    """
    tail = samples[-constants.STABILITY_WINDOW:]
    last = tail[-1]
    if all(s == last for s in tail):
        return last
    quarter = samples[len(samples) // 4]
    r = radius(len(samples) // 4)
    for end, infinity in ((Fraction(1), POS_INF), (Fraction(-1), NEG_INF)):
        gap = abs(end - squash(last))
        if gap < r and gap * constants.ESCAPE_FACTOR <= abs(end - squash(quarter)):
            return infinity
    raise NoLimitError(f"no exact limit for a tail ending at {last!r}")


def extended_line(name: str = "extended line") -> FunUniformSpace:
    return FunUniformSpace(
        dist=line_distance,
        contains=is_extended_rational,
        limit=line_limit,
        separated=True,
        name=name,
    )


def line_witness(a: Any, n: int) -> Fraction:
    """A rational within r_n of a."""
    if a == POS_INF:
        return Fraction(n + 1)
    if a == NEG_INF:
        return Fraction(-(n + 1))
    return Fraction(a)


def rationals_in_extended_line() -> DenseEmbedding:
    alpha = extended_line()
    beta = alpha.comap(lambda q: q, contains=is_rational, name="ℚ")
    return DenseEmbedding(fn=lambda q: q, source=beta, target=alpha, witness=line_witness)
