"""
Monotone Maps

lift and lift' are only well defined for monotone arguments. A MonotoneMap
is the caller's certificate that a set function respects inclusion; it can
be checked once over a family of sets instead of at every call site.
"""

from __future__ import annotations

from collections.abc import Iterable as IterableABC
from dataclasses import dataclass
from typing import Any, Callable, FrozenSet, Iterable, Union

from .errors import NotMonotoneError


@dataclass(frozen=True)
class MonotoneMap:
    """
    A set function g with A ⊆ B ⟹ g(A) ≤ g(B).

    The order on results is ``<=``: inclusion for sets (other iterables such
    as lists are compared as the sets of their items), the filter order for
    Filter values.
    """
    fn: Callable[[FrozenSet], Any]
    name: str = ""

    def __call__(self, s: FrozenSet) -> Any:
        return self.fn(s)

    def check(self, sets: Iterable[FrozenSet], universe: FrozenSet) -> None:
        """
        Verify monotonicity on an upward-closed family of sets.

        For an upward-closed family it is enough to compare each set with
        its one-point extensions inside the universe.

        Raises:
            NotMonotoneError: on the first pair that breaks the order
        """
        for s in sets:
            base = _ordered_value(self.fn(s))
            for p in universe - s:
                bigger = s | {p}
                if not base <= _ordered_value(self.fn(bigger)):
                    raise NotMonotoneError(
                        f"{self.name or 'map'} is not monotone: adding {p!r} to {set(s)!r} shrinks the result"
                    )


def _ordered_value(value: Any) -> Any:
    if isinstance(value, IterableABC) and not isinstance(value, (str, frozenset)):
        return frozenset(value)
    return value


def as_monotone(fn: Union[MonotoneMap, Callable[[FrozenSet], Any]]) -> MonotoneMap:
    """Wrap a plain callable; MonotoneMap values pass through unchanged."""
    if isinstance(fn, MonotoneMap):
        return fn
    return MonotoneMap(fn=fn, name=getattr(fn, "__name__", ""))


# Decorator form: @monotone
monotone = as_monotone
