"""
Countably Based Filters

Filters on arbitrary (typically infinite) carriers cannot be stored by
their kernel. They are presented lazily instead:

- Region: a set given by a membership predicate and, optionally, a chosen
  point inside it (the classical choice a density argument needs).
- SequentialFilter: a filter with a decreasing basis B_0 ⊇ B_1 ⊇ ...
  produced on demand, one Region per level.

Pullback and pushforward act level by level. Pullback needs a choice of
point in each preimage (supplied by whoever knows the map is dense);
pushforward carries chosen points forward through the map. Limits of such
filters are read off the chosen points by the target space.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator, List, Optional

from . import constants
from .errors import PreconditionError, UndecidableError


@dataclass(frozen=True)
class Region:
    """
    A possibly infinite set.

    Attributes:
        contains: Membership predicate, None when membership is undecidable
        chosen: Produces a point of the region, None when no point is known
        label: Human-readable description
    """
    contains: Optional[Callable[[Any], bool]] = None
    chosen: Optional[Callable[[], Any]] = None
    label: str = "region"

    def __contains__(self, x: Any) -> bool:
        if self.contains is None:
            raise UndecidableError(f"Membership in {self.label} is not decidable")
        return bool(self.contains(x))

    def point(self) -> Any:
        """The chosen point; verified against the predicate when there is one."""
        if self.chosen is None:
            raise UndecidableError(f"{self.label} has no chosen point")
        x = self.chosen()
        if self.contains is not None and not self.contains(x):
            raise PreconditionError("chosen point inside its region", f"{x!r} ∉ {self.label}")
        return x

    def preimage(self, f: Callable[[Any], Any], chosen: Optional[Callable[[], Any]] = None) -> Region:
        return Region(
            contains=lambda x: f(x) in self,
            chosen=chosen,
            label=f"f⁻¹({self.label})",
        )

    def image(self, f: Callable[[Any], Any]) -> Region:
        # y ∈ f(B) needs an existential search, so membership stays open
        chosen = None if self.chosen is None else (lambda: f(self.point()))
        return Region(contains=None, chosen=chosen, label=f"f({self.label})")


class SequentialFilter:
    """
    Filter with a decreasing countable basis, produced lazily.

    Args:
        level: n ↦ B_n, with B_0 ⊇ B_1 ⊇ ...
        label: Description used in logs and errors
    """

    def __init__(self, level: Callable[[int], Region], label: str = "filter"):
        self._level = level
        self.label = label

    def __repr__(self) -> str:
        return f"SequentialFilter({self.label})"

    def basis_at(self, n: int) -> Region:
        return self._level(n)

    def basis(self, depth: Optional[int] = None) -> Iterator[Region]:
        depth = constants.DEFAULT_PROBE_DEPTH if depth is None else depth
        for n in range(depth):
            yield self._level(n)

    def comap(self, f: Callable[[Any], Any],
              choose: Optional[Callable[[int], Any]] = None) -> SequentialFilter:
        """
        Pullback along f, level by level.

        Args:
            f: Map from the new carrier into this filter's carrier
            choose: n ↦ a point x with f(x) ∈ B_n (a density witness)
        """
        def level(n: int) -> Region:
            chosen = None if choose is None else (lambda: choose(n))
            return self._level(n).preimage(f, chosen)

        return SequentialFilter(level, label=f"comap({self.label})")

    def map(self, f: Callable[[Any], Any]) -> SequentialFilter:
        """Pushforward along f; chosen points travel through f."""
        return SequentialFilter(lambda n: self._level(n).image(f), label=f"map({self.label})")

    def samples(self, depth: Optional[int] = None) -> List[Any]:
        """Chosen points of the first `depth` basis levels."""
        return [region.point() for region in self.basis(depth)]

    def ne_bot(self, depth: Optional[int] = None) -> bool:
        """
        Every probed level has a verified point.

        A level without any chosen point raises UndecidableError.
        """
        try:
            self.samples(depth)
        except PreconditionError:
            return False
        return True
