"""
Uniform and Dense Embeddings

Immutable witnesses about a map e : β → α:

    UniformInducing   comap (e × e) 𝓤 α = 𝓤 β
    UniformEmbedding  ... and e is injective
    DenseInducing     ... and the range of e is dense in α
    DenseEmbedding    both

On finite spaces each property is checked once, on construction. On
distance-defined spaces the properties are the caller's certificate and
density is carried by an explicit choice function
``witness(a, n) = b`` with e(b) ∈ ball(a, r_n).

Witnesses compose (the comap functor law) and form products, on both kinds
of space; density witnesses compose and pair up with them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

import structlog

from .errors import CarrierMismatchError, PreconditionError
from .filters import Filter
from .fun_space import FunUniformSpace
from .relations import image, prod_map
from .sequential import SequentialFilter
from .space import UniformSpace

logger = structlog.get_logger("uniformity.embedding")

Space = Union[UniformSpace, FunUniformSpace]


def _finite(*spaces: Space) -> bool:
    return all(isinstance(s, UniformSpace) for s in spaces)


def _fun(*spaces: Space) -> bool:
    return all(isinstance(s, FunUniformSpace) for s in spaces)


def _in_carrier(space: Space, x: Any) -> bool:
    if isinstance(space, UniformSpace):
        return x in space.points
    return space.contains(x)


@dataclass(frozen=True)
class UniformInducing:
    """
    e : source → target pulls the target uniformity back onto the source one.

    Attributes:
        fn: The map e
        source: β
        target: α
    """
    fn: Callable[[Any], Any]
    source: Space
    target: Space

    def __post_init__(self):
        self._validate()

    def _validate(self) -> None:
        if not _finite(self.source, self.target):
            logger.debug("inducing_certified_by_caller", source=self.source.name, target=self.target.name)
            return
        if not image(self.fn, self.source.points) <= self.target.points:
            raise CarrierMismatchError(f"map leaves {self.target.name}")
        pulled = self.target.uniformity.comap(prod_map(self.fn, self.fn), self.source.uniformity.universe)
        if pulled != self.source.uniformity:
            raise PreconditionError("a uniformly inducing map", f"{self.source.name} → {self.target.name}")

    def __call__(self, b: Any) -> Any:
        return self.fn(b)

    def _composed_fn(self, outer: UniformInducing) -> Callable[[Any], Any]:
        inner_fn, outer_fn = self.fn, outer.fn
        return lambda b: outer_fn(inner_fn(b))

    def compose(self, outer: UniformInducing) -> UniformInducing:
        """outer ∘ self."""
        return UniformInducing(self._composed_fn(outer), self.source, outer.target)

    def prod(self, other: UniformInducing) -> UniformInducing:
        """self × other; all four spaces must be of one kind."""
        spaces = (self.source, self.target, other.source, other.target)
        if not (_finite(*spaces) or _fun(*spaces)):
            raise PreconditionError("spaces of one kind", "finite and distance-defined factors do not mix")
        return UniformInducing(
            prod_map(self.fn, other.fn),
            self.source.product(other.source),
            self.target.product(other.target),
        )

    def pullback_nhds(self, a: Any) -> Union[Filter, SequentialFilter]:
        """comap e (𝓝 a)."""
        if _finite(self.source, self.target):
            return self.target.nhds(a).comap(self.fn, self.source.points)
        return self.target.nhds(a).comap(self.fn)


@dataclass(frozen=True)
class UniformEmbedding(UniformInducing):
    """A uniformly inducing injection."""

    def _validate(self) -> None:
        super()._validate()
        if _finite(self.source) and len(image(self.fn, self.source.points)) != len(self.source.points):
            raise PreconditionError("an injective map", f"{self.source.name} → {self.target.name}")

    def compose(self, outer: UniformInducing) -> UniformInducing:
        if isinstance(outer, UniformEmbedding):
            return UniformEmbedding(self._composed_fn(outer), self.source, outer.target)
        return super().compose(outer)


@dataclass(frozen=True)
class DenseInducing(UniformInducing):
    """
    A uniformly inducing map with dense range.

    Attributes:
        witness: (a, n) ↦ b with e(b) ∈ ball(a, r_n); required when the
            target is distance-defined
    """
    witness: Optional[Callable[[Any, int], Any]] = None

    def _validate(self) -> None:
        super()._validate()
        self._validate_dense()

    def _validate_dense(self) -> None:
        if _finite(self.target):
            if not self.target.dense_range(self.fn, self.source.points):
                raise PreconditionError("a dense range", f"{self.source.name} in {self.target.name}")
        elif self.witness is None:
            raise PreconditionError("a density witness", f"{self.target.name} is not enumerable")

    def fixes(self, a: Any) -> bool:
        """a lies in the source and e(a) = a."""
        return _in_carrier(self.source, a) and self.fn(a) == a

    def pullback_nhds(self, a: Any) -> Union[Filter, SequentialFilter]:
        """
        comap e (𝓝 a); never trivial because e has dense range.

        On distance-defined targets every level carries a chosen point: a
        itself when e fixes a, so the samples are exact, and witness(a, n)
        otherwise.
        """
        if _finite(self.source, self.target):
            return super().pullback_nhds(a)
        if self.fixes(a):
            return self.target.nhds(a).comap(self.fn, choose=lambda n: a)
        witness = self.witness
        return self.target.nhds(a).comap(self.fn, choose=lambda n: witness(a, n))

    def compose(self, outer: UniformInducing) -> UniformInducing:
        composed = _dense_compose(self, outer, DenseInducing)
        return composed if composed is not None else super().compose(outer)

    def prod(self, other: UniformInducing) -> UniformInducing:
        product = _dense_prod(self, other, DenseInducing)
        return product if product is not None else super().prod(other)


@dataclass(frozen=True)
class DenseEmbedding(DenseInducing):
    """A dense uniform embedding."""

    def _validate(self) -> None:
        DenseInducing._validate(self)
        if _finite(self.source) and len(image(self.fn, self.source.points)) != len(self.source.points):
            raise PreconditionError("an injective map", f"{self.source.name} → {self.target.name}")

    def compose(self, outer: UniformInducing) -> UniformInducing:
        if isinstance(outer, DenseEmbedding):
            composed = _dense_compose(self, outer, DenseEmbedding)
            if composed is not None:
                return composed
        return super().compose(outer)

    def prod(self, other: UniformInducing) -> UniformInducing:
        if isinstance(other, DenseEmbedding):
            product = _dense_prod(self, other, DenseEmbedding)
            if product is not None:
                return product
        return super().prod(other)


def _dense_compose(inner: DenseInducing, outer: UniformInducing, cls: type) -> Optional[DenseInducing]:
    """
    outer ∘ inner as a dense witness of kind `cls`, or None when outer is
    not dense.

    On distance-defined spaces the witnesses compose through half: with
    c' = outer.witness(c, m) and b = inner.witness(c', m) for m = half(n),
    d(outer(inner b), c) < 2·r_m = r_n whenever the distance of outer.source
    is the one pulled back from outer.target (as for comap spaces).
    """
    if not isinstance(outer, DenseInducing):
        return None
    fn = inner._composed_fn(outer)
    if _finite(inner.source, inner.target, outer.target):
        return cls(fn, inner.source, outer.target)
    if inner.witness is None or outer.witness is None:
        return None
    inner_w, outer_w = inner.witness, outer.witness

    def witness(c: Any, n: int) -> Any:
        m = FunUniformSpace.half(n)
        return inner_w(outer_w(c, m), m)

    return cls(fn, inner.source, outer.target, witness=witness)


def _dense_prod(left: DenseInducing, right: UniformInducing, cls: type) -> Optional[DenseInducing]:
    if not isinstance(right, DenseInducing):
        return None
    spaces = (left.source, left.target, right.source, right.target)
    if not (_finite(*spaces) or _fun(*spaces)):
        return None
    fn = prod_map(left.fn, right.fn)
    source, target = left.source.product(right.source), left.target.product(right.target)
    if _finite(*spaces):
        return cls(fn, source, target)
    if left.witness is None or right.witness is None:
        return None
    w1, w2 = left.witness, right.witness
    return cls(fn, source, target, witness=lambda a, n: (w1(a[0], n), w2(a[1], n)))
