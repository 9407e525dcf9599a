"""
Entourage Bases

Every derived basis of the uniformity is built from one combinator,
``shrink``: find an entourage T' with T' ○ T' ⊆ S (the comp axiom
guarantees one), then replace it by symmetrize(T'), which is still an
entourage and still satisfies symmetrize(T') ○ symmetrize(T') ⊆ T' ○ T' ⊆ S.
Chaining k shrink steps gives a symmetric T whose 2^k-fold composite lies
in S; the step count is carried along as ``generation``.

Derived bases:
- symmetric_basis: symmetric entourages
- open_basis / open_symmetric_basis: entourages open in X × X
- closed_basis: entourages closed in X × X, via
  closure(T) ⊆ T ○ T ○ T ⊆ S for the twice-shrunk T
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from .core import UniformCore
from .errors import AxiomViolation, PreconditionError
from .filters import HasBasis
from .relations import Rel, comp_pow, comp_rel, symmetrize
from .space import UniformSpace

logger = structlog.get_logger("uniformity.entourages")


@dataclass(frozen=True)
class Shrink:
    """
    Outcome of a shrink chain.

    Attributes:
        target: The entourage S that was approximated
        entourage: Symmetric entourage T with T^(2^generation) ⊆ S
        generation: Number of shrink-then-symmetrize steps applied
    """
    target: Rel
    entourage: Rel
    generation: int

    @property
    def power(self) -> int:
        """Number of factors of T known to fit inside the target."""
        return 2 ** self.generation

    def verify(self) -> bool:
        return comp_pow(self.entourage, self.power) <= self.target


def _half(core: UniformCore, S: Rel) -> Rel:
    """Some entourage T' with T' ○ T' ⊆ S (comp axiom)."""
    for T in core.uniformity.basis():
        if comp_rel(T, T) <= S:
            return T
    raise AxiomViolation("comp", "no basis entourage composes into the given one")


def shrink(core: UniformCore, S: Rel, steps: int = 1) -> Shrink:
    """
    Apply the shrink-then-symmetrize step `steps` times, starting from S.

    Raises:
        PreconditionError: S is not an entourage
    """
    S = frozenset(S)
    if not core.is_entourage(S):
        raise PreconditionError("an entourage to shrink", f"{len(S)} pairs given")
    current = S
    for generation in range(1, steps + 1):
        current = symmetrize(_half(core, current))
        logger.debug("shrink_step", generation=generation, pairs=len(current))
    return Shrink(target=S, entourage=current, generation=steps)


def comp_symm_mem(core: UniformCore, S: Rel) -> Rel:
    """Symmetric entourage T with T ○ T ⊆ S."""
    return shrink(core, S, 1).entourage


def comp_comp_symm_mem(core: UniformCore, S: Rel) -> Rel:
    """Symmetric entourage T with T ○ T ○ T ⊆ S (two shrink steps; T is reflexive)."""
    return shrink(core, S, 2).entourage


def open_entourage(space: UniformSpace, S: Rel) -> Rel:
    """
    Interior of S in X × X; an entourage because T ⊆ interior(S)
    for the once-shrunk T.
    """
    T = comp_symm_mem(space.core, S)
    interior = space.square().interior(S)
    if not T <= interior:
        raise AxiomViolation("comp", "shrunk entourage escapes the interior")
    return interior


def closed_entourage(space: UniformSpace, S: Rel) -> Rel:
    """Closure in X × X of the twice-shrunk T; contained in T ○ T ○ T ⊆ S."""
    T = comp_comp_symm_mem(space.core, S)
    return space.square().closure(T)


def symmetric_basis(core: UniformCore) -> HasBasis:
    return HasBasis(core.uniformity, tuple(symmetrize(b) for b in core.uniformity.basis()))


def open_basis(space: UniformSpace) -> HasBasis:
    return HasBasis(
        space.uniformity,
        tuple(open_entourage(space, b) for b in space.uniformity.basis()),
    )


def open_symmetric_basis(space: UniformSpace) -> HasBasis:
    return HasBasis(
        space.uniformity,
        tuple(symmetrize(open_entourage(space, b)) for b in space.uniformity.basis()),
    )


def closed_basis(space: UniformSpace) -> HasBasis:
    return HasBasis(
        space.uniformity,
        tuple(closed_entourage(space, b) for b in space.uniformity.basis()),
    )
