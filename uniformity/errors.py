"""
Error Hierarchy

Every error raised by the package derives from UniformityError, which is a
ValueError: invalid constructions are rejected the same way bad arguments
are everywhere else. Operations on already-validated values never raise.
"""

from typing import Optional


class UniformityError(ValueError):
    """Base class for all uniformity errors."""


class CarrierMismatchError(UniformityError):
    """Operands live on different carriers, or a set escapes its carrier."""


class AxiomViolation(UniformityError):
    """A uniform core or a supplied topology fails one of its axioms."""

    def __init__(self, axiom: str, detail: str = ""):
        self.axiom = axiom
        self.detail = detail
        message = f"[{axiom}] axiom violated"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class NotMonotoneError(UniformityError):
    """A map declared monotone sends A ⊆ B to g(A) ≰ g(B)."""


class PreconditionError(UniformityError):
    """A witness (inducing, dense, complete, separated, ...) does not hold."""

    def __init__(self, requirement: str, detail: Optional[str] = None):
        self.requirement = requirement
        super().__init__(f"requires {requirement}" + (f": {detail}" if detail else ""))


class UndecidableError(UniformityError):
    """The presentation of a set cannot answer the question asked of it."""


class NoLimitError(UniformityError):
    """find_limit was given a trivial or non-Cauchy filter."""
