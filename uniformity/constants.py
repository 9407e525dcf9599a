# uniformity/constants.py
"""
Uniformity Constants

This module defines constants used throughout the uniformity package:

LAYER 1: Finite Carriers (Exact Layer)
- MAX_EXHAUSTIVE_POINTS: Largest carrier whose power set is enumerated
- VERIFY_MONOTONE: Check MonotoneMap arguments of lift/lift' before use

LAYER 2: Countable Bases (Lazy Layer)
- DEFAULT_PROBE_DEPTH: Basis levels sampled per limit question
- STABILITY_WINDOW: Trailing equal samples read as an exact limit
- radius: Entourage radius schedule r_n = 1/(n+1)

LAYER 3: Extended Line Model
- ESCAPE_FACTOR: Shrink factor of the gap to ±1 that reads a tail as ±∞
"""
from fractions import Fraction


# =============================================================================
# LAYER 1: Finite Carriers (Exact Layer)
# =============================================================================

# Subsets of a carrier are enumerated (2^n of them) only up to this size.
# Larger carriers skip exhaustive validation with a warning.
MAX_EXHAUSTIVE_POINTS = 10

# lift/lift' trust their MonotoneMap argument unless this is set
VERIFY_MONOTONE = False


# =============================================================================
# LAYER 2: Countable Bases (Lazy Layer)
# =============================================================================

DEFAULT_PROBE_DEPTH = 64
STABILITY_WINDOW = 8

# Window must fit inside the probe
assert 0 < STABILITY_WINDOW <= DEFAULT_PROBE_DEPTH, "STABILITY_WINDOW must not exceed DEFAULT_PROBE_DEPTH"


def radius(n: int) -> Fraction:
    """Radius of the n-th basic entourage: 1, 1/2, 1/3, ..."""
    if n < 0:
        raise ValueError(f"Basis level must be >= 0, got {n}")
    return Fraction(1, n + 1)


# =============================================================================
# LAYER 3: Extended Line Model
# =============================================================================

# A tail tends to ±∞ when its squashed gap to ±1 is below r_{depth/4} and
# shrank at least this much since the sample at depth/4.
ESCAPE_FACTOR = 2
