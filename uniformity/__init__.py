"""
Uniformity - Uniform Spaces and the Completion Extension Theorem

Filters, relations on pairs, uniform structures and the extension of
uniformly continuous maps along dense embeddings into complete spaces,
executable on finite carriers and on distance-defined spaces.
"""

__version__ = "0.1.0"

from .errors import (
    AxiomViolation,
    CarrierMismatchError,
    NoLimitError,
    NotMonotoneError,
    PreconditionError,
    UndecidableError,
    UniformityError,
)
from .monotone import MonotoneMap, monotone
from .filters import Filter, HasBasis, tendsto
from .sequential import Region, SequentialFilter
from .core import UniformCore
from .space import UniformSpace
from .fun_space import FunUniformSpace
from .entourages import (
    closed_basis,
    comp_comp_symm_mem,
    comp_symm_mem,
    open_basis,
    open_symmetric_basis,
    shrink,
    symmetric_basis,
)
from .embedding import DenseEmbedding, DenseInducing, UniformEmbedding, UniformInducing
from .completion import (
    Extension,
    complete_of_inducing,
    complete_product,
    complete_subspace,
    complete_sum,
    uniformly_extend,
)
from .telemetry import setup_logging

__all__ = [
    "UniformityError",
    "CarrierMismatchError",
    "AxiomViolation",
    "NotMonotoneError",
    "PreconditionError",
    "UndecidableError",
    "NoLimitError",
    "MonotoneMap",
    "monotone",
    "Filter",
    "HasBasis",
    "tendsto",
    "Region",
    "SequentialFilter",
    "UniformCore",
    "UniformSpace",
    "FunUniformSpace",
    "shrink",
    "comp_symm_mem",
    "comp_comp_symm_mem",
    "symmetric_basis",
    "open_basis",
    "open_symmetric_basis",
    "closed_basis",
    "UniformInducing",
    "UniformEmbedding",
    "DenseInducing",
    "DenseEmbedding",
    "Extension",
    "uniformly_extend",
    "complete_of_inducing",
    "complete_subspace",
    "complete_product",
    "complete_sum",
    "setup_logging",
]
