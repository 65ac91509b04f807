"""vecfold - Dense vector kernels for embedding and projection algorithms.

Core operations:
- In-place accumulate, subtract, nudge and scale
- Pairwise folds: dot product, Euclidean distance, Sammon error
- Short-circuiting folds for threshold checks

No per-element boxing - callers own float64 arrays, kernels mutate or fold them.
"""

from vecfold.core import DEFAULT_CONFIG, KernelConfig
from vecfold.core.array_ops import (
    L2_DISTANCE,
    PRODUCT,
    SAMMON_ERROR_MEASURE,
    ArrayOps,
    DimensionMismatchError,
    Folding,
    Vector,
    add_to,
    dot_product,
    euclidean_distance,
    euclidean_norm,
    nudge,
    scale,
    subtract_from,
    weighted_squared_error_sum,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONFIG",
    "KernelConfig",
    "L2_DISTANCE",
    "PRODUCT",
    "SAMMON_ERROR_MEASURE",
    "ArrayOps",
    "DimensionMismatchError",
    "Folding",
    "Vector",
    "add_to",
    "dot_product",
    "euclidean_distance",
    "euclidean_norm",
    "nudge",
    "scale",
    "subtract_from",
    "weighted_squared_error_sum",
]
