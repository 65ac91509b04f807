"""Array-based vector kernels.

This module implements the arithmetic behind embedding training loops:
- nudge: Scaled accumulation, xs += ys * q (gradient steps)
- add_to / subtract_from: In-place element-wise sum and difference
- scale: In-place multiplication by a scalar
- Folding: Sum a binary operator over index pairs of two vectors
- dot_product, euclidean_norm, euclidean_distance: Folds over PRODUCT / L2_DISTANCE
- weighted_squared_error_sum: Fold over the Sammon error measure

Vectors are one-dimensional float64 arrays owned by the caller.
Kernels never copy or keep them; in-place operations write straight
into the first operand. Numpy needs one scratch array for nudge and
for the distance and Sammon reductions; nothing is allocated per element.

Lengths are trusted. Each binary operation carries an ``assert`` on
operand lengths, which vanishes under ``python -O``. Past that, every
binary operation reads ys at the last index of xs before any numpy call,
so a shorter ys (including a length-1 one numpy would broadcast) raises
IndexError. A longer ys makes numpy raise ValueError; scalar scans over
a custom operator read only its first len(xs) elements.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

import numpy as np
from numpy.typing import NDArray

from vecfold.core import DEFAULT_CONFIG, KernelConfig


# Type alias for dense vectors
Vector = NDArray[np.float64]


def _reach_end(xs: Vector, ys: Vector) -> None:
    # A shorter ys raises IndexError here instead of being broadcast
    if len(xs):
        ys[len(xs) - 1]


def nudge(xs: Vector, ys: Vector, q: float) -> None:
    """Move xs along ys: xs[i] += ys[i] * q."""
    assert len(xs) == len(ys), f"length mismatch: {len(xs)} != {len(ys)}"
    _reach_end(xs, ys)
    xs += ys * q


def add_to(xs: Vector, ys: Vector) -> None:
    """Accumulate ys into xs."""
    assert len(xs) == len(ys), f"length mismatch: {len(xs)} != {len(ys)}"
    _reach_end(xs, ys)
    np.add(xs, ys, out=xs)


def subtract_from(xs: Vector, ys: Vector) -> None:
    """Subtract ys from xs in place."""
    assert len(xs) == len(ys), f"length mismatch: {len(xs)} != {len(ys)}"
    _reach_end(xs, ys)
    np.subtract(xs, ys, out=xs)


def scale(xs: Vector, q: float) -> None:
    """Multiply every element of xs by q in place."""
    np.multiply(xs, q, out=xs)


@dataclass(frozen=True)
class Folding:
    """A binary operator folded (summed) over two vectors.

    ``op`` works on one pair of scalars. ``reduce``, when given, computes
    the same sum over whole arrays in one numpy call; ``fold`` prefers it.
    ``fold_up_to`` always scans pair by pair so it can stop early.

    Example:
        >>> manhattan = Folding(lambda x, y: abs(x - y))
        >>> manhattan.fold(np.array([1.0, 2.0]), np.array([3.0, 0.0]))
        4.0
    """

    op: Callable[[float, float], float]
    reduce: Callable[[Vector, Vector], float] | None = None

    def fold(self, first: Vector, second: Vector) -> float:
        """Sum op(first[i], second[i]) over all indices."""
        assert len(first) == len(second), f"length mismatch: {len(first)} != {len(second)}"
        _reach_end(first, second)
        if self.reduce is not None:
            return float(self.reduce(first, second))

        s = 0.0
        for i in range(len(first)):
            s += self.op(first[i], second[i])
        return float(s)

    def fold_up_to(self, first: Vector, second: Vector, limit: float) -> float:
        """Sum op over index pairs until the running sum reaches limit.

        The scan checks ``s < limit`` before every pair, so the returned
        partial sum is the first one that reached or passed the limit, or
        the full sum if it never did. A limit of zero or less returns 0.0
        without reading anything.

        Args:
            first: First vector
            second: Second vector, same length as first
            limit: Threshold at which to stop accumulating

        Returns:
            Partial (or complete) sum
        """
        assert len(first) == len(second), f"length mismatch: {len(first)} != {len(second)}"
        _reach_end(first, second)
        s = 0.0
        n = len(first)
        i = 0
        while i < n and s < limit:
            s += self.op(first[i], second[i])
            i += 1
        return float(s)


def _product(x: float, y: float) -> float:
    return x * y


def _squared_difference(x: float, y: float) -> float:
    d = x - y
    return d * d


def _sammon_term(x: float, y: float) -> float:
    # zeroes are on the diagonal of a distance matrix
    if y == 0.0:
        return 0.0
    d = x - y
    return d * d / y


def _sum_of_squared_differences(first: Vector, second: Vector) -> float:
    d = np.subtract(first, second, out=np.empty_like(first))
    return np.dot(d, d)


def _sum_of_sammon_terms(first: Vector, second: Vector) -> float:
    d = np.subtract(first, second, out=np.empty_like(first))
    np.multiply(d, d, out=d)
    nonzero = second != 0.0
    np.divide(d, second, out=d, where=nonzero)
    return np.sum(d, where=nonzero)


PRODUCT = Folding(_product, np.dot)
L2_DISTANCE = Folding(_squared_difference, _sum_of_squared_differences)
SAMMON_ERROR_MEASURE = Folding(_sammon_term, _sum_of_sammon_terms)


def dot_product(xs: Vector, ys: Vector) -> float:
    """Scalar product of two vectors."""
    return PRODUCT.fold(xs, ys)


def euclidean_norm(xs: Vector) -> float:
    """L2 norm of a vector."""
    return math.sqrt(dot_product(xs, xs))


def euclidean_distance(xs: Vector, ys: Vector) -> float:
    """L2 distance between two vectors."""
    return math.sqrt(L2_DISTANCE.fold(xs, ys))


def weighted_squared_error_sum(xs: Vector, ys: Vector) -> float:
    """Sum of (xs[i] - ys[i])^2 / ys[i], skipping indices where ys[i] == 0."""
    return SAMMON_ERROR_MEASURE.fold(xs, ys)


class DimensionMismatchError(ValueError):
    """Raised by ArrayOps when operands differ in length."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Vector length mismatch: expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


class ArrayOps:
    """Kernel operations bound to a KernelConfig.

    Allocates vectors of the configured dimension and, when
    ``check_lengths`` is set, validates operands before delegating to
    the module-level kernels.

    Example:
        >>> ops = ArrayOps(KernelConfig(dimension=3, seed=7))
        >>> v = ops.zero_vector()
        >>> ops.nudge(v, np.ones(3), 0.5)
        >>> ops.dot_product(v, v)
        0.75
    """

    def __init__(self, config: KernelConfig | None = None) -> None:
        """Initialize kernel operations.

        Args:
            config: Kernel configuration (uses defaults if None)
        """
        self.config = config or DEFAULT_CONFIG
        self._rng = np.random.default_rng(self.config.seed)

    @property
    def dim(self) -> int:
        """Vector dimension."""
        return self.config.dimension

    def zero_vector(self) -> Vector:
        """Create a zero vector of the configured dimension."""
        return np.zeros(self.dim, dtype=np.float64)

    def random_vector(self, scale: float | None = None) -> Vector:
        """Generate a small random vector.

        Values are uniform in [-0.5, 0.5) times ``scale``, which defaults
        to 1 / dimension, the usual starting point for embedding weights.

        Args:
            scale: Spread of the values (default 1 / dimension)

        Returns:
            Random vector of shape (dimension,)
        """
        if scale is None:
            scale = 1.0 / self.dim
        return (self._rng.random(self.dim) - 0.5) * scale

    def _check(self, xs: Vector, ys: Vector) -> None:
        if self.config.check_lengths and len(xs) != len(ys):
            raise DimensionMismatchError(len(xs), len(ys))

    def nudge(self, xs: Vector, ys: Vector, q: float) -> None:
        self._check(xs, ys)
        nudge(xs, ys, q)

    def add_to(self, xs: Vector, ys: Vector) -> None:
        self._check(xs, ys)
        add_to(xs, ys)

    def subtract_from(self, xs: Vector, ys: Vector) -> None:
        self._check(xs, ys)
        subtract_from(xs, ys)

    def scale(self, xs: Vector, q: float) -> None:
        scale(xs, q)

    def dot_product(self, xs: Vector, ys: Vector) -> float:
        self._check(xs, ys)
        return dot_product(xs, ys)

    def euclidean_norm(self, xs: Vector) -> float:
        return euclidean_norm(xs)

    def euclidean_distance(self, xs: Vector, ys: Vector) -> float:
        self._check(xs, ys)
        return euclidean_distance(xs, ys)

    def weighted_squared_error_sum(self, xs: Vector, ys: Vector) -> float:
        self._check(xs, ys)
        return weighted_squared_error_sum(xs, ys)
