"""Kernel Benchmark — Times element-wise updates and folds.

Each run first checks a kernel against a plain numpy expression, then
times it over random vectors. A kernel that disagrees with numpy is
recorded as an error and not timed.
"""

from __future__ import annotations

import math
import time

import numpy as np

from benchmarks import BenchmarkResult


def _random_pair(dim: int, seed: int = 42) -> tuple[np.ndarray, np.ndarray]:
    rng = np.random.default_rng(seed)
    return rng.standard_normal(dim), rng.standard_normal(dim)


def run_elementwise_benchmark(dim: int = 300, iterations: int = 10_000) -> BenchmarkResult:
    """Time the in-place kernels.

    Args:
        dim: Vector dimension
        iterations: Calls per kernel
    """
    from vecfold.core.array_ops import add_to, nudge, scale, subtract_from

    result = BenchmarkResult(name="Element-wise Kernels")
    xs, ys = _random_pair(dim)

    cases = [
        ("nudge", lambda a, b: nudge(a, b, 0.025), lambda a, b: a + b * 0.025),
        ("add_to", add_to, lambda a, b: a + b),
        ("subtract_from", subtract_from, lambda a, b: a - b),
        ("scale", lambda a, b: scale(a, 0.5), lambda a, b: a * 0.5),
    ]

    start = time.perf_counter()

    for name, kernel, expected in cases:
        result.total += 1
        work = xs.copy()
        kernel(work, ys)
        if not np.allclose(work, expected(xs, ys)):
            result.errors.append(f"{name}: result differs from numpy")
            continue
        result.correct += 1

        t0 = time.perf_counter()
        for _ in range(iterations):
            kernel(work, ys)
        result.details[name] = time.perf_counter() - t0
        result.operations += iterations

    result.duration_seconds = time.perf_counter() - start
    return result


def run_fold_benchmark(dim: int = 300, iterations: int = 10_000) -> BenchmarkResult:
    """Time the vectorized folds and the element-by-element bounded fold.

    Args:
        dim: Vector dimension
        iterations: Calls per fold
    """
    from vecfold.core.array_ops import (
        L2_DISTANCE,
        dot_product,
        euclidean_distance,
        euclidean_norm,
        weighted_squared_error_sum,
    )

    result = BenchmarkResult(name="Folds")
    xs, ys = _random_pair(dim)
    positive = np.abs(ys) + 1.0

    cases = [
        ("dot_product", lambda: dot_product(xs, ys), float(np.dot(xs, ys))),
        ("euclidean_norm", lambda: euclidean_norm(xs), float(np.linalg.norm(xs))),
        ("euclidean_distance", lambda: euclidean_distance(xs, ys), float(np.linalg.norm(xs - ys))),
        (
            "weighted_squared_error_sum",
            lambda: weighted_squared_error_sum(xs, positive),
            float(np.sum((xs - positive) ** 2 / positive)),
        ),
        (
            "fold_up_to(inf)",
            lambda: L2_DISTANCE.fold_up_to(xs, ys, math.inf),
            float(np.sum((xs - ys) ** 2)),
        ),
    ]

    start = time.perf_counter()

    for name, fold, expected in cases:
        result.total += 1
        actual = fold()
        if not math.isclose(actual, expected, rel_tol=1e-9):
            result.errors.append(f"{name}: got {actual}, expected {expected}")
            continue
        result.correct += 1

        t0 = time.perf_counter()
        for _ in range(iterations):
            fold()
        result.details[name] = time.perf_counter() - t0
        result.operations += iterations

    result.duration_seconds = time.perf_counter() - start
    return result
