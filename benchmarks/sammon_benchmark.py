"""Sammon Benchmark — Stress of random projections.

Builds a point cloud, projects it by dropping dimensions, and checks
that Sammon stress behaves: zero for the identity projection, positive
for a lossy one, and the bounded check agreeing with the full sum.
"""

from __future__ import annotations

import time

import numpy as np

from benchmarks import BenchmarkResult


def run_sammon_benchmark(dim: int = 300, points: int = 50, seed: int = 42) -> BenchmarkResult:
    """Run the Sammon benchmark.

    Args:
        dim: Dimension of the original points
        points: Number of points in the cloud
        seed: Random seed
    """
    from vecfold.analysis.sammon import distance_matrix, error_reaches, sammon_error

    result = BenchmarkResult(name="Sammon Stress")
    rng = np.random.default_rng(seed)
    cloud = [rng.standard_normal(dim) for _ in range(points)]
    projected_cloud = [v[:2].copy() for v in cloud]

    start = time.perf_counter()

    original = distance_matrix(cloud)
    projected = distance_matrix(projected_cloud)
    result.operations += 2 * points * (points - 1) // 2

    result.total += 1
    identity = sammon_error(original, original)
    if identity == 0.0:
        result.correct += 1
    else:
        result.errors.append(f"identity projection: stress {identity}, expected 0")

    result.total += 1
    stress = sammon_error(original, projected)
    result.details["stress"] = stress
    if stress > 0.0:
        result.correct += 1
    else:
        result.errors.append(f"2-d projection: stress {stress}, expected > 0")

    for factor in (0.5, 2.0):
        result.total += 1
        threshold = stress * factor
        if error_reaches(original, projected, threshold) == (stress >= threshold):
            result.correct += 1
        else:
            result.errors.append(f"error_reaches disagrees at threshold {threshold:.4f}")
    result.operations += 3 * points

    result.duration_seconds = time.perf_counter() - start
    return result
