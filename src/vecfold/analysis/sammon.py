"""Sammon stress between two distance matrices.

Sammon's mapping projects points into fewer dimensions while keeping
pairwise distances. Its error function compares original distances d*
with projected distances d:

    E = 1 / sum(d*_ij) * sum((d_ij - d*_ij)^2 / d*_ij)    for i < j

Each row of the sum is one scan of the SAMMON_ERROR_MEASURE operator;
the zero diagonal drops out because it skips zero denominators.
Summing full rows counts every pair twice, in the numerator and the
denominator alike, so the ratio is unchanged.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from vecfold.core.array_ops import SAMMON_ERROR_MEASURE, Folding, Vector, euclidean_distance


logger = logging.getLogger(__name__)


def distance_matrix(vectors: Sequence[Vector]) -> NDArray[np.float64]:
    """Pairwise Euclidean distances.

    Args:
        vectors: Points, all of the same dimension

    Returns:
        Symmetric (n, n) matrix with a zero diagonal
    """
    n = len(vectors)
    result = np.zeros((n, n), dtype=np.float64)
    for i in range(n):
        for j in range(i + 1, n):
            d = euclidean_distance(vectors[i], vectors[j])
            result[i, j] = d
            result[j, i] = d
    return result


def _check_shapes(original: NDArray[np.float64], projected: NDArray[np.float64]) -> None:
    if original.shape != projected.shape:
        raise ValueError(
            f"Distance matrices differ in shape: {original.shape} vs {projected.shape}"
        )


# Pair-by-pair scan, so a row's total extends its partial sums from fold_up_to
_ROW_SCAN = Folding(SAMMON_ERROR_MEASURE.op)


def sammon_error(original: NDArray[np.float64], projected: NDArray[np.float64]) -> float:
    """Compute Sammon stress of a projection.

    Args:
        original: Distances between the original points
        projected: Distances between the projected points

    Returns:
        Stress in [0, inf); 0.0 if all original distances are zero
    """
    _check_shapes(original, projected)

    total = float(np.sum(original))
    if total == 0.0:
        return 0.0

    error = 0.0
    for i in range(len(original)):
        error += _ROW_SCAN.fold(projected[i], original[i])

    stress = error / total
    logger.debug(f"Sammon stress over {len(original)} points: {stress:.6f}")
    return stress


def error_reaches(
    original: NDArray[np.float64],
    projected: NDArray[np.float64],
    threshold: float,
) -> bool:
    """Check whether Sammon stress reaches a threshold.

    Stops inside a row as soon as the accumulated error reaches the
    budget, and returns without reading further rows when that partial
    error already gives a stress at or above the threshold. Cheaper than
    sammon_error() for projections that are clearly bad.

    Terms are non-negative and summed in the same order as in
    sammon_error(), so a partial error never exceeds the full one and
    the answer is exactly ``sammon_error(original, projected) >= threshold``.

    Args:
        original: Distances between the original points
        projected: Distances between the projected points
        threshold: Stress level to compare against

    Returns:
        True if sammon_error(original, projected) >= threshold
    """
    _check_shapes(original, projected)

    total = float(np.sum(original))
    if total == 0.0:
        return threshold <= 0.0

    budget = threshold * total
    error = 0.0
    for i in range(len(original)):
        limit = budget - error
        partial = SAMMON_ERROR_MEASURE.fold_up_to(projected[i], original[i], limit)
        if (error + partial) / total >= threshold:
            logger.debug(f"Sammon threshold {threshold:.6f} reached in row {i}")
            return True
        if partial >= limit:
            # Stopped early on rounding in the budget; take the whole row
            partial = _ROW_SCAN.fold(projected[i], original[i])
        error += partial
    return error / total >= threshold
