"""Tests for the element-wise kernels and the fold-based measures."""

from __future__ import annotations

import math
import os
import subprocess
import sys
import textwrap

import numpy as np
import pytest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from vecfold.core.array_ops import (
    add_to,
    dot_product,
    euclidean_distance,
    euclidean_norm,
    nudge,
    scale,
    subtract_from,
    weighted_squared_error_sum,
)


def vec(*values: float) -> np.ndarray:
    return np.array(values, dtype=np.float64)


def random_vectors(dim: int = 50, seed: int = 0) -> tuple[np.ndarray, np.ndarray]:
    rng = np.random.default_rng(seed)
    return rng.standard_normal(dim), rng.standard_normal(dim)


def test_concrete_measures():
    """[1,2,3] against [4,5,6]."""
    print("=== Concrete Measures ===\n")

    xs, ys = vec(1, 2, 3), vec(4, 5, 6)

    assert dot_product(xs, ys) == 32.0
    assert math.isclose(euclidean_norm(xs), math.sqrt(14))
    assert math.isclose(euclidean_distance(xs, ys), math.sqrt(27))
    assert round(euclidean_norm(xs), 4) == 3.7417
    assert round(euclidean_distance(xs, ys), 4) == 5.1962
    print("  ✓ dot = 32, |xs| = sqrt(14), d(xs, ys) = sqrt(27)\n")


def test_nudge():
    """nudge moves xs along ys by a factor."""
    print("=== Nudge ===\n")

    xs = vec(1, 1, 1)
    before = xs
    nudge(xs, vec(2, 2, 2), 0.5)
    assert xs is before
    assert xs.tolist() == [2.0, 2.0, 2.0]

    xs, ys = random_vectors()
    original = xs.copy()
    nudge(xs, ys, 0.0)
    assert np.array_equal(xs, original)

    via_nudge = original.copy()
    via_add = original.copy()
    nudge(via_nudge, ys, 1.0)
    add_to(via_add, ys)
    assert np.array_equal(via_nudge, via_add)
    print("  ✓ nudge(q=0) is a no-op, nudge(q=1) equals add_to\n")


def test_add_subtract_round_trip():
    """add_to then subtract_from restores the original."""
    xs, ys = random_vectors(seed=3)
    original = xs.copy()

    add_to(xs, ys)
    assert np.allclose(xs, original + ys)
    subtract_from(xs, ys)
    assert np.allclose(xs, original)


def test_subtract_from():
    xs = vec(5, 7, 9)
    subtract_from(xs, vec(4, 5, 6))
    assert xs.tolist() == [1.0, 2.0, 3.0]


def test_scale():
    """scale by 1 keeps, scale by 0 zeroes."""
    xs, _ = random_vectors(seed=5)
    original = xs.copy()

    scale(xs, 1.0)
    assert np.array_equal(xs, original)

    scale(xs, -2.0)
    assert np.allclose(xs, original * -2.0)

    scale(xs, 0.0)
    assert not np.any(xs)


def test_dot_product_commutes():
    for seed in range(5):
        xs, ys = random_vectors(seed=seed)
        assert math.isclose(dot_product(xs, ys), dot_product(ys, xs))
        assert math.isclose(dot_product(xs, ys), float(np.dot(xs, ys)))


def test_norm_and_distance():
    """Norm is distance from zero; distance is symmetric."""
    print("=== Norm and Distance ===\n")

    for seed in range(5):
        xs, ys = random_vectors(seed=seed)
        zero = np.zeros_like(xs)

        assert euclidean_norm(xs) == euclidean_distance(xs, zero)
        assert euclidean_distance(xs, ys) == euclidean_distance(ys, xs)
        assert euclidean_distance(xs, xs) == 0.0
        assert euclidean_distance(xs, ys) > 0.0
        assert euclidean_norm(xs) > 0.0

    assert euclidean_norm(vec(0, 0, 0)) == 0.0
    assert euclidean_norm(vec(-3, 4)) == 5.0
    print("  ✓ norm, symmetry and self-distance hold\n")


def test_weighted_squared_error_sum():
    """Zero denominators drop out of the sum."""
    print("=== Weighted Squared Error ===\n")

    assert weighted_squared_error_sum(vec(1, 2, 0), vec(0, 4, 0)) == 1.0

    # Nonzero xs over a zero ys still contributes nothing
    assert weighted_squared_error_sum(vec(100, -7), vec(0, 0)) == 0.0
    assert weighted_squared_error_sum(vec(3, 1), vec(1, 2)) == 4.0 + 0.5

    value = weighted_squared_error_sum(vec(5, 1, 2), vec(0.0, -0.0, 2))
    assert value == 0.0
    assert not math.isnan(value)
    print("  ✓ zero terms skipped, no NaN or inf\n")


def test_empty_vectors():
    empty = vec()
    assert dot_product(empty, empty) == 0.0
    assert euclidean_norm(empty) == 0.0
    assert euclidean_distance(empty, empty) == 0.0
    assert weighted_squared_error_sum(empty, empty) == 0.0
    nudge(empty, empty, 2.0)
    assert len(empty) == 0


def test_length_mismatch_fails():
    """Mismatched operands raise rather than return a wrong answer."""
    short, long = vec(1, 2), vec(1, 2, 3)
    failures = (AssertionError, IndexError, ValueError)

    with pytest.raises(failures):
        nudge(long, short, 1.0)
    with pytest.raises(failures):
        add_to(long, short)
    with pytest.raises(failures):
        subtract_from(long, short)
    with pytest.raises(failures):
        dot_product(long, short)
    with pytest.raises(failures):
        euclidean_distance(long, short)
    with pytest.raises(failures):
        weighted_squared_error_sum(long, short)


SRC_DIR = os.path.join(os.path.dirname(__file__), "..", "src")

OPTIMIZED_MISMATCH_SCRIPT = textwrap.dedent("""
    import sys

    import numpy as np

    from vecfold.core.array_ops import (
        L2_DISTANCE, PRODUCT, Folding, add_to, dot_product, euclidean_distance,
        nudge, subtract_from, weighted_squared_error_sum,
    )

    if __debug__:
        sys.exit("asserts are still enabled")

    def three():
        return np.array([1.0, 2.0, 3.0])

    one, two = np.array([5.0]), np.array([5.0, 6.0])
    cases = {
        "nudge short": lambda: nudge(three(), one, 1.0),
        "add_to short": lambda: add_to(three(), one),
        "subtract_from short": lambda: subtract_from(three(), two),
        "dot_product short": lambda: dot_product(three(), one),
        "euclidean_distance short": lambda: euclidean_distance(three(), one),
        "weighted short": lambda: weighted_squared_error_sum(three(), two),
        "fold_up_to short": lambda: L2_DISTANCE.fold_up_to(three(), one, 0.0),
        "scalar fold short": lambda: Folding(PRODUCT.op).fold(three(), two),
        "nudge long": lambda: nudge(one.copy(), three(), 1.0),
        "add_to long": lambda: add_to(one.copy(), three()),
        "dot_product long": lambda: dot_product(one, three()),
        "euclidean_distance long": lambda: euclidean_distance(one, three()),
        "weighted long": lambda: weighted_squared_error_sum(one, three()),
    }

    silent = []
    for name, call in cases.items():
        try:
            call()
        except (IndexError, ValueError):
            continue
        silent.append(name)
    print(", ".join(silent))
    sys.exit(1 if silent else 0)
""")


def test_length_mismatch_fails_without_asserts():
    """Under python -O a mismatch still raises, broadcasting included."""
    print("=== Mismatch Under -O ===\n")

    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [SRC_DIR, env.get("PYTHONPATH")]))
    proc = subprocess.run(
        [sys.executable, "-O", "-c", OPTIMIZED_MISMATCH_SCRIPT],
        env=env, capture_output=True, text=True,
    )
    assert proc.returncode == 0, proc.stdout + proc.stderr
    print("  ✓ IndexError / ValueError for every mismatch\n")


if __name__ == "__main__":
    test_concrete_measures()
    test_nudge()
    test_norm_and_distance()
    test_weighted_squared_error_sum()
