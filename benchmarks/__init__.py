"""vecfold Benchmark Suite — Speed and sanity checks for the kernels.

Benchmarks:
1. Element-wise: nudge, add_to, subtract_from, scale
2. Folds: dot product, distances, Sammon measure, bounded folds
3. Sammon: distance matrices and stress over random point clouds
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class BenchmarkResult:
    """Result of a single benchmark."""

    name: str
    total: int = 0
    correct: int = 0
    errors: list[str] = field(default_factory=list)
    duration_seconds: float = 0.0
    operations: int = 0
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def accuracy(self) -> float:
        return self.correct / max(self.total, 1)

    @property
    def ops_per_second(self) -> float:
        return self.operations / self.duration_seconds if self.duration_seconds else 0.0

    def summary(self) -> str:
        return (
            f"{self.name}: {self.correct}/{self.total} checks "
            f"({self.accuracy:.1%}), {self.ops_per_second:,.0f} ops/s "
            f"in {self.duration_seconds:.2f}s"
        )
