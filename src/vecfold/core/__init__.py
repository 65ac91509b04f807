"""Configuration for vector kernels."""

from dataclasses import dataclass


@dataclass
class KernelConfig:
    """Configuration for kernel operations.

    Attributes:
        dimension: Size of vectors allocated by ArrayOps (default 100)
        seed: Random seed for reproducibility (None = random)
        check_lengths: Validate operand lengths before each binary operation
    """

    dimension: int = 100
    seed: int | None = None
    check_lengths: bool = False


# Global default config
DEFAULT_CONFIG = KernelConfig()
