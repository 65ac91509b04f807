"""Analysis built on the vector kernels."""

from vecfold.analysis.sammon import distance_matrix, error_reaches, sammon_error

__all__ = ["distance_matrix", "error_reaches", "sammon_error"]
