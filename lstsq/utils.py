# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import numpy as np

# Pivots at or below EPS * ‖A‖∞ are treated as zero
EPS: float = 1e-12


def scale_tol(A: np.ndarray) -> float:
    """Return an absolute tolerance scaled to the matrix magnitude."""
    if A.size == 0:
        return 0.0
    return EPS * float(np.linalg.norm(A, ord=np.inf))


def as_float_array(M, name: str = "M") -> np.ndarray:
    """Copy M into a float64 ndarray, rejecting anything that is not numeric."""
    try:
        return np.array(M, dtype=float)
    except (TypeError, ValueError) as e:
        raise TypeError(f"{name} must be a numeric array-like, got {type(M)}") from e


def random_full_column_rank(m, n, seed=None) -> np.ndarray:
    """
    Tall (m ≥ n) random matrix with condition number at most 10.

    Built as U · diag(s) · Vᵀ from random orthonormal factors, so the
    condition number is bounded by max(s) / min(s) ≤ 10.
    """
    if m < n:
        raise ValueError(f"need m >= n, got {m}x{n}")
    rng = np.random.default_rng(seed)
    U, _ = np.linalg.qr(rng.standard_normal((m, n)))
    V, _ = np.linalg.qr(rng.standard_normal((n, n)))
    s = rng.uniform(1.0, 10.0, size=n)
    return np.asarray((U * s) @ V.T)


def column_norms(r: np.ndarray):
    """‖r‖₂ for a vector, or one norm per column of an (m, k) matrix.

    A single column collapses to a float.
    """
    r = np.asarray(r, dtype=float)
    if r.ndim == 1:
        return float(np.linalg.norm(r))
    norms = np.linalg.norm(r, axis=0)
    if norms.shape[0] == 1:
        return float(norms[0])
    return norms
