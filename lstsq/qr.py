# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

from typing import Tuple

import numpy as np

from .exceptions import DimensionMismatchError


def householder_qr(
    A: np.ndarray, mode: str = "complete"
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Compute the QR decomposition of an m-by-n matrix A using
    Householder transformations. (m ≥ n)

    A = QR
    H = I - tau * w * transpose(w)
    tau = 2 / transpose(w) * w

    Parameters
    ----------
    A : (m, n) ndarray, m >= n
    mode : {"complete", "reduced"}
        "complete" returns the square orthogonal Q, "reduced" the
        economic factors.

    Returns
    -------
    complete:
        Q : (m, m) ndarray | orthogonal
        R : (m, n) ndarray | upper-triangular, zero below row n
    reduced:
        Q : (m, n) ndarray | orthonormal columns
        R : (n, n) ndarray | upper-triangular
    """
    if mode not in ("complete", "reduced"):
        raise ValueError(f"mode must be 'complete' or 'reduced', got {mode!r}")

    A = np.asarray(A, dtype=float)
    if A.ndim != 2:
        raise DimensionMismatchError(
            f"A must be 2-D, got {A.ndim}-D", actual=A.shape
        )
    m, n = A.shape
    if m < n:
        raise DimensionMismatchError(
            f"householder_qr needs m >= n, got {m}x{n}", actual=A.shape
        )

    Q = np.eye(m)
    R = A.copy()

    for j in range(n):
        # ---- build the reflector for column j --------------------------------
        x = R[j:, j]
        norm_x = np.linalg.norm(x)
        if norm_x == 0.0:  # already zero
            continue
        # w = x + sign(x0) ‖x‖ e₁
        w = x.copy()
        w[0] += np.copysign(norm_x, x[0])
        w /= np.linalg.norm(w)  # ‖w‖ = 1
        w = w.reshape(-1, 1)  # column
        tau = 2  # because w is unit-norm

        # ---- apply H = I – τ w wᵀ  to R (from the left) ----------------------
        R[j:, :] -= tau * w @ (w.T @ R[j:, :])
        # ---- accumulate Q = Q Hᵀ (Hᵀ = H)  -----------------------------------
        Q[:, j:] -= Q[:, j:] @ w @ (tau * w).T

    # force exact upper-triangular shape / zero tiny noise
    R[np.tril_indices(m, -1, n)] = 0.0

    if mode == "reduced":
        return Q[:, :n], R[:n, :]
    return Q, R
