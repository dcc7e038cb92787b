# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging
from typing import List, Optional, Tuple

import numpy as np

from .exceptions import DimensionMismatchError, SingularMatrixError
from .utils import scale_tol

logger = logging.getLogger(__name__)


def forward_eliminate(
    A: np.ndarray,
    b: Optional[np.ndarray] = None,
) -> Tuple[np.ndarray, Optional[np.ndarray], List[int], List[int], List[int]]:
    """
    Row-echelon reduction with partial pivoting on an m by n matrix A.

    Parameters
    ----------
    A : np.ndarray               (m, n)
        Coefficient matrix (MUST be ndarray).
    b : np.ndarray | None        (m,) or (m, k)
        Optional right-hand side; same row swaps & updates applied.

    Returns
    -------
    U      : np.ndarray          (m, n)
        Row-echelon form of A (upper-trapezoidal, not reduced).
    c      : np.ndarray | None   (m, k)
        b after identical row ops, always 2-D (None if b was None).
    pivots : list[int]
        Column indices where pivots were placed; len = rank(A).
    free : list[int]
        Column indices without a pivot.
    perm   : list[int]
        Final row order: row i of U comes from original row perm[i].
    """
    if not isinstance(A, np.ndarray):
        raise TypeError("A must be a NumPy ndarray")
    if b is not None and not isinstance(b, np.ndarray):
        raise TypeError("b must be a NumPy ndarray or None")

    U = A.astype(float, copy=True)
    m, n = U.shape

    if b is not None:
        if b.shape[0] != m:
            raise DimensionMismatchError(
                f"right-hand side has {b.shape[0]} rows, expected {m}",
                expected=(m,),
                actual=b.shape,
            )
        c = b.astype(float)[:, None] if b.ndim == 1 else b.astype(float, copy=True)
    else:
        c = None

    pivot_tol = scale_tol(U)

    perm = list(range(m))
    pivots: List[int] = []
    free: List[int] = []

    row = 0
    for col in range(n):
        if row == m:
            free.extend(range(col, n))
            break
        # Pick the largest magnitude entry on or below the current row
        # as the pivot, this keeps the multipliers bounded by 1.
        col_slice = np.abs(U[row:, col])
        max_idx = int(col_slice.argmax())
        max_val = col_slice[max_idx]

        if max_val <= pivot_tol:  # column is numerically zero
            free.append(col)
            continue

        pivot_row = row + max_idx

        if pivot_row != row:
            U[[row, pivot_row]] = U[[pivot_row, row]]
            if c is not None:
                c[[row, pivot_row]] = c[[pivot_row, row]]
            perm[row], perm[pivot_row] = perm[pivot_row], perm[row]

        pivots.append(col)

        # Eliminate entries below the pivot
        factors = U[row + 1 :, col] / U[row, col]
        U[row + 1 :, col:] -= factors[:, None] * U[row, col:]
        if c is not None:
            c[row + 1 :, :] -= factors[:, None] * c[row, :]

        row += 1

    return U, c, pivots, free, perm


def back_substitute(U: np.ndarray, c: np.ndarray, name: str = "U") -> np.ndarray:
    """
    Solve the upper-triangular system Ux = c from the bottom row up.

    Parameters
    ----------
    U : (n, n) ndarray
        Upper-triangular matrix. Entries below the diagonal are ignored.
    c : (n,) or (n, k) ndarray
        Right-hand side.
    name : str
        Label for U used in error messages.

    Returns
    -------
    x : ndarray with the same ndim as c

    Raises
    ------
    DimensionMismatchError : U is not square or c has the wrong height.
    SingularMatrixError : a diagonal entry of U is numerically zero.
    """
    U = np.asarray(U, dtype=float)
    c = np.asarray(c, dtype=float)

    if U.ndim != 2 or U.shape[0] != U.shape[1]:
        raise DimensionMismatchError(
            f"{name} must be square, got shape {U.shape}", actual=U.shape
        )
    n = U.shape[0]
    if c.shape[0] != n:
        raise DimensionMismatchError(
            f"right-hand side has {c.shape[0]} rows, expected {n}",
            expected=(n,),
            actual=c.shape,
        )

    flat = c.ndim == 1
    if flat:
        c = c[:, None]
    k = c.shape[1]
    x = np.zeros((n, k), dtype=float)
    tol = scale_tol(U)

    diag = np.abs(np.diag(U))
    if np.any(diag <= tol):
        rank = int(np.sum(diag > tol))
        raise SingularMatrixError(
            f"{name} is singular: {n - rank} zero pivot(s) on the diagonal",
            matrix_name=name,
            rank=rank,
            expected_rank=n,
        )

    for i in reversed(range(n)):
        s = c[i] - U[i, i + 1 :] @ x[i + 1 :]
        x[i] = s / U[i, i]

    if flat:
        return x.ravel()
    return x


def gaussian_solve(A: np.ndarray, b: np.ndarray, name: str = "A"):
    """
    Solve the square system Ax = b by elimination then back-substitution.

    Unlike least squares there is no fallback here: a rank-deficient A
    raises SingularMatrixError.
    """
    A = np.asarray(A, dtype=float)
    b = np.asarray(b, dtype=float)
    m, n = A.shape
    if m != n:
        raise DimensionMismatchError(
            f"{name} must be square, got shape {A.shape}", actual=A.shape
        )

    U, c, pivots, free, perm = forward_eliminate(A, b)
    if free:
        logger.debug(f"{name}: free columns {free}, rank {len(pivots)} of {n}")
        raise SingularMatrixError(
            f"{name} is singular (rank {len(pivots)} < {n})",
            matrix_name=name,
            rank=len(pivots),
            expected_rank=n,
        )

    x = back_substitute(U, c, name=name)
    if b.ndim == 1:
        return x.ravel()
    return x


def invert(A: np.ndarray, name: str = "A") -> np.ndarray:
    """Explicit inverse of a square matrix, solved column by column against I."""
    A = np.asarray(A, dtype=float)
    n = A.shape[0]
    return gaussian_solve(A, np.eye(n), name=name)
