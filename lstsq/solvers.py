# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Least-squares solvers

Both functions return the x minimising ‖Ax − b‖₂ for a tall (m ≥ n),
full column rank A. They are alternative routes to the same answer:

solve_qr
    A = QR, then ‖Ax − b‖ = ‖Rx − Qᵀb‖ because Q preserves length.
    Splitting Qᵀb into c (first n rows) and d (the rest) leaves the
    triangular system R'x = c, with ‖d‖ the smallest reachable residual.

solve_normal
    Setting the gradient of (Ax − b)ᵀ(Ax − b) to zero gives
    AᵀA x = Aᵀb. Forming AᵀA squares the condition number of A, so this
    route loses accuracy sooner on ill-conditioned problems.
"""

import logging
from typing import Tuple, Union

import numpy as np

from .backends import LinearAlgebraBackend, get_backend
from .elimination import back_substitute
from .exceptions import DimensionMismatchError, SingularMatrixError
from .utils import as_float_array, column_norms

logger = logging.getLogger(__name__)

QR_METHODS = ("back_substitution", "inverse")

BackendLike = Union[None, str, LinearAlgebraBackend]


def check_dimensions(A, b) -> Tuple[np.ndarray, np.ndarray]:
    """
    Validate the shapes of a least-squares problem and return float copies.

    A must be 2-D with m ≥ n ≥ 1 and b must be (m,) or (m, k).
    """
    A = as_float_array(A, "A")
    b = as_float_array(b, "b")

    if A.ndim != 2:
        raise DimensionMismatchError(
            f"A must be a 2-D matrix, got {A.ndim}-D", actual=A.shape
        )
    m, n = A.shape
    if n == 0:
        raise DimensionMismatchError("A has no columns", actual=A.shape)
    if b.ndim not in (1, 2):
        raise DimensionMismatchError(
            f"b must be a vector or a column matrix, got {b.ndim}-D",
            expected=(m,),
            actual=b.shape,
        )
    if b.shape[0] != m:
        raise DimensionMismatchError(
            f"b has height {b.shape[0]} but A has {m} rows",
            expected=(m,),
            actual=b.shape,
        )
    if m < n:
        raise DimensionMismatchError(
            f"A is {m}x{n}: underdetermined systems (m < n) are not supported",
            expected=(n, n),
            actual=A.shape,
        )
    return A, b


def solve_qr(
    A,
    b,
    backend: BackendLike = None,
    method: str = "back_substitution",
    full_output: bool = False,
):
    """
    Solve min ‖Ax – b‖₂ through a complete QR factorisation (A = QR).

    Parameters
    ----------
    A : (m, n) array-like, m >= n
    b : (m,) or (m, k) array-like
    backend : str | LinearAlgebraBackend | None
        Where the factorisation, products and slicing happen.
    method : {"back_substitution", "inverse"}
        How R'x = c is solved. "inverse" forms R'^{-1} explicitly and
        multiplies; it is kept because it mirrors the textbook derivation
        but it is less accurate and can flag near-singular R' as singular.
    full_output : bool
        Also return ‖d‖, the residual norm of the solution.

    Returns
    -------
    x : (n,) or (n, k) ndarray
    residual_norm : float or (k,) ndarray, only if full_output

    Raises
    ------
    DimensionMismatchError : shapes are inconsistent or m < n.
    SingularMatrixError : A does not have full column rank.
    """
    if method not in QR_METHODS:
        raise ValueError(f"method must be one of {QR_METHODS}, got {method!r}")

    A, b = check_dimensions(A, b)
    la = get_backend(backend)
    m, n = la.rows(A), la.cols(A)
    logger.debug(f"solve_qr: A is {m}x{n}, backend={la!r}, method={method}")

    Q, R = la.qr_decompose(A)

    # Q is orthogonal so Q^{-1} = Qᵀ
    y = la.multiply(la.transpose(Q), b)

    # rows n..m of R are zero, only the top square block matters
    R_top = la.submatrix(R, range(0, n), range(0, n))
    c = la.submatrix(y, range(0, n))
    d = la.submatrix(y, range(n, m))

    if method == "back_substitution":
        x = back_substitute(R_top, c, name="R'")
    else:
        try:
            R_inv = la.invert(R_top)
        except SingularMatrixError as e:
            raise SingularMatrixError(
                "R' is singular: the columns of A are linearly dependent",
                matrix_name="R'",
                rank=e.rank,
                expected_rank=n,
            ) from e
        x = la.multiply(R_inv, c)

    residual_norm = column_norms(d)
    logger.debug(f"solve_qr: residual norm {residual_norm}")

    if full_output:
        return x, residual_norm
    return x


def solve_normal(
    A,
    b,
    backend: BackendLike = None,
    full_output: bool = False,
):
    """
    Solve min ‖Ax – b‖₂ through the normal equations AᵀA x = Aᵀb.

    The Gram matrix G = AᵀA is handed to the backend's square solver,
    never inverted. With full_output the residual norm ‖Ax − b‖ is
    computed explicitly and returned alongside x.

    Raises
    ------
    DimensionMismatchError : shapes are inconsistent or m < n.
    SingularMatrixError : AᵀA is singular, i.e. A is rank deficient.
    """
    A, b = check_dimensions(A, b)
    la = get_backend(backend)
    m, n = la.rows(A), la.cols(A)
    logger.debug(f"solve_normal: A is {m}x{n}, backend={la!r}")

    At = la.transpose(A)
    G = la.multiply(At, A)
    p = la.multiply(At, b)

    try:
        x = la.solve_square(G, p)
    except SingularMatrixError as e:
        raise SingularMatrixError(
            "A^T A is singular: the columns of A are linearly dependent",
            matrix_name="A^T A",
            rank=e.rank,
            expected_rank=n,
        ) from e

    if full_output:
        residual_norm = column_norms(la.multiply(A, x) - b)
        logger.debug(f"solve_normal: residual norm {residual_norm}")
        return x, residual_norm
    return x
