# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Projection operations
"""

import numpy as np

from .solvers import check_dimensions, solve_qr
from .utils import column_norms


def residual(A: np.ndarray, x: np.ndarray, b: np.ndarray) -> np.ndarray:
    """r = Ax − b"""
    A = np.asarray(A, dtype=float)
    return A @ np.asarray(x, dtype=float) - np.asarray(b, dtype=float)


def residual_norm(A: np.ndarray, x: np.ndarray, b: np.ndarray):
    """
    ‖Ax − b‖₂

    Returns a float for a single right-hand side and one norm per
    column when b is (m, k) with k > 1.
    """
    return column_norms(residual(A, x, b))


def project_onto_colspace(
    A: np.ndarray, b: np.ndarray, solver=solve_qr, backend=None
) -> np.ndarray:
    """
    Find p = A x, the orthogonal projection of b onto
    the column-space of A, where x is the least-squares solution.

    Returns
    -------
    p : ndarray, same shape as b

    Raises SingularMatrixError if the columns of A are not independent.
    """
    A, b = check_dimensions(A, b)
    x = solver(A, b, backend=backend)
    return A @ x
