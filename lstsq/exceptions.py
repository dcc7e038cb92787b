# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Exceptions raised by the least-squares solvers and their backends.

Every error derives from `LeastSquaresError`, so callers can catch the
whole family at once, or pick out "no unique solution" via
`SingularMatrixError`.
"""

from typing import Optional, Tuple


class LeastSquaresError(Exception):
    """Base class for every error raised by lstsq."""


class DimensionMismatchError(LeastSquaresError, ValueError):
    """
    Operand shapes are inconsistent.

    Raised when b's height differs from A's row count, when A has fewer
    rows than columns, or when a backend is asked to multiply matrices
    whose inner dimensions disagree.

    Attributes
    ----------
    expected : tuple | None
        Shape (or partial shape) that was required.
    actual : tuple | None
        Shape that was received.
    """

    def __init__(
        self,
        message: str,
        expected: Optional[Tuple] = None,
        actual: Optional[Tuple] = None,
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class SingularMatrixError(LeastSquaresError, ArithmeticError):
    """
    A square system required by a solver is not invertible.

    For least squares this means A lacks full column rank, so there is
    no unique minimiser.

    Attributes
    ----------
    matrix_name : str | None
        Which matrix was singular, e.g. "R'" or "A^T A".
    rank : int | None
        Numerical rank, if it was computed.
    expected_rank : int | None
        Rank required for a unique solution.
    """

    def __init__(
        self,
        message: str,
        matrix_name: Optional[str] = None,
        rank: Optional[int] = None,
        expected_rank: Optional[int] = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.rank = rank
        self.expected_rank = expected_rank
