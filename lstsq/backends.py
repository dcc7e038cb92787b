# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
Linear-algebra backends

The solvers never touch a decomposition routine directly, they go
through an object satisfying `LinearAlgebraBackend`. Two ship here:

- `NaiveBackend`   : the in-package Householder QR and Gaussian elimination
- `NumpyBackend`   : thin wrappers over `numpy.linalg` (the default)
"""

import logging
from typing import Optional, Protocol, Tuple, Union, runtime_checkable

import numpy as np

from .elimination import gaussian_solve, invert
from .exceptions import DimensionMismatchError, SingularMatrixError
from .qr import householder_qr
from .utils import scale_tol

logger = logging.getLogger(__name__)

Span = Union[range, slice, Tuple[int, int]]


@runtime_checkable
class LinearAlgebraBackend(Protocol):
    """Operations the least-squares solvers require of a matrix library."""

    def rows(self, M: np.ndarray) -> int: ...

    def cols(self, M: np.ndarray) -> int: ...

    def multiply(self, M1: np.ndarray, M2: np.ndarray) -> np.ndarray: ...

    def transpose(self, M: np.ndarray) -> np.ndarray: ...

    def qr_decompose(self, M: np.ndarray) -> Tuple[np.ndarray, np.ndarray]: ...

    def submatrix(
        self, M: np.ndarray, row_range: Span, col_range: Optional[Span] = None
    ) -> np.ndarray: ...

    def solve_square(self, M: np.ndarray, v: np.ndarray) -> np.ndarray: ...

    def invert(self, M: np.ndarray) -> np.ndarray: ...


def _as_slice(span: Optional[Span]) -> slice:
    if span is None:
        return slice(None)
    if isinstance(span, range):
        if span.step != 1:
            raise ValueError(f"submatrix ranges must be contiguous, got {span}")
        return slice(span.start, span.stop)
    if isinstance(span, slice):
        if span.step not in (None, 1):
            raise ValueError(f"submatrix ranges must be contiguous, got {span}")
        return span
    start, stop = span
    return slice(start, stop)


def _require_square(M: np.ndarray, name: str = "M") -> int:
    if M.ndim != 2 or M.shape[0] != M.shape[1]:
        raise DimensionMismatchError(
            f"{name} must be square, got shape {M.shape}", actual=M.shape
        )
    return M.shape[0]


class _DenseBackend:
    """Shape queries, products and slicing shared by both backends."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"

    def rows(self, M: np.ndarray) -> int:
        return int(np.shape(M)[0])

    def cols(self, M: np.ndarray) -> int:
        shape = np.shape(M)
        return int(shape[1]) if len(shape) > 1 else 1

    def multiply(self, M1: np.ndarray, M2: np.ndarray) -> np.ndarray:
        M1 = np.asarray(M1, dtype=float)
        M2 = np.asarray(M2, dtype=float)
        if M1.shape[-1] != M2.shape[0]:
            raise DimensionMismatchError(
                f"cannot multiply {M1.shape} by {M2.shape}: inner dimensions differ",
                expected=(M1.shape[-1],),
                actual=M2.shape,
            )
        return M1 @ M2

    def transpose(self, M: np.ndarray) -> np.ndarray:
        return np.asarray(M, dtype=float).T

    def submatrix(
        self, M: np.ndarray, row_range: Span, col_range: Optional[Span] = None
    ) -> np.ndarray:
        M = np.asarray(M, dtype=float)
        rs = _as_slice(row_range)
        if M.ndim == 1:
            if col_range is not None:
                raise DimensionMismatchError(
                    "column range given for a 1-D vector", actual=M.shape
                )
            return M[rs].copy()
        return M[rs, _as_slice(col_range)].copy()


class NaiveBackend(_DenseBackend):
    """Everything computed by the algorithms in this package."""

    name = "naive"

    def qr_decompose(self, M: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        return householder_qr(M, mode="complete")

    def solve_square(self, M: np.ndarray, v: np.ndarray) -> np.ndarray:
        M = np.asarray(M, dtype=float)
        _require_square(M)
        return gaussian_solve(M, np.asarray(v, dtype=float), name="M")

    def invert(self, M: np.ndarray) -> np.ndarray:
        M = np.asarray(M, dtype=float)
        _require_square(M)
        return invert(M, name="M")


class NumpyBackend(_DenseBackend):
    """
    Delegates to `numpy.linalg`.

    LAPACK only reports exactly zero pivots, so a rank check with the same
    tolerance the naive backend uses runs first. Any `LinAlgError` that
    still escapes is re-raised as SingularMatrixError.
    """

    name = "numpy"

    def qr_decompose(self, M: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        M = np.asarray(M, dtype=float)
        if M.ndim != 2:
            raise DimensionMismatchError(
                f"M must be 2-D, got {M.ndim}-D", actual=M.shape
            )
        return np.linalg.qr(M, mode="complete")

    def _check_rank(self, M: np.ndarray) -> None:
        n = M.shape[0]
        rank = int(np.linalg.matrix_rank(M, tol=scale_tol(M)))
        if rank < n:
            raise SingularMatrixError(
                f"M is singular (rank {rank} < {n})",
                matrix_name="M",
                rank=rank,
                expected_rank=n,
            )

    def solve_square(self, M: np.ndarray, v: np.ndarray) -> np.ndarray:
        M = np.asarray(M, dtype=float)
        v = np.asarray(v, dtype=float)
        n = _require_square(M)
        if v.shape[0] != n:
            raise DimensionMismatchError(
                f"right-hand side has {v.shape[0]} rows, expected {n}",
                expected=(n,),
                actual=v.shape,
            )
        self._check_rank(M)
        try:
            return np.linalg.solve(M, v)
        except np.linalg.LinAlgError as e:
            raise SingularMatrixError(str(e), matrix_name="M", expected_rank=n) from e

    def invert(self, M: np.ndarray) -> np.ndarray:
        M = np.asarray(M, dtype=float)
        n = _require_square(M)
        self._check_rank(M)
        try:
            return np.linalg.inv(M)
        except np.linalg.LinAlgError as e:
            raise SingularMatrixError(str(e), matrix_name="M", expected_rank=n) from e


BACKENDS = {
    NaiveBackend.name: NaiveBackend,
    NumpyBackend.name: NumpyBackend,
}
DEFAULT_BACKEND = NumpyBackend.name


def get_backend(
    backend: Union[None, str, LinearAlgebraBackend] = None,
) -> LinearAlgebraBackend:
    """
    Resolve `backend` to an instance.

    None picks the default, a string is looked up in BACKENDS, and any
    object implementing the protocol is returned unchanged.
    """
    if backend is None:
        backend = DEFAULT_BACKEND
    if isinstance(backend, str):
        try:
            return BACKENDS[backend]()
        except KeyError:
            raise ValueError(
                f"unknown backend {backend!r}, choose from {sorted(BACKENDS)}"
            ) from None
    if not isinstance(backend, LinearAlgebraBackend):
        raise TypeError(f"{backend!r} does not implement LinearAlgebraBackend")
    return backend
