# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BUSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

"""
lstsq
=====

Linear least squares: find x minimising ‖Ax − b‖₂ for a tall,
full column rank A, by two independent routes over a swappable
linear-algebra backend.

Public API
~~~~~~~~~~
- Solvers
    - `solve_qr`, `solve_normal`, `check_dimensions`
- Backends
    - `LinearAlgebraBackend`, `NaiveBackend`, `NumpyBackend`, `get_backend`
- Building blocks
    - `householder_qr`, `forward_eliminate`, `back_substitute`,
      `gaussian_solve`, `invert`
- Projections
    - `project_onto_colspace`, `residual`, `residual_norm`
- Errors
    - `LeastSquaresError`, `DimensionMismatchError`, `SingularMatrixError`

Example
-------
>>> import numpy as np, lstsq
>>> A = np.array([[1.0, 0.0], [1.0, 1.0], [1.0, 2.0]])
>>> b = np.array([6.0, 0.0, 0.0])
>>> x, res = lstsq.solve_qr(A, b, full_output=True)
>>> np.allclose(x, lstsq.solve_normal(A, b))
True
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

from .backends import (
    BACKENDS,
    DEFAULT_BACKEND,
    LinearAlgebraBackend,
    NaiveBackend,
    NumpyBackend,
    get_backend,
)
from .elimination import (
    back_substitute,
    forward_eliminate,
    gaussian_solve,
    invert,
)
from .exceptions import (
    DimensionMismatchError,
    LeastSquaresError,
    SingularMatrixError,
)
from .projections import project_onto_colspace, residual, residual_norm
from .qr import householder_qr
from .solvers import check_dimensions, solve_normal, solve_qr
from .utils import EPS, scale_tol

__all__ = [
    "solve_qr",
    "solve_normal",
    "check_dimensions",
    "LinearAlgebraBackend",
    "NaiveBackend",
    "NumpyBackend",
    "BACKENDS",
    "DEFAULT_BACKEND",
    "get_backend",
    "householder_qr",
    "forward_eliminate",
    "back_substitute",
    "gaussian_solve",
    "invert",
    "project_onto_colspace",
    "residual",
    "residual_norm",
    "LeastSquaresError",
    "DimensionMismatchError",
    "SingularMatrixError",
    "EPS",
    "scale_tol",
]

# ---------------------------------------------------------------------
# Version string (helps “pip show lstsq”)
# ---------------------------------------------------------------------
try:  # installed via pip / build backend
    __version__ = _pkg_version(__name__)
except PackageNotFoundError:  # running from a checkout
    __version__ = "0.0.0.dev0"

# ---------------------------------------------------------------------
# Library default: stay silent unless the caller configures logging.
# ---------------------------------------------------------------------
import logging as _logging

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
