# Copyright (C) 2025 Brantleigh Bunting
# SPDX-License-Identifier: BSL-1.1
#
# Use of this software is governed by the Business Source License
# included in the LICENSE file and at <https://mariadb.com/bsl11>

import logging

import numpy as np
import pytest

from lstsq.exceptions import DimensionMismatchError
from lstsq.qr import householder_qr

logger = logging.getLogger(__name__)


@pytest.mark.parametrize("m,n", [(5, 3), (10, 10), (100, 10), (7, 1)])
def test_householder_qr_complete(m, n):
    rng = np.random.default_rng(seed=m * n)
    A = rng.standard_normal((m, n))
    Q, R = householder_qr(A)
    logger.debug(f"\nQ:\n{Q}\nR:\n{R}\n")

    assert Q.shape == (m, m)
    assert R.shape == (m, n)
    np.testing.assert_allclose(Q @ R, A, atol=1e-10)
    assert np.allclose(Q.T @ Q, np.eye(m), atol=1e-10)
    # everything below the diagonal is exactly zero
    assert np.all(np.tril(R, -1) == 0.0)


def test_householder_qr_reduced():
    V = np.random.randn(100, 10)
    Q, R = householder_qr(V, mode="reduced")
    assert Q.shape == (100, 10)
    assert R.shape == (10, 10)
    assert np.allclose(Q.T @ Q, np.eye(10), atol=1e-10)
    np.testing.assert_allclose(Q @ R, V, atol=1e-10)


def test_householder_qr_does_not_modify_input():
    A = np.arange(12, dtype=float).reshape(4, 3)
    before = A.copy()
    householder_qr(A)
    np.testing.assert_array_equal(A, before)


def test_householder_qr_rejects_wide_matrix():
    with pytest.raises(DimensionMismatchError):
        householder_qr(np.ones((2, 3)))


def test_householder_qr_rejects_unknown_mode():
    with pytest.raises(ValueError, match="mode"):
        householder_qr(np.eye(3), mode="economic")


@pytest.mark.parametrize("scale", [1e-13, 1e-30])
def test_householder_qr_tiny_scale(scale):
    A = scale * np.array(
        [
            [3, 4, 5],
            [6, 1, 2],
            [2, 3, 0],
            [1, 1, 1],
            [2, 4, 6],
        ],
        dtype=float,
    )
    Q, R = householder_qr(A)
    np.testing.assert_allclose(Q @ R, A, rtol=0, atol=scale * 1e-12)
    assert np.allclose(Q.T @ Q, np.eye(5), atol=1e-10)
    assert np.all(np.abs(np.diag(R)) > 1e-3 * scale)


def test_householder_qr_zero_column():
    A = np.array([[1.0, 0.0], [2.0, 0.0], [2.0, 0.0]])
    Q, R = householder_qr(A)
    np.testing.assert_allclose(Q @ R, A, atol=1e-12)
    assert R[1, 1] == 0.0
