__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest

from pysatl_measures.linalg import Cholesky
from pysatl_measures.transforms import (
    AffineTransform,
    CorrCholeskyTransform,
    Transform,
    as_positive_real,
    as_real,
)


def _upper_entries(chol: Cholesky) -> np.ndarray:
    k = chol.size
    return np.array([chol.U[row, col] for col in range(k) for row in range(col)])


class TestScalarTransforms:
    def test_protocol(self):
        for t in (as_real, as_positive_real, AffineTransform(), CorrCholeskyTransform(3)):
            assert isinstance(t, Transform)

    def test_identity(self):
        assert as_real.transform(1.5) == 1.5
        assert as_real.inverse(-2.0) == -2.0
        assert as_real.log_abs_det_jacobian(3.0) == 0.0
        assert as_real.dimension == 1

    def test_exp(self):
        assert as_positive_real.transform(0.0) == 1.0
        assert as_positive_real.inverse(math.e) == pytest.approx(1.0)
        assert as_positive_real.log_abs_det_jacobian(0.4) == pytest.approx(0.4)


class TestAffineTransform:
    def test_map(self):
        t = AffineTransform(mu=1.0, sigma=-2.0)
        assert t.transform(3.0) == -5.0
        assert t.inverse(-5.0) == 3.0
        assert t.log_abs_det_jacobian() == pytest.approx(math.log(2.0))

    @pytest.mark.parametrize(
        "params, mu, sigma",
        [
            ({}, 0.0, 1.0),
            ({"mu": 2.0}, 2.0, 1.0),
            ({"sigma": 3.0}, 0.0, 3.0),
            ({"mu": -1.0, "lambda_": 4.0}, -1.0, 0.25),
        ],
    )
    def test_from_params(self, params, mu, sigma):
        t = AffineTransform.from_params(params)
        assert t.mu == mu
        assert t.sigma == pytest.approx(sigma)

    def test_from_params_rejects_conflicts(self):
        with pytest.raises(ValueError, match="either"):
            AffineTransform.from_params({"sigma": 1.0, "lambda_": 1.0})
        with pytest.raises(ValueError, match="Unknown"):
            AffineTransform.from_params({"loc": 1.0})


class TestCorrCholeskyTransform:
    def test_dimension(self):
        assert [CorrCholeskyTransform(k).dimension for k in (1, 2, 3, 5)] == [0, 1, 3, 10]

    def test_zero_maps_to_identity(self):
        chol = CorrCholeskyTransform(4).transform(np.zeros(6))
        np.testing.assert_allclose(chol.matrix, np.eye(4))

    def test_image_is_correlation_factor(self):
        t = CorrCholeskyTransform(4)
        chol = t.transform(np.random.default_rng(6).normal(size=6) * 2)
        np.testing.assert_allclose(np.diag(chol.matrix), np.ones(4))
        assert np.all(np.diag(chol.U) > 0)
        np.testing.assert_allclose(chol.U, np.triu(chol.U))

    def test_inverse_recovers_coordinates(self):
        t = CorrCholeskyTransform(3)
        y = np.array([0.3, -1.2, 0.8])
        np.testing.assert_allclose(t.inverse(t.transform(y)), y, atol=1e-10)

    def test_log_abs_det_jacobian_matches_finite_differences(self):
        t = CorrCholeskyTransform(3)
        y = np.array([0.4, -0.6, 1.1])
        h = 1e-6
        jacobian = np.empty((3, 3))
        for j in range(3):
            step = np.zeros(3)
            step[j] = h
            jacobian[:, j] = (
                _upper_entries(t.transform(y + step)) - _upper_entries(t.transform(y - step))
            ) / (2 * h)
        expected = math.log(abs(np.linalg.det(jacobian)))
        assert t.log_abs_det_jacobian(y) == pytest.approx(expected, rel=1e-6)

    def test_shape_checks(self):
        t = CorrCholeskyTransform(3)
        with pytest.raises(ValueError, match="length 3"):
            t.transform(np.zeros(2))
        with pytest.raises(ValueError, match="3x3"):
            t.inverse(np.eye(2))
        with pytest.raises(ValueError, match="k >= 1"):
            CorrCholeskyTransform(0)
