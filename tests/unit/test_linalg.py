__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import numpy as np
import pytest

from pysatl_measures.linalg import Cholesky, cholesky_positive_safe


class TestCholesky:
    def setup_method(self):
        self.lower = np.array([[2.0, 0.0], [1.0, 3.0]])

    def test_factors(self):
        chol = Cholesky(self.lower, "L")
        np.testing.assert_array_equal(chol.L, self.lower)
        np.testing.assert_array_equal(chol.U, self.lower.T)
        np.testing.assert_array_equal(chol.UL, self.lower)
        np.testing.assert_allclose(chol.matrix, self.lower @ self.lower.T)
        assert chol.size == 2

    def test_upper_storage(self):
        chol = Cholesky(self.lower.T, "U")
        np.testing.assert_array_equal(chol.L, self.lower)
        assert chol == Cholesky(self.lower, "L")

    def test_stored_factor_is_read_only_copy(self):
        source = self.lower.copy()
        chol = Cholesky(source)
        source[0, 0] = 100.0
        assert chol.L[0, 0] == 2.0
        assert not chol.UL.flags.writeable

    def test_invalid_input(self):
        with pytest.raises(ValueError, match="uplo"):
            Cholesky(self.lower, "X")  # type: ignore[arg-type]
        with pytest.raises(ValueError, match="square"):
            Cholesky(np.ones((2, 3)))

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(Cholesky(self.lower))


class TestCholeskyPositiveSafe:
    def test_positive_definite_input(self):
        matrix = np.array([[4.0, 2.0], [2.0, 10.0]])
        chol = cholesky_positive_safe(matrix)
        np.testing.assert_allclose(chol.matrix, matrix)

    def test_repairs_singular_correlation(self):
        matrix = np.ones((3, 3))
        chol = cholesky_positive_safe(matrix, unit_diagonal=True)
        np.testing.assert_allclose(np.diag(chol.matrix), np.ones(3))
        assert np.all(np.diag(chol.L) > 0)

    def test_rejects_bad_input(self):
        with pytest.raises(ValueError, match="square"):
            cholesky_positive_safe(np.ones(3))
        with pytest.raises(ValueError, match="finite"):
            cholesky_positive_safe(np.array([[1.0, np.nan], [np.nan, 1.0]]))
