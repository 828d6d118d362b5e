"""
Tests for LKJCholesky Distribution Family

This module tests the LKJ distribution over Cholesky factors of correlation
matrices: both parameterizations, densities, base measures and sampling.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import math
import warnings

import numpy as np
import pytest
from scipy.stats import beta

from pysatl_measures.exceptions import DispatchError
from pysatl_measures.families.configuration import configure_families_register
from pysatl_measures.linalg import Cholesky
from pysatl_measures.measures import Pushforward, WeightedMeasure, logdensityof
from pysatl_measures.special import lkj_logc0
from pysatl_measures.transforms import CorrCholeskyTransform, as_positive_real, as_real
from pysatl_measures.types import FamilyName, Kind, MatrixDistributionType

from ..base import BaseDistributionTest


def _factor_2x2(r: float) -> Cholesky:
    return Cholesky(np.array([[1.0, 0.0], [r, math.sqrt(1.0 - r * r)]]), "L")


class TestLKJCholeskyFamily(BaseDistributionTest):
    """Test suite for LKJCholesky distribution family."""

    def setup_method(self):
        """Setup before each test method."""
        registry = configure_families_register()
        self.lkj_family = registry.get(FamilyName.LKJ_CHOLESKY)

    def test_family_properties(self):
        assert self.lkj_family.name == FamilyName.LKJ_CHOLESKY
        assert self.lkj_family.parametrization_names == ["concentration", "log_concentration"]

    def test_parametrization_resolution(self):
        default = self.lkj_family(k=3)
        assert default.parametrization_name == "concentration"
        assert default.parameters.eta == 1.0
        assert self.lkj_family(k=3, eta=2.0).parametrization_name == "concentration"
        assert self.lkj_family(k=3, logeta=0.1).parametrization_name == "log_concentration"
        assert default.distribution_type == MatrixDistributionType(Kind.CONTINUOUS, (3, 3))

    @pytest.mark.parametrize("params", [{"k": 3.0, "eta": 2.0}, {"k": np.int64(3), "logeta": 0.5}])
    def test_integral_dimension_is_normalized(self, params):
        dist = self.lkj_family(**params)
        assert dist.parameters.k == 3
        assert type(dist.parameters.k) is int
        assert dist.basemeasure().base.transform == CorrCholeskyTransform(3)
        assert dist.testvalue() == Cholesky(np.eye(3), "U")
        assert dist.distribution_type == MatrixDistributionType(Kind.CONTINUOUS, (3, 3))

    @pytest.mark.parametrize(
        "params, message",
        [
            ({"k": 0}, "k is an integer"),
            ({"k": 2.5}, "k is an integer"),
            ({"k": 3, "eta": 0.0}, "eta > 0"),
            ({"k": 3, "logeta": math.inf}, "logeta is finite"),
        ],
    )
    def test_parametrization_constraints(self, params, message):
        with pytest.raises(ValueError, match=message):
            self.lkj_family(**params)

    def test_identity_has_zero_logdensity(self):
        dist = self.lkj_family(k=3, eta=1.0)
        identity = CorrCholeskyTransform(3).transform(np.zeros(3))
        assert dist.logdensity(identity) == 0.0
        assert dist.logdensity(np.eye(3)) == 0.0

    def test_upper_and_lower_factors_agree(self):
        dist = self.lkj_family(k=3, eta=2.5)
        factor = dist.sample(np.random.default_rng(5))
        as_upper = Cholesky(factor.U, "U")
        assert dist.logdensity(factor) == pytest.approx(dist.logdensity(as_upper))
        assert dist.logdensity(factor) == pytest.approx(dist.logdensity(factor.L))

    def test_logdensity_formula(self):
        k, eta = 4, 1.7
        factor = self.lkj_family(k=k, eta=eta).sample(np.random.default_rng(9))
        diag = np.diagonal(factor.L)
        expected = sum((k + 2 * (eta - 1) - i) * math.log(diag[i - 1]) for i in range(1, k + 1))
        assert self.lkj_family(k=k, eta=eta).logdensity(factor) == pytest.approx(expected)

    def test_log_concentration_matches_concentration(self):
        rng = np.random.default_rng(20251017)
        for _ in range(20):
            k = int(rng.integers(2, 7))
            logeta = float(rng.uniform(-2.0, 2.0))
            by_log = self.lkj_family(k=k, logeta=logeta)
            by_eta = self.lkj_family(k=k, eta=math.exp(logeta))
            point = by_eta.sample(rng)
            assert by_log.logdensity(point) == pytest.approx(
                by_eta.logdensity(point), rel=1e-9, abs=1e-12
            )
            assert logdensityof(by_log, point) == pytest.approx(
                logdensityof(by_eta, point), rel=1e-9, abs=1e-12
            )

    def test_log_concentration_delegates_through_proxy(self):
        dist = self.lkj_family(k=3, logeta=0.3)
        assert dist.has_proxy
        assert dist.proxy() == self.lkj_family(k=3, eta=math.exp(0.3))
        assert dist.testvalue() == Cholesky(np.eye(3), "U")
        assert dist.as_transform() == CorrCholeskyTransform(3)
        assert dist.insupport(dist.testvalue())

    def test_basemeasure(self):
        base = self.lkj_family(k=3, eta=2.0).basemeasure()
        assert isinstance(base, WeightedMeasure)
        assert base.logweight == pytest.approx(lkj_logc0(3, 2.0))
        assert isinstance(base.base, Pushforward)
        assert base.base.transform == CorrCholeskyTransform(3)
        assert base.base.is_primitive

        log_base = self.lkj_family(k=3, logeta=math.log(2.0)).basemeasure()
        assert log_base.logweight == pytest.approx(lkj_logc0(3, 2.0))

    @pytest.mark.parametrize("eta", [0.5, 1.0, 2.0, 7.5])
    def test_bivariate_density_matches_beta(self, eta):
        """For ``k = 2`` the correlation is ``2 * Beta(eta, eta) - 1``."""
        dist = self.lkj_family(k=2, eta=eta)
        for r in (-0.9, -0.3, 0.0, 0.45, 0.8):
            expected = beta.logpdf((r + 1) / 2, eta, eta) - math.log(2.0)
            assert logdensityof(dist, _factor_2x2(r)) == pytest.approx(expected, rel=1e-9)

    def test_non_matrix_points_rejected(self):
        dist = self.lkj_family(k=3, eta=2.0)
        with pytest.raises(DispatchError):
            dist.logdensity(1.0)
        with pytest.raises(DispatchError):
            dist.logdensity([1.0, 0.0, 0.0])
        with pytest.raises(DispatchError):
            dist.logdensity(np.ones((2, 3)))

    def test_out_of_domain_degrades_silently(self):
        dist = self.lkj_family(k=2, eta=2.0)
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            value = dist.logdensity(np.array([[-1.0, 0.0], [0.0, 1.0]]))
        assert math.isnan(value)

    def test_testvalue_is_identity(self):
        for k in (1, 2, 5):
            value = self.lkj_family(k=k).testvalue()
            assert isinstance(value, Cholesky)
            self.assert_arrays_almost_equal(value.matrix, np.eye(k))

    def test_domain_transforms(self):
        assert self.lkj_family(k=4, eta=2.0).as_transform() == CorrCholeskyTransform(4)
        assert self.lkj_family.asparams("concentration", "eta") is as_positive_real
        assert self.lkj_family.asparams("log_concentration", "logeta") is as_real

    @pytest.mark.parametrize("params", [{"k": 4, "eta": 0.8}, {"k": 3, "logeta": 1.2}])
    def test_sample_is_correlation_factor(self, params):
        dist = self.lkj_family(**params)
        factor = dist.sample(np.random.default_rng(17))
        assert isinstance(factor, Cholesky)
        L = factor.L
        assert np.allclose(L, np.tril(L))
        assert np.all(np.diagonal(L) > 0)
        self.assert_arrays_almost_equal(np.diagonal(factor.matrix), np.ones(params["k"]))

    @pytest.mark.parametrize("params", [{"k": 4, "eta": 0.8}, {"k": 3, "logeta": 1.2}])
    def test_seeded_sampling_is_deterministic(self, params):
        dist = self.lkj_family(**params)
        assert dist.sample(np.random.default_rng(1)) == dist.sample(np.random.default_rng(1))
