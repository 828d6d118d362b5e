"""
LKJCholesky distribution family implementation.

Contains the LKJ distribution over Cholesky factors of correlation matrices
with concentration and log-concentration parameterizations.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from numbers import Real
from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_measures.exceptions import DispatchError
from pysatl_measures.families.parametric_family import ParametricFamily
from pysatl_measures.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
    proxy_to,
)
from pysatl_measures.families.registry import ParametricFamilyRegister
from pysatl_measures.linalg import Cholesky, cholesky_positive_safe
from pysatl_measures.measures.combinators import Pushforward, WeightedMeasure
from pysatl_measures.measures.primitives import LebesgueMeasure
from pysatl_measures.special import expm1, lkj_logc0
from pysatl_measures.stats.samplers import sample_lkj
from pysatl_measures.transforms import CorrCholeskyTransform, as_positive_real, as_real
from pysatl_measures.types import (
    CharacteristicName,
    FamilyName,
    Kind,
    MatrixDistributionType,
)

if TYPE_CHECKING:
    from typing import Any

    import numpy.typing as npt

    from pysatl_measures.measures.measure import Measure

LKJ_CONCENTRATION = "concentration"
LKJ_LOG_CONCENTRATION = "log_concentration"


def _factor_diagonal(x: Any) -> npt.NDArray[np.float64]:
    """
    Diagonal of a Cholesky factor given as a ``Cholesky`` or a square matrix.

    Raises
    ------
    DispatchError
        If ``x`` is neither.
    """
    if isinstance(x, Cholesky):
        return np.diagonal(x.UL)
    arr = np.asarray(x)
    if arr.ndim == 2 and arr.shape[0] == arr.shape[1] and arr.dtype.kind in "biuf":
        return np.diagonal(arr).astype(np.float64)
    raise DispatchError(
        f"LKJCholesky densities are defined for Cholesky factors or square matrices, "
        f"got {type(x).__name__}"
    )


def _lkj_logdensity(c: float, x: Any) -> float:
    """
    ``sum_i (c - i) * log(L[i, i])`` over the factor diagonal (``i`` from 1).

    Points outside the domain are not rejected: the result degrades to NaN or
    infinity without numpy warnings.
    """
    diag = _factor_diagonal(x)
    i = np.arange(1, diag.size + 1)
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.sum((c - i) * np.log(diag)))


def _lkj_basemeasure(k: int, eta: float) -> Measure:
    t = CorrCholeskyTransform(k)
    return WeightedMeasure(lkj_logc0(k, eta), Pushforward(t, LebesgueMeasure() ** t.dimension))


def configure_lkj_cholesky_family() -> None:
    """
    Configure and register the LKJCholesky distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.LKJ_CHOLESKY):
        return

    LKJ_CHOLESKY_DOC = """
    LKJ distribution over Cholesky factors of correlation matrices.

    For a ``k x k`` correlation matrix ``R = L @ L.T`` with concentration
    ``eta > 0`` the density of the factor is proportional to
        prod_i L[i, i] ** (k - i + 2 * (eta - 1))
    relative to the pushforward of Lebesgue measure through
    :class:`CorrCholeskyTransform`. ``eta = 1`` is uniform over correlation
    matrices; larger ``eta`` concentrates mass around the identity.

    Lewandowski, Kurowicka & Joe (2009), "Generating random correlation
    matrices based on vines and extended onion method".
    """

    def logdensity(parameters: Parametrization, x: Any) -> float:
        parameters = cast(_Concentration, parameters)
        return _lkj_logdensity(parameters.k + 2.0 * (parameters.eta - 1.0), x)

    def logdensity_log(parameters: Parametrization, x: Any) -> float:
        parameters = cast(_LogConcentration, parameters)
        return _lkj_logdensity(parameters.k + 2.0 * float(expm1(parameters.logeta)), x)

    def basemeasure(parameters: Parametrization) -> Measure:
        parameters = cast(_Concentration, parameters)
        return _lkj_basemeasure(parameters.k, parameters.eta)

    def basemeasure_log(parameters: Parametrization) -> Measure:
        parameters = cast(_LogConcentration, parameters)
        return _lkj_basemeasure(parameters.k, math.exp(parameters.logeta))

    def sample(parameters: Parametrization, rng: np.random.Generator) -> Cholesky:
        """Onion-method correlation matrix, factored to a lower Cholesky factor."""
        parameters = cast(_Concentration, parameters)
        corr = sample_lkj(rng, parameters.k, parameters.eta)
        return cholesky_positive_safe(corr, unit_diagonal=True)

    def sample_log(parameters: Parametrization, rng: np.random.Generator) -> Cholesky:
        parameters = cast(_LogConcentration, parameters)
        corr = sample_lkj(rng, parameters.k, math.exp(parameters.logeta))
        return cholesky_positive_safe(corr, unit_diagonal=True)

    # TODO: check unit column norms and a positive diagonal instead of accepting everything
    def insupport(_1: Parametrization, _2: Any) -> bool:
        return True

    def testvalue(parameters: Parametrization) -> Cholesky:
        """The identity factor."""
        parameters = cast(_Concentration, parameters)
        t = CorrCholeskyTransform(parameters.k)
        return t.transform(np.zeros(t.dimension))

    def as_transform(parameters: Parametrization) -> CorrCholeskyTransform:
        parameters = cast(_Concentration, parameters)
        return CorrCholeskyTransform(parameters.k)

    def _distr_type(parameters: Parametrization) -> MatrixDistributionType:
        k = cast(_Concentration, parameters).k
        return MatrixDistributionType(kind=Kind.CONTINUOUS, shape=(k, k))

    LKJCholesky = ParametricFamily(
        name=FamilyName.LKJ_CHOLESKY,
        distr_type=_distr_type,
        distr_parametrizations=[LKJ_CONCENTRATION, LKJ_LOG_CONCENTRATION],
        distr_characteristics={
            CharacteristicName.LOGDENSITY: {
                LKJ_CONCENTRATION: logdensity,
                LKJ_LOG_CONCENTRATION: logdensity_log,
            },
            CharacteristicName.BASEMEASURE: {
                LKJ_CONCENTRATION: basemeasure,
                LKJ_LOG_CONCENTRATION: basemeasure_log,
            },
            CharacteristicName.SAMPLE: {
                LKJ_CONCENTRATION: sample,
                LKJ_LOG_CONCENTRATION: sample_log,
            },
            CharacteristicName.INSUPPORT: insupport,
            CharacteristicName.TESTVALUE: testvalue,
            CharacteristicName.AS_TRANSFORM: as_transform,
        },
    )
    LKJCholesky.__doc__ = LKJ_CHOLESKY_DOC

    class _LKJParametrization(Parametrization):
        """Shared handling of the matrix dimension ``k``."""

        k: int

        def __post_init__(self) -> None:
            # integral floats such as 3.0 are stored as int; others are left to check_k
            k = self.k
            if isinstance(k, Real) and float(k).is_integer():
                object.__setattr__(self, "k", int(k))

    @parametrization(family=LKJCholesky, name=LKJ_CONCENTRATION, asparams={"eta": as_positive_real})
    class _Concentration(_LKJParametrization):
        """
        Concentration parametrization of the LKJ distribution.

        Parameters
        ----------
        k : int
            Dimension of the correlation matrix.
        eta : float
            Concentration, ``eta > 0`` (``1.0`` is uniform).
        """

        k: int
        eta: float = 1.0

        @constraint(description="k is an integer >= 1")
        def check_k(self) -> bool:
            return int(self.k) == self.k and self.k >= 1

        @constraint(description="eta > 0")
        def check_eta_positive(self) -> bool:
            return self.eta > 0

    @parametrization(family=LKJCholesky, name=LKJ_LOG_CONCENTRATION, asparams={"logeta": as_real})
    class _LogConcentration(_LKJParametrization):
        """
        Log-concentration parametrization, ``eta = exp(logeta)``.

        Parameters
        ----------
        k : int
            Dimension of the correlation matrix.
        logeta : float
            Logarithm of the concentration.
        """

        k: int
        logeta: float

        @constraint(description="k is an integer >= 1")
        def check_k(self) -> bool:
            return int(self.k) == self.k and self.k >= 1

        @constraint(description="logeta is finite")
        def check_logeta_finite(self) -> bool:
            return math.isfinite(self.logeta)

        @proxy_to(FamilyName.LKJ_CHOLESKY, LKJ_CONCENTRATION)
        def proxy(self) -> Measure:
            """The same distribution in the concentration parametrization."""
            return LKJCholesky.distribution(
                LKJ_CONCENTRATION, k=self.k, eta=math.exp(self.logeta)
            )

    ParametricFamilyRegister.register(LKJCholesky)
