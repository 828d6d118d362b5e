"""
Multinomial distribution family implementation.

Contains the Multinomial family parametrized by the number of trials and the
category probabilities.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_measures.exceptions import DispatchError
from pysatl_measures.families.parametric_family import ParametricFamily
from pysatl_measures.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
)
from pysatl_measures.families.registry import ParametricFamilyRegister
from pysatl_measures.measures.primitives import CountingMeasure
from pysatl_measures.special import xlogy
from pysatl_measures.stats.samplers import sample_multinomial
from pysatl_measures.types import (
    CharacteristicName,
    EuclideanDistributionType,
    FamilyName,
    Kind,
)

if TYPE_CHECKING:
    from typing import Any

    import numpy.typing as npt

    from pysatl_measures.measures.measure import Measure

PROBABILITY_SUM_TOLERANCE = 1e-8


def configure_multinomial_family() -> None:
    """
    Configure and register the Multinomial distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.MULTINOMIAL):
        return

    MULTINOMIAL_DOC = """
    Multinomial distribution.

    Counts of ``n`` independent trials falling into ``len(p)`` categories with
    probabilities ``p``. The log-density relative to counting measure is

        sum_j x_j * log(p_j)

    without the multinomial coefficient, which is available separately as
    :func:`pysatl_measures.special.logmultinomial`.
    """

    def _counts(parameters: _Probabilities, x: Any) -> npt.NDArray[Any]:
        arr = np.asarray(x)
        if arr.shape != parameters.p.shape:
            raise DispatchError(
                f"Multinomial points are count vectors of length {parameters.p.size}, "
                f"got shape {arr.shape}"
            )
        return arr

    def logdensity(parameters: Parametrization, x: Any) -> float:
        parameters = cast(_Probabilities, parameters)
        return float(np.sum(xlogy(_counts(parameters, x), parameters.p)))

    def basemeasure(_: Parametrization) -> Measure:
        return CountingMeasure()

    def insupport(parameters: Parametrization, x: Any) -> bool:
        """Length of ``p``, integral entries summing to ``n``."""
        parameters = cast(_Probabilities, parameters)
        arr = np.asarray(x)
        if arr.shape != parameters.p.shape or arr.dtype.kind not in "biuf":
            return False
        if not np.all(np.isfinite(arr)):
            return False
        return bool(np.all(arr == np.round(arr)) and arr.sum() == parameters.n)

    def sample(parameters: Parametrization, rng: np.random.Generator) -> npt.NDArray[np.int64]:
        parameters = cast(_Probabilities, parameters)
        return sample_multinomial(rng, parameters.n, parameters.p)

    def testvalue(parameters: Parametrization) -> npt.NDArray[np.int64]:
        """``n`` split evenly over the categories, the remainder in the first one."""
        parameters = cast(_Probabilities, parameters)
        share, remainder = divmod(int(parameters.n), parameters.p.size)
        counts = np.full(parameters.p.size, share, dtype=np.int64)
        counts[0] += remainder
        return counts

    def _distr_type(parameters: Parametrization) -> EuclideanDistributionType:
        p = cast(_Probabilities, parameters).p
        return EuclideanDistributionType(kind=Kind.DISCRETE, dimension=int(p.size))

    Multinomial = ParametricFamily(
        name=FamilyName.MULTINOMIAL,
        distr_type=_distr_type,
        distr_parametrizations=["probabilities"],
        distr_characteristics={
            CharacteristicName.LOGDENSITY: logdensity,
            CharacteristicName.BASEMEASURE: basemeasure,
            CharacteristicName.INSUPPORT: insupport,
            CharacteristicName.SAMPLE: sample,
            CharacteristicName.TESTVALUE: testvalue,
        },
    )
    Multinomial.__doc__ = MULTINOMIAL_DOC

    @parametrization(family=Multinomial, name="probabilities")
    @dataclass(frozen=True, slots=True, eq=False)
    class _Probabilities(Parametrization):
        """
        Trials-and-probabilities parametrization.

        Parameters
        ----------
        n : int
            Number of trials, ``n >= 0``.
        p : array_like
            Category probabilities; stored as a read-only float vector.
        """

        n: int
        p: Any

        def __post_init__(self) -> None:
            p = np.array(self.p, dtype=np.float64)
            p.setflags(write=False)
            object.__setattr__(self, "p", p)

        @constraint(description="n is a non-negative integer")
        def check_n(self) -> bool:
            return int(self.n) == self.n and self.n >= 0

        @constraint(description="p is a non-empty vector")
        def check_p_shape(self) -> bool:
            return self.p.ndim == 1 and self.p.size > 0

        @constraint(description="0 <= p_j <= 1 and sum(p) == 1")
        def check_p_simplex(self) -> bool:
            return bool(
                np.all((self.p >= 0) & (self.p <= 1))
                and abs(float(np.sum(self.p)) - 1.0) <= PROBABILITY_SUM_TOLERANCE
            )

    ParametricFamilyRegister.register(Multinomial)
