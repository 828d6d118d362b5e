"""
Laplace distribution family implementation.

Contains the Laplace family with the standard parametrization and the
location, scale and rate variants built on it by an affine proxy.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

import numpy as np

from pysatl_measures.families.parametric_family import ParametricFamily
from pysatl_measures.families.parametrizations import (
    Parametrization,
    constraint,
    parametrization,
    proxy_to,
)
from pysatl_measures.families.registry import ParametricFamilyRegister
from pysatl_measures.measures.combinators import Affine, WeightedMeasure
from pysatl_measures.measures.primitives import LebesgueMeasure
from pysatl_measures.stats.samplers import sample_laplace
from pysatl_measures.transforms import AffineTransform, as_positive_real, as_real
from pysatl_measures.types import (
    CharacteristicName,
    FamilyName,
    NumericArray,
    UnivariateContinuous,
)

if TYPE_CHECKING:
    from typing import Any

    from pysatl_measures.measures.measure import Measure
    from pysatl_measures.transforms import Transform

LAPLACE_STANDARD = "standard"


def configure_laplace_family() -> None:
    """
    Configure and register the Laplace distribution family.
    """

    if ParametricFamilyRegister.contains(FamilyName.LAPLACE):
        return

    LAPLACE_DOC = """
    Laplace (double exponential) distribution.

    Standard form (location 0, scale 1), relative to Lebesgue measure:
        f(x) = exp(-|x|) / 2

    The location ``mu``, scale ``sigma`` and rate ``lambda_ = 1 / sigma``
    parametrizations are affine images ``x = mu + sigma * z`` of the
    standard form.
    """

    def logdensity(_: Parametrization, x: NumericArray) -> NumericArray:
        """Unnormalized log-density of the standard form, ``-|x|``."""
        return -np.abs(x)

    def basemeasure(_: Parametrization) -> Measure:
        """Lebesgue measure weighted by the normalizing constant ``1/2``."""
        return WeightedMeasure(-math.log(2.0), LebesgueMeasure())

    def insupport(_1: Parametrization, _2: Any) -> bool:
        return True

    def sample(_: Parametrization, rng: np.random.Generator) -> float:
        return float(sample_laplace(rng))

    def testvalue(_: Parametrization) -> float:
        return 0.0

    def as_transform(_: Parametrization) -> Transform:
        return as_real

    Laplace = ParametricFamily(
        name=FamilyName.LAPLACE,
        distr_type=UnivariateContinuous,
        distr_parametrizations=[
            LAPLACE_STANDARD,
            "location",
            "scale",
            "location_scale",
            "rate",
            "location_rate",
        ],
        distr_characteristics={
            CharacteristicName.LOGDENSITY: logdensity,
            CharacteristicName.BASEMEASURE: basemeasure,
            CharacteristicName.INSUPPORT: insupport,
            CharacteristicName.SAMPLE: sample,
            CharacteristicName.TESTVALUE: testvalue,
            CharacteristicName.AS_TRANSFORM: as_transform,
        },
    )
    Laplace.__doc__ = LAPLACE_DOC

    @parametrization(family=Laplace, name=LAPLACE_STANDARD)
    class _Standard(Parametrization):
        """Standard Laplace distribution: location 0, scale 1."""

    class _AffineLaplace(Parametrization):
        """Shared proxy of the location/scale parametrizations."""

        @proxy_to(FamilyName.LAPLACE, LAPLACE_STANDARD)
        def proxy(self) -> Measure:
            """The affine image of the standard form."""
            return Affine(AffineTransform.from_params(self.parameters), Laplace())

    @parametrization(family=Laplace, name="location", asparams={"mu": as_real})
    class _Location(_AffineLaplace):
        """
        Location parametrization.

        Parameters
        ----------
        mu : float
            Location (median) of the distribution.
        """

        mu: float

    @parametrization(family=Laplace, name="scale", asparams={"sigma": as_positive_real})
    class _Scale(_AffineLaplace):
        sigma: float

        @constraint(description="sigma > 0")
        def check_sigma_positive(self) -> bool:
            return self.sigma > 0

    @parametrization(
        family=Laplace,
        name="location_scale",
        asparams={"mu": as_real, "sigma": as_positive_real},
    )
    class _LocationScale(_AffineLaplace):
        """
        Location-scale parametrization.

        Parameters
        ----------
        mu : float
            Location of the distribution.
        sigma : float
            Scale, ``sigma > 0``.
        """

        mu: float
        sigma: float

        @constraint(description="sigma > 0")
        def check_sigma_positive(self) -> bool:
            return self.sigma > 0

    @parametrization(family=Laplace, name="rate", asparams={"lambda_": as_positive_real})
    class _Rate(_AffineLaplace):
        lambda_: float

        @constraint(description="lambda_ > 0")
        def check_lambda_positive(self) -> bool:
            return self.lambda_ > 0

    @parametrization(
        family=Laplace,
        name="location_rate",
        asparams={"mu": as_real, "lambda_": as_positive_real},
    )
    class _LocationRate(_AffineLaplace):
        """
        Location-rate parametrization; the scale is ``1 / lambda_``.
        """

        mu: float
        lambda_: float

        @constraint(description="lambda_ > 0")
        def check_lambda_positive(self) -> bool:
            return self.lambda_ > 0

    ParametricFamilyRegister.register(Laplace)
