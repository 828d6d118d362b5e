"""
Concrete distribution instances with specific parameter values.

This module provides the implementation for individual distribution instances
created from parametric families. Every operation is resolved through the
family's computation strategy: the parametrization's own implementation when
there is one, otherwise the proxy chain.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from dataclasses import dataclass
from typing import TYPE_CHECKING

from pysatl_measures.measures.measure import Measure
from pysatl_measures.stats.samplers import as_generator
from pysatl_measures.types import CharacteristicName

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Any

    from pysatl_measures.distributions.computation import AnalyticalComputation
    from pysatl_measures.distributions.strategies import ComputationStrategy, Method
    from pysatl_measures.families.parametric_family import ParametricFamily
    from pysatl_measures.families.parametrizations import Parametrization
    from pysatl_measures.stats.samplers import RandomSource
    from pysatl_measures.transforms import Transform
    from pysatl_measures.types import (
        DistributionType,
        GenericCharacteristicName,
        ParametrizationName,
        VariantKey,
    )


@dataclass(frozen=True, slots=True)
class ParametricFamilyDistribution(Measure):
    """
    A specific distribution instance from a parametric family.

    Represents a concrete, immutable distribution with specific parameter
    values.

    Parameters
    ----------
    family_name : str
        Name of the distribution family.
    distribution_type : DistributionType
        Type of this distribution.
    parameters : Parametrization
        Parameter values for this distribution.
    """

    family_name: str
    distribution_type: DistributionType
    parameters: Parametrization

    @property
    def family(self) -> ParametricFamily:
        """
        Get the parametric family this distribution belongs to.

        Returns
        -------
        ParametricFamily
            The parametric family of this distribution.
        """
        return type(self.parameters).__family__

    @property
    def parametrization_name(self) -> ParametrizationName:
        return self.parameters.name

    @property
    def variant(self) -> VariantKey:
        return (self.family_name, self.parameters.name)

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, AnalyticalComputation[Any]]:
        """Operations implemented directly for this parametrization."""
        return self.family._build_analytical_computations(self.parameters)

    @property
    def computation_strategy(self) -> ComputationStrategy[Any]:
        """Get the computation strategy for this distribution."""
        return self.family.computation_strategy

    def query_method(self, state: GenericCharacteristicName) -> Method[Any]:
        """Resolve the callable implementing operation ``state``."""
        return self.computation_strategy.query_method(state, self)

    def calculate_characteristic(self, state: GenericCharacteristicName, *args: Any) -> Any:
        """Resolve and evaluate operation ``state``."""
        return self.query_method(state)(*args)

    # --------------------------------------------------------------------- #
    # Measure interface
    # --------------------------------------------------------------------- #

    @property
    def has_proxy(self) -> bool:
        return type(self.parameters).__proxy_target__ is not None

    def proxy(self) -> Measure:
        """Equivalent measure built on the declared proxy variant."""
        return self.parameters.proxy()

    def logdensity(self, x: Any) -> Any:
        return self.calculate_characteristic(CharacteristicName.LOGDENSITY, x)

    def basemeasure(self) -> Measure:
        return self.calculate_characteristic(CharacteristicName.BASEMEASURE)

    def insupport(self, x: Any) -> bool:
        return bool(self.calculate_characteristic(CharacteristicName.INSUPPORT, x))

    def sample(self, rng: RandomSource) -> Any:
        """
        Draw one variate.

        Parameters
        ----------
        rng : numpy.random.Generator | int | SeedSequence
            Explicit random source.
        """
        return self.calculate_characteristic(CharacteristicName.SAMPLE, as_generator(rng))

    def testvalue(self) -> Any:
        return self.calculate_characteristic(CharacteristicName.TESTVALUE)

    def as_transform(self) -> Transform:
        return self.calculate_characteristic(CharacteristicName.AS_TRANSFORM)

    def __repr__(self) -> str:
        values = ", ".join(f"{k}={v!r}" for k, v in self.parameters.parameters.items())
        return f"{self.family_name}[{self.parametrization_name}]({values})"
