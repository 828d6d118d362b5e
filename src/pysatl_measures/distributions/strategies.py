"""
Dispatch Strategies
===================

This module defines the pluggable strategy interface used by parametric
distributions to resolve operations, and its default implementation:

- :class:`ComputationStrategy` — resolves operation methods.
- :class:`DefaultComputationStrategy` — returns the analytical implementation
  of the distribution's own parametrization, otherwise walks the proxy chain
  until some measure provides one.

Notes
-----
- The walk is iterative and bounded by ``max_proxy_depth``; the strategy
  keeps no per-call state, so a single instance is safe to share.
"""

__author__ = "Leonid Elkin, Mikhail, Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Any, Protocol

from pysatl_measures.distributions.computation import (
    AnalyticalComputation,
    ProxiedComputation,
)
from pysatl_measures.exceptions import DispatchError
from pysatl_measures.types import GenericCharacteristicName

if TYPE_CHECKING:
    from pysatl_measures.families.distribution import ParametricFamilyDistribution

MAX_PROXY_DEPTH = 16
"""Upper bound on the number of proxy steps taken to resolve one operation."""

type Method[Out] = AnalyticalComputation[Out] | ProxiedComputation[Out]


class ComputationStrategy[Out](Protocol):
    """Protocol for operation resolution strategies."""

    def query_method(
        self, state: GenericCharacteristicName, distr: "ParametricFamilyDistribution"
    ) -> Method[Out]: ...


class DefaultComputationStrategy[Out]:
    """
    Default operation resolver.

    Resolution order
    ----------------
    1. If the distribution's parametrization implements ``state``, return it.
    2. Else, if the distribution declares a proxy, rewrite it and repeat with
       the proxy. A proxy that is not a parametric family distribution (an
       affine image, a weighted measure, ...) implements every operation
       itself and ends the walk.
    3. Else, raise :class:`DispatchError`.

    Parameters
    ----------
    max_proxy_depth : int, default MAX_PROXY_DEPTH
        Maximal number of proxy steps.

    Raises
    ------
    DispatchError
        If nothing along the chain implements ``state``, or the chain is
        longer than ``max_proxy_depth``.
    """

    def __init__(self, max_proxy_depth: int = MAX_PROXY_DEPTH) -> None:
        if max_proxy_depth < 0:
            raise ValueError("max_proxy_depth must be non-negative")
        self.max_proxy_depth = max_proxy_depth

    def query_method(
        self, state: GenericCharacteristicName, distr: "ParametricFamilyDistribution"
    ) -> Method[Out]:
        """
        Resolve an analytical or proxied method for ``state``.

        Parameters
        ----------
        state : str
            Operation name to resolve.
        distr : ParametricFamilyDistribution
            The distribution the operation is asked of.

        Returns
        -------
        Method
            Callable implementing ``state`` for ``distr``.
        """
        current: Any = distr
        for depth in range(self.max_proxy_depth + 1):
            computations = getattr(current, "analytical_computations", None)
            if computations is None:
                return ProxiedComputation(
                    target=state, via=current, func=getattr(current, state), depth=depth
                )

            if state in computations:
                method: AnalyticalComputation[Out] = computations[state]
                if depth == 0:
                    return method
                return ProxiedComputation(target=state, via=current, func=method, depth=depth)

            if not current.has_proxy:
                raise DispatchError(
                    f"No '{state}' implementation for {current.family_name} "
                    f"({current.parametrization_name}) and no proxy to delegate to."
                )
            current = current.proxy()

        raise DispatchError(
            f"Proxy chain of {distr.family_name} ({distr.parametrization_name}) exceeds "
            f"{self.max_proxy_depth} steps while resolving '{state}'."
        )
