"""
Computation Primitives
======================

This module defines the callables a distribution resolves its operations to:

- :class:`AnalyticalComputation` — an implementation registered by the
  family for the distribution's own parametrization.
- :class:`ProxiedComputation` — an implementation found further down the
  distribution's proxy chain, bound to the measure that provides it.

Notes
-----
Operations have different arities (``logdensity(x)``, ``sample(rng)``,
``basemeasure()``), so both callables forward positional arguments as given.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from mypy_extensions import KwArg, VarArg

from pysatl_measures.types import GenericCharacteristicName

if TYPE_CHECKING:
    from pysatl_measures.measures.measure import Measure


@runtime_checkable
class Computation[Out](Protocol):
    """Callable for a single operation.

    Attributes
    ----------
    target : str
        The operation name this computation implements.
    """

    @property
    def target(self) -> GenericCharacteristicName: ...
    def __call__(self, *args: Any, **options: Any) -> Out: ...


@dataclass(frozen=True, slots=True)
class AnalyticalComputation[Out]:
    """Implementation provided directly for a parametrization.

    Parameters
    ----------
    target : str
        Operation name (e.g., ``"logdensity"``).
    func : Callable[[VarArg(Any), KwArg(Any)], Out]
        Implementation with the parameters already bound.
    """

    target: GenericCharacteristicName
    func: Callable[[VarArg(Any), KwArg(Any)], Out]

    def __call__(self, *args: Any, **options: Any) -> Out:
        """Evaluate the implementation."""
        return self.func(*args, **options)


@dataclass(frozen=True, slots=True)
class ProxiedComputation[Out]:
    """Implementation delegated to a proxy measure.

    Parameters
    ----------
    target : str
        Operation name.
    via : Measure
        The measure (reached through ``depth`` proxy steps) providing it.
    func : Callable[[VarArg(Any), KwArg(Any)], Out]
        The provider's implementation.
    depth : int
        Number of proxy steps taken from the original distribution.
    """

    target: GenericCharacteristicName
    via: "Measure"
    func: Callable[[VarArg(Any), KwArg(Any)], Out]
    depth: int

    def __call__(self, *args: Any, **options: Any) -> Out:
        """Evaluate the delegated implementation."""
        return self.func(*args, **options)
