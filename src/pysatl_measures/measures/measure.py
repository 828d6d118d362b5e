"""
Measure Interface
=================

This module defines the :class:`Measure` protocol shared by parametric
distributions and by the measure-theoretic building blocks (primitive
reference measures and combinators).

A measure is described by a *local* log-density :meth:`Measure.logdensity`
relative to its :meth:`Measure.basemeasure`. Following the chain of base
measures until a *primitive* measure (Lebesgue, counting, ...) and summing the
local log-densities gives the full log-density (see
:func:`pysatl_measures.measures.functions.logdensityof`).

Notes
-----
- Operations a measure cannot perform raise
  :class:`~pysatl_measures.exceptions.DispatchError`.
- ``proxy`` returns an equivalent measure in a simpler form, or raises
  ``DispatchError`` if the measure has none (check ``has_proxy`` first).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pysatl_measures.exceptions import DispatchError

if TYPE_CHECKING:
    from typing import Any

    import numpy as np

    from pysatl_measures.transforms import Transform


@runtime_checkable
class Measure(Protocol):
    """Public measure interface used by density composition and samplers."""

    @property
    def is_primitive(self) -> bool:
        """Whether this is a root reference measure (its own base measure)."""
        return False

    @property
    def has_proxy(self) -> bool:
        """Whether :meth:`proxy` is available."""
        return False

    def logdensity(self, x: Any) -> Any: ...

    def basemeasure(self) -> Measure: ...

    def insupport(self, x: Any) -> bool:
        return True

    def sample(self, rng: np.random.Generator) -> Any:
        raise DispatchError(f"{type(self).__name__} does not support sampling")

    def testvalue(self) -> Any:
        raise DispatchError(f"{type(self).__name__} has no test value")

    def as_transform(self) -> Transform:
        raise DispatchError(f"{type(self).__name__} has no domain transform")

    def proxy(self) -> Measure:
        raise DispatchError(f"{type(self).__name__} has no proxy")


__all__ = ["Measure"]
