"""
Functional interface to measures.

Each function forwards to the corresponding :class:`Measure` method, so it
works the same for parametric distributions and for reference measures.
:func:`logdensityof` additionally composes local densities along the base
measure chain.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

from pysatl_measures.exceptions import DispatchError
from pysatl_measures.stats.samplers import as_generator

if TYPE_CHECKING:
    from typing import Any

    from pysatl_measures.measures.measure import Measure
    from pysatl_measures.stats.samplers import RandomSource
    from pysatl_measures.transforms import Transform

MAX_BASEMEASURE_DEPTH = 32
"""Upper bound on the length of a ``basemeasure`` chain."""


def logdensity(measure: Measure, x: Any) -> Any:
    """
    Unnormalized log-density of ``measure`` at ``x``, relative to its base measure.

    The result is not checked against the support; see :func:`logdensityof`.
    """
    return measure.logdensity(x)


def basemeasure(measure: Measure) -> Measure:
    """Reference measure against which :func:`logdensity` is defined."""
    return measure.basemeasure()


def insupport(measure: Measure, x: Any) -> bool:
    """Whether ``x`` lies in the support of ``measure``."""
    return bool(measure.insupport(x))


def sample(rng: RandomSource, measure: Measure) -> Any:
    """
    Draw one variate from ``measure``.

    Parameters
    ----------
    rng : numpy.random.Generator | int | SeedSequence
        Explicit random source; seeds create a fresh generator.
    measure : Measure
        Measure to sample from.
    """
    return measure.sample(as_generator(rng))


def testvalue(measure: Measure) -> Any:
    """A fixed, always valid point of the support of ``measure``."""
    return measure.testvalue()


def proxy(measure: Measure) -> Measure:
    """Equivalent measure in canonical form; raises ``DispatchError`` if absent."""
    return measure.proxy()


def as_transform(measure: Measure) -> Transform:
    """Bijection from unconstrained coordinates onto the domain of ``measure``."""
    return measure.as_transform()


def rootmeasure(measure: Measure) -> Measure:
    """
    Follow ``basemeasure`` until a primitive measure.

    Raises
    ------
    DispatchError
        If no primitive measure is reached within ``MAX_BASEMEASURE_DEPTH`` steps.
    """
    current = measure
    for _ in range(MAX_BASEMEASURE_DEPTH):
        if current.is_primitive:
            return current
        current = current.basemeasure()
    raise DispatchError(
        f"Base measure chain of {measure!r} does not reach a primitive measure "
        f"within {MAX_BASEMEASURE_DEPTH} steps"
    )


def logdensityof(measure: Measure, x: Any) -> Any:
    """
    Full log-density of ``measure`` at ``x`` relative to its root measure.

    Sums the local log-densities of ``measure`` and of every base measure down
    to the primitive one. Points outside the support have log-density ``-inf``.
    """
    if not measure.insupport(x):
        return -math.inf

    total: Any = 0.0
    current = measure
    for _ in range(MAX_BASEMEASURE_DEPTH):
        if current.is_primitive:
            return total
        total = total + current.logdensity(x)
        current = current.basemeasure()
    raise DispatchError(
        f"Base measure chain of {measure!r} does not reach a primitive measure "
        f"within {MAX_BASEMEASURE_DEPTH} steps"
    )
