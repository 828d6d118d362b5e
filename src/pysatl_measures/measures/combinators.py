"""
Measure combinators.

- :class:`WeightedMeasure` — a base measure scaled by ``exp(logweight)``.
- :class:`Pushforward` — a measure mapped through a bijective transform.
- :class:`Affine` — a measure mapped through a location-scale transform.

Notes
-----
The log-density of a combinator is always *local*: only the term the
combinator itself contributes. Terms contributed further down the
``basemeasure`` chain are never repeated here.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pysatl_measures.exceptions import DispatchError
from pysatl_measures.measures.measure import Measure
from pysatl_measures.transforms import IdentityTransform

if TYPE_CHECKING:
    from typing import Any

    import numpy as np

    from pysatl_measures.transforms import AffineTransform, Transform


@dataclass(frozen=True, slots=True)
class WeightedMeasure(Measure):
    """
    ``base`` with every set's mass multiplied by ``exp(logweight)``.

    Parameters
    ----------
    logweight : float
        Constant log-density relative to ``base`` (e.g. a log normalizing constant).
    base : Measure
        The weighted measure.
    """

    logweight: float
    base: Measure

    def logdensity(self, x: Any) -> float:
        return self.logweight

    def basemeasure(self) -> Measure:
        return self.base

    def insupport(self, x: Any) -> bool:
        return self.base.insupport(x)

    def testvalue(self) -> Any:
        return self.base.testvalue()

    def as_transform(self) -> Transform:
        return self.base.as_transform()


@dataclass(frozen=True, slots=True)
class Pushforward(Measure):
    """
    Image of ``origin`` under ``transform``.

    Densities are taken relative to the pushforward of the origin's base
    measure, so no Jacobian correction enters the local log-density: a
    pushforward of a primitive measure is itself primitive.

    Parameters
    ----------
    transform : Transform
        Bijection from the origin's space onto the target space.
    origin : Measure
        Measure on the unconstrained space.
    """

    transform: Transform
    origin: Measure

    @property
    def is_primitive(self) -> bool:
        return self.origin.is_primitive

    def logdensity(self, x: Any) -> Any:
        if self.is_primitive:
            return 0.0
        return self.origin.logdensity(self.transform.inverse(x))

    def basemeasure(self) -> Measure:
        if self.is_primitive:
            return self
        return Pushforward(self.transform, self.origin.basemeasure())

    def insupport(self, x: Any) -> bool:
        return True

    def sample(self, rng: np.random.Generator) -> Any:
        return self.transform.transform(self.origin.sample(rng))

    def testvalue(self) -> Any:
        return self.transform.transform(self.origin.testvalue())

    def as_transform(self) -> Transform:
        return self.transform


@dataclass(frozen=True, slots=True, eq=False)
class Affine(Measure):
    """
    Location-scale image of a measure on the real line.

    For ``x = mu + sigma * z`` the local log-density is
    ``parent.logdensity(z) - log|sigma|``; the base measure is the parent's,
    which is translation and scale invariant up to the ``log|sigma|`` term
    accounted for here.

    Parameters
    ----------
    transform : AffineTransform
        The location-scale map.
    parent : Measure
        The standard-form measure.
    """

    transform: AffineTransform
    parent: Measure

    def logdensity(self, x: Any) -> Any:
        z = self.transform.inverse(x)
        return self.parent.logdensity(z) - self.transform.log_abs_det_jacobian()

    def basemeasure(self) -> Measure:
        return self.parent.basemeasure()

    def insupport(self, x: Any) -> bool:
        return self.parent.insupport(self.transform.inverse(x))

    def sample(self, rng: np.random.Generator) -> Any:
        return self.transform.transform(self.parent.sample(rng))

    def testvalue(self) -> Any:
        return self.transform.transform(self.parent.testvalue())

    def as_transform(self) -> Transform:
        domain = self.parent.as_transform()
        if not isinstance(domain, IdentityTransform):
            raise DispatchError("Affine images are only supported for real-line measures")
        return domain
