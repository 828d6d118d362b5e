"""
Primitive reference measures.

- :class:`LebesgueMeasure` — Lebesgue measure on the real line.
- :class:`CountingMeasure` — counting measure on a discrete set.
- :class:`PowerMeasure` — product of ``n`` copies of a measure.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from pysatl_measures.measures.measure import Measure
from pysatl_measures.transforms import as_real

if TYPE_CHECKING:
    from typing import Any

    from pysatl_measures.transforms import Transform


@dataclass(frozen=True, slots=True)
class LebesgueMeasure(Measure):
    """Lebesgue measure on the real line."""

    @property
    def is_primitive(self) -> bool:
        return True

    def logdensity(self, x: Any) -> float:
        return 0.0

    def basemeasure(self) -> LebesgueMeasure:
        return self

    def insupport(self, x: Any) -> bool:
        return True

    def testvalue(self) -> float:
        return 0.0

    def as_transform(self) -> Transform:
        return as_real

    def __pow__(self, n: int) -> PowerMeasure:
        return PowerMeasure(self, n)


@dataclass(frozen=True, slots=True)
class CountingMeasure(Measure):
    """Counting measure; densities relative to it are probability masses."""

    @property
    def is_primitive(self) -> bool:
        return True

    def logdensity(self, x: Any) -> float:
        return 0.0

    def basemeasure(self) -> CountingMeasure:
        return self

    def insupport(self, x: Any) -> bool:
        return True

    def testvalue(self) -> int:
        return 0

    def __pow__(self, n: int) -> PowerMeasure:
        return PowerMeasure(self, n)


@dataclass(frozen=True, slots=True)
class PowerMeasure(Measure):
    """
    Product measure of ``n`` copies of ``base``.

    Parameters
    ----------
    base : Measure
        Component measure.
    n : int
        Number of components (the intrinsic dimension).
    """

    base: Measure
    n: int

    def __post_init__(self) -> None:
        if int(self.n) != self.n or self.n < 0:
            raise ValueError(f"PowerMeasure requires a non-negative integer power, got {self.n}")

    @property
    def is_primitive(self) -> bool:
        return self.base.is_primitive

    def logdensity(self, x: Any) -> Any:
        arr = np.asarray(x)
        return sum((self.base.logdensity(xi) for xi in arr.reshape(self.n)), 0.0)

    def basemeasure(self) -> Measure:
        if self.is_primitive:
            return self
        return PowerMeasure(self.base.basemeasure(), self.n)

    def insupport(self, x: Any) -> bool:
        arr = np.asarray(x)
        if arr.size != self.n:
            return False
        return all(self.base.insupport(xi) for xi in arr.reshape(self.n))

    def testvalue(self) -> Any:
        return np.full(self.n, self.base.testvalue())
