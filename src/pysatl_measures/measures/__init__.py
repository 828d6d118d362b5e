"""
Measures subpackage

Reference measures, measure combinators and the functional interface shared
by every measure:

- measure protocol (:mod:`.measure`);
- primitive reference measures (:mod:`.primitives`);
- weighted, pushforward and affine combinators (:mod:`.combinators`);
- free functions ``logdensity``, ``logdensityof``, ``basemeasure``, ... (:mod:`.functions`).
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .combinators import Affine, Pushforward, WeightedMeasure
from .functions import (
    as_transform,
    basemeasure,
    insupport,
    logdensity,
    logdensityof,
    proxy,
    rootmeasure,
    sample,
    testvalue,
)
from .measure import Measure
from .primitives import CountingMeasure, LebesgueMeasure, PowerMeasure

__all__ = [
    # protocol
    "Measure",
    # primitives
    "LebesgueMeasure",
    "CountingMeasure",
    "PowerMeasure",
    # combinators
    "WeightedMeasure",
    "Pushforward",
    "Affine",
    # functions
    "logdensity",
    "logdensityof",
    "basemeasure",
    "insupport",
    "sample",
    "testvalue",
    "proxy",
    "as_transform",
    "rootmeasure",
]
