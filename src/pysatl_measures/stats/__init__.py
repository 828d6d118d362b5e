"""
Random variate primitives backed by :mod:`numpy.random`.
"""

__author__ = "Artem Romanyuk"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from pysatl_measures.stats.samplers import (
    as_generator,
    sample_laplace,
    sample_lkj,
    sample_multinomial,
)

__all__ = [
    "as_generator",
    "sample_lkj",
    "sample_multinomial",
    "sample_laplace",
]
