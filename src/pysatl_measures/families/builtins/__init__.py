"""
Built-in distribution families for PySATL Measures.

This package contains implementations of the distribution families that are
available by default.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_measures.families.builtins.continuous import (
    configure_laplace_family,
    configure_lkj_cholesky_family,
)
from pysatl_measures.families.builtins.discrete import configure_multinomial_family

__all__ = [
    "configure_laplace_family",
    "configure_lkj_cholesky_family",
    "configure_multinomial_family",
]
