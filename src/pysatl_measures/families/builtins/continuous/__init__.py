"""
Built-in continuous distribution families.

This module contains implementations of continuous parametric families.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from pysatl_measures.families.builtins.continuous.laplace import configure_laplace_family
from pysatl_measures.families.builtins.continuous.lkj_cholesky import configure_lkj_cholesky_family

__all__ = [
    "configure_laplace_family",
    "configure_lkj_cholesky_family",
]
