"""
PySATL Measures unit tests
==========================

Parametric families, proxy resolution, measure combinators and samplers.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"
