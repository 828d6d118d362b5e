"""
Distribution Families Configuration
====================================

This module defines and configures the built-in parametric families:

- :class:`LKJCholesky Family` — Cholesky factors of LKJ correlation matrices.
- :class:`Multinomial Family` — category counts of independent trials.
- :class:`Laplace Family` — double exponential distribution with affine variants.

Notes
-----
- All families are registered in the global ParametricFamilyRegister.
- Alternate parameterizations reach their canonical form through proxies;
  the resulting proxy graph is validated once all families are registered.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from functools import lru_cache

from pysatl_measures.distributions.registry import (
    GraphInvariantError,
    proxy_graph,
    reset_proxy_graph,
)
from pysatl_measures.families.builtins import (
    configure_laplace_family,
    configure_lkj_cholesky_family,
    configure_multinomial_family,
)
from pysatl_measures.families.registry import ParametricFamilyRegister


@lru_cache(maxsize=1)
def configure_families_register() -> ParametricFamilyRegister:
    """
    Configure and register all distribution families in the global registry.

    This function initializes all parametric families with their respective
    parameterizations and operations, then validates the proxy graph.

    Returns
    -------
    ParametricFamilyRegister
        The global registry of parametric families.

    Raises
    ------
    GraphInvariantError
        If the registered proxies do not form an acyclic graph, or a
        registered parametrization is missing from it.
    """
    configure_laplace_family()
    configure_lkj_cholesky_family()
    configure_multinomial_family()
    graph = proxy_graph()
    graph.validate()
    missing = [v for v in ParametricFamilyRegister.variants() if not graph.contains(v)]
    if missing:
        raise GraphInvariantError(f"Variants missing from the proxy graph: {missing}")
    return ParametricFamilyRegister()


def reset_families_register() -> None:
    """
    Reset the cached families registry together with the proxy graph it populated.
    """
    configure_families_register.cache_clear()
    ParametricFamilyRegister._reset()
    reset_proxy_graph()
