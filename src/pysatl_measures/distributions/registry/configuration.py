"""
Cached accessor for the global proxy graph.

- No auto-configuration in constructor.
- ``proxy_graph()`` builds the singleton instance with ``@lru_cache``; nodes
  and edges are added by parametric families as they register parametrizations.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from functools import lru_cache

from pysatl_measures.distributions.registry.graph import ProxyGraph


@lru_cache(maxsize=1)
def proxy_graph() -> ProxyGraph:
    """
    Return the cached proxy graph (singleton instance).

    Notes
    -----
    - The singleton is created via ProxyGraph.__new__().
    - Users may inspect a separate graph state only after ``reset_proxy_graph()``.
    """
    return ProxyGraph()


def reset_proxy_graph() -> None:
    """
    Reset the cached proxy graph.
    """
    proxy_graph.cache_clear()
    ProxyGraph._reset()
