"""
Distributions subpackage

Operation resolution for parametric distributions:

- computation primitives (:mod:`.computation`);
- proxy graph registry (:mod:`.registry`);
- pluggable dispatch strategies (:mod:`.strategies`).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .computation import (
    AnalyticalComputation,
    Computation,
    ProxiedComputation,
)
from .registry import (
    GraphInvariantError,
    ProxyCycleError,
    ProxyEdge,
    ProxyGraph,
    proxy_graph,
    reset_proxy_graph,
)
from .strategies import (
    MAX_PROXY_DEPTH,
    ComputationStrategy,
    DefaultComputationStrategy,
)

__all__ = [
    # computation primitives
    "Computation",
    "AnalyticalComputation",
    "ProxiedComputation",
    # strategies
    "ComputationStrategy",
    "DefaultComputationStrategy",
    "MAX_PROXY_DEPTH",
    # registry
    "ProxyEdge",
    "ProxyGraph",
    "GraphInvariantError",
    "ProxyCycleError",
    "proxy_graph",
    "reset_proxy_graph",
]
