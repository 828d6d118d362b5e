"""
Proxy graph package.

Exports
-------
ProxyEdge, GraphInvariantError, ProxyCycleError
ProxyGraph
proxy_graph, reset_proxy_graph
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

# Public accessor & reset
from .configuration import (
    proxy_graph,
    reset_proxy_graph,
)

# Core graph
from .graph import ProxyGraph

# Graph primitives
from .graph_primitives import (
    GraphInvariantError,
    ProxyCycleError,
    ProxyEdge,
)

__all__ = [
    # primitives
    "ProxyEdge",
    "GraphInvariantError",
    "ProxyCycleError",
    # graph
    "ProxyGraph",
    # accessors
    "proxy_graph",
    "reset_proxy_graph",
]
