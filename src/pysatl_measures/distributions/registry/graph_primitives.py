"""
Edge metadata and proxy graph error definitions.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pysatl_measures.types import VariantKey


@dataclass(frozen=True, slots=True)
class ProxyEdge:
    """
    A declared proxy relation between two parametrizations.

    Parameters
    ----------
    source : VariantKey
        ``(family_name, parametrization_name)`` of the proxied variant.
    target : VariantKey
        Variant the source is rewritten into.
    """

    source: VariantKey
    target: VariantKey

    @property
    def is_cross_family(self) -> bool:
        """Whether the edge leaves the source's family."""
        return self.source[0] != self.target[0]


class GraphInvariantError(RuntimeError):
    """
    Raised when proxy graph invariants are violated.
    """


class ProxyCycleError(GraphInvariantError):
    """
    Raised when a proxy declaration would make canonicalization non-terminating.
    """
