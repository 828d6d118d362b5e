"""
Proxy Graph (global)
====================

This module defines a *single* global directed graph over parametrization
variants ``(family_name, parametrization_name)``. An edge ``A -> B`` states
that a distribution in variant ``A`` can be rewritten (proxied) into an
equivalent measure built on variant ``B``.

Invariants
----------
1. Every variant has **at most one** proxy target.
2. The graph is **acyclic**: following proxies from any variant terminates.

Design notes
------------
* Nodes must be **declared explicitly** via :meth:`ProxyGraph.add_variant`
  before edges between them can be added.
* Acyclicity is enforced **during mutation**: :meth:`ProxyGraph.add_proxy`
  rejects an edge that would close a cycle.
* The graph is a **singleton** (see ``__new__``).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import warnings
from typing import TYPE_CHECKING, Any, ClassVar, Self

from pysatl_measures.distributions.registry.graph_primitives import (
    GraphInvariantError,
    ProxyCycleError,
    ProxyEdge,
)

if TYPE_CHECKING:
    from pysatl_measures.types import VariantKey


class ProxyGraph:
    """
    Global graph of proxy relations between parametrization variants.

    Public API
    ----------
    add_variant(variant)
        Declare a node.
    add_proxy(source, target)
        Declare that ``source`` proxies to ``target``.
    proxy_target(variant), proxy_chain(variant), find_path(src, dst)
        Queries over the declared relations.
    validate()
        Re-check all invariants.
    """

    _instance: ClassVar[Self | None] = None

    def __new__(cls) -> Self:
        if cls._instance is None:
            inst = super().__new__(cls)
            cls._instance = inst
        return cls._instance

    def __init__(self) -> None:
        if getattr(self, "_initialized", False):
            return
        # adjacency: src -> dst (at most one proxy per variant)
        self._adj: dict[VariantKey, VariantKey] = {}
        self._all_nodes: set[VariantKey] = set()
        self._initialized = True

    def __copy__(self) -> Self:
        """Singleton copy returns the same instance."""
        return self

    def __deepcopy__(self, memo: dict[Any, Any]) -> Self:
        """Singleton deepcopy returns the same instance (no duplication)."""
        return self

    def __reduce__(self) -> tuple[type[Self], tuple[()]]:
        """Ensure pickling keeps the singleton semantics."""
        return self.__class__, ()

    @classmethod
    def _reset(cls) -> None:
        """Reset the singleton (test helper)."""
        cls._instance = None

    # --------------------------------------------------------------------- #
    # Registration API
    # --------------------------------------------------------------------- #

    def add_variant(self, variant: VariantKey) -> None:
        """
        Declare a variant node.

        Notes
        -----
        * Duplicate declarations are ignored with a warning.
        """
        if variant in self._all_nodes:
            warnings.warn(
                f"Variant {variant} has been already added.",
                UserWarning,
                stacklevel=2,
            )
            return
        self._all_nodes.add(variant)

    def add_proxy(self, source: VariantKey, target: VariantKey) -> ProxyEdge:
        """
        Declare that ``source`` proxies to ``target``.

        Parameters
        ----------
        source, target
            Already declared variants.

        Returns
        -------
        ProxyEdge
            The stored edge.

        Raises
        ------
        ValueError
            If an endpoint is undeclared, or ``source`` already proxies elsewhere.
        ProxyCycleError
            If the edge would make ``source`` reachable from itself.

        Notes
        -----
        * Re-declaring the same edge is a no-op.
        """
        if source not in self._all_nodes or target not in self._all_nodes:
            raise ValueError(f"Proxy endpoints must be declared first: {source} -> {target}")

        existing = self._adj.get(source)
        if existing is not None:
            if existing == target:
                return ProxyEdge(source, target)
            raise ValueError(
                f"Variant {source} already proxies to {existing}; cannot also proxy to {target}"
            )

        if source == target or source in self._reachable_from(target):
            raise ProxyCycleError(f"Proxy {source} -> {target} would create a cycle")

        self._adj[source] = target
        return ProxyEdge(source, target)

    # --------------------------------------------------------------------- #
    # Queries
    # --------------------------------------------------------------------- #

    @property
    def variants(self) -> set[VariantKey]:
        """All declared variants."""
        return set(self._all_nodes)

    @property
    def edges(self) -> list[ProxyEdge]:
        """All declared proxy edges, in a deterministic order."""
        return [ProxyEdge(s, t) for s, t in sorted(self._adj.items())]

    def contains(self, variant: VariantKey) -> bool:
        return variant in self._all_nodes

    def proxy_target(self, variant: VariantKey) -> VariantKey | None:
        """Direct proxy target of ``variant``, or ``None`` for canonical variants."""
        return self._adj.get(variant)

    def successors(self, v: VariantKey) -> set[VariantKey]:
        target = self._adj.get(v)
        return {target} if target is not None else set()

    def predecessors(self, v: VariantKey) -> set[VariantKey]:
        """Variants that proxy directly to ``v``."""
        return {s for s, t in self._adj.items() if t == v}

    def is_canonical(self, variant: VariantKey) -> bool:
        """A declared variant without a proxy target."""
        return variant in self._all_nodes and variant not in self._adj

    def proxy_chain(self, variant: VariantKey) -> list[VariantKey]:
        """
        Variants visited when proxying from ``variant`` until a canonical one.

        The chain starts with ``variant`` itself.
        """
        chain = [variant]
        seen = {variant}
        cur = variant
        while (nxt := self._adj.get(cur)) is not None:
            if nxt in seen:
                raise ProxyCycleError(f"Proxy cycle detected through {nxt}")
            chain.append(nxt)
            seen.add(nxt)
            cur = nxt
        return chain

    def find_path(self, src: VariantKey, dst: VariantKey) -> list[ProxyEdge] | None:
        """
        Find a proxy chain ``src -> ... -> dst`` using BFS.

        Returns
        -------
        list[ProxyEdge] | None
            Ordered list of edges if a path exists, otherwise ``None``.
        """
        if src == dst:
            return []

        visited: set[VariantKey] = {src}
        parent: dict[VariantKey, VariantKey] = {}
        queue: list[VariantKey] = [src]
        qi = 0

        while qi < len(queue):
            v = queue[qi]
            qi += 1
            for w in self.successors(v):
                if w in visited:
                    continue
                visited.add(w)
                parent[w] = v
                if w == dst:
                    path: list[ProxyEdge] = []
                    cur = dst
                    while cur != src:
                        pv = parent[cur]
                        path.append(ProxyEdge(pv, cur))
                        cur = pv
                    path.reverse()
                    return path
                queue.append(w)
        return None

    # --------------------------------------------------------------------- #
    # Invariants
    # --------------------------------------------------------------------- #

    def validate(self) -> None:
        """
        Validate all graph invariants; raise :class:`GraphInvariantError` on failure.
        """
        dangling = [e for e in self.edges if e.target not in self._all_nodes]
        if dangling:
            raise GraphInvariantError(f"Proxy edges point to undeclared variants: {dangling}")
        for variant in self._all_nodes:
            self.proxy_chain(variant)

    def _reachable_from(self, src: VariantKey) -> set[VariantKey]:
        """Forward reachability from ``src`` (``src`` excluded)."""
        visited: set[VariantKey] = set()
        stack = [src]
        while stack:
            v = stack.pop()
            if v in visited:
                continue
            visited.add(v)
            stack.extend(w for w in self.successors(v) if w not in visited)
        visited.discard(src)
        return visited
