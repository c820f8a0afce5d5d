"""Dependency graph — wraps a networkx DiGraph built from connections.

Edges run from the depended-on node to the dependent node, the same
direction arrows are drawn. Node insertion order is the caller's input
order and is used as the tie-break wherever an order has to be chosen.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import networkx as nx

from epic_layout.errors import CyclicDependencyError, LayoutError
from epic_layout.layout.types import Connection


class DependencyGraph:
    """Directed dependency graph over one scope (a batch's tasks, or an epic's batches)."""

    def __init__(self, digraph: nx.DiGraph) -> None:
        self.digraph = digraph
        self._index: dict[int, int] = {node_id: i for i, node_id in enumerate(digraph.nodes)}

    @classmethod
    def from_connections(cls, node_ids: Sequence[int], connections: Iterable[Connection]) -> DependencyGraph:
        """Build the graph, keeping only connections whose endpoints are both in scope.

        Raises:
            LayoutError: If a node id appears twice.
        """
        digraph: nx.DiGraph = nx.DiGraph()
        for node_id in node_ids:
            if node_id in digraph:
                raise LayoutError(f"duplicate node id {node_id}")
            digraph.add_node(node_id)
        for conn in connections:
            if conn.from_id in digraph and conn.to_id in digraph:
                digraph.add_edge(conn.from_id, conn.to_id)
        return cls(digraph)

    def is_dag(self) -> bool:
        return nx.is_directed_acyclic_graph(self.digraph)

    def find_cycle(self) -> list[int] | None:
        try:
            edges = nx.find_cycle(self.digraph)
        except nx.NetworkXNoCycle:
            return None
        return [src for src, _tgt in edges]

    def check_acyclic(self) -> None:
        """Raise CyclicDependencyError if any dependency cycle exists."""
        cycle = self.find_cycle()
        if cycle is not None:
            raise CyclicDependencyError(cycle)

    def topological_order(self) -> list[int]:
        """Topological order, ties broken by input order.

        Raises:
            CyclicDependencyError: If the graph is not a DAG.
        """
        self.check_acyclic()
        return list(nx.lexicographical_topological_sort(self.digraph, key=self._index.__getitem__))

    def dependencies(self, node_id: int) -> list[int]:
        return sorted(self.digraph.predecessors(node_id), key=self._index.__getitem__)

    def dependents(self, node_id: int) -> list[int]:
        return sorted(self.digraph.successors(node_id), key=self._index.__getitem__)

    def node_ids(self) -> list[int]:
        return list(self.digraph.nodes)

    def node_count(self) -> int:
        return self.digraph.number_of_nodes()

    def edge_count(self) -> int:
        return self.digraph.number_of_edges()
