"""
Labeled graph used by the actor network and by BFS spanning trees.

A thin wrapper around a NetworkX DiGraph. Every edge carries its label
under the ``label`` attribute. "Undirected" edges are two directed edges
(u -> v and v -> u) that are always written together.
"""

from typing import Any, Hashable, Iterable

import networkx as nx

LABEL = "label"


class GraphError(Exception):
    """Base class for graph lookup failures."""


class VertexNotFoundError(GraphError, LookupError):
    def __init__(self, vertex):
        super().__init__(f"Vertex not found: {vertex!r}")
        self.vertex = vertex


class EdgeNotFoundError(GraphError, LookupError):
    def __init__(self, u, v):
        super().__init__(f"Edge not found: {u!r} -> {v!r}")
        self.u = u
        self.v = v


class StartNotFoundError(VertexNotFoundError):
    """Raised by random_walk when the start vertex is not in the graph."""


class UnreachableVertexError(GraphError):
    def __init__(self, vertex, root):
        super().__init__(f"{vertex!r} is not connected to {root!r}")
        self.vertex = vertex
        self.root = root


class Graph:
    """
    Mutable graph over hashable vertices with one label per directed edge.

    Vertices and neighbors are enumerated in insertion order, so a fixed
    construction sequence always yields the same iteration order.
    """

    def __init__(self):
        self._g = nx.DiGraph()

    def _require(self, v):
        if v not in self._g:
            raise VertexNotFoundError(v)

    # ---------- Mutation ----------
    def insert_vertex(self, v: Hashable) -> None:
        """Add a vertex; inserting an existing vertex is a no-op."""
        if v not in self._g:
            self._g.add_node(v)

    def insert_directed(self, u: Hashable, v: Hashable, label: Any) -> None:
        """Add (or relabel) the edge u -> v. Both vertices must exist."""
        self._require(u)
        self._require(v)
        self._g.add_edge(u, v, **{LABEL: label})

    def insert_undirected(self, u: Hashable, v: Hashable, label: Any) -> None:
        """
        Add the pair u -> v and v -> u with the same label.

        If both directions already exist nothing changes, so re-inserting a
        co-star pair never replaces the label it already carries.
        """
        self._require(u)
        self._require(v)
        if self._g.has_edge(u, v) and self._g.has_edge(v, u):
            return
        self._g.add_edge(u, v, **{LABEL: label})
        self._g.add_edge(v, u, **{LABEL: label})

    def set_label(self, u: Hashable, v: Hashable, label: Any) -> None:
        """Replace the label of the existing edge u -> v."""
        self._require(u)
        self._require(v)
        if not self._g.has_edge(u, v):
            raise EdgeNotFoundError(u, v)
        self._g.edges[u, v][LABEL] = label

    def set_undirected_label(self, u: Hashable, v: Hashable, label: Any) -> None:
        """Replace the label on both directions of an undirected edge."""
        self._require(u)
        self._require(v)
        for a, b in ((u, v), (v, u)):
            if not self._g.has_edge(a, b):
                raise EdgeNotFoundError(a, b)
        self._g.edges[u, v][LABEL] = label
        self._g.edges[v, u][LABEL] = label

    # ---------- Queries ----------
    def has_vertex(self, v: Hashable) -> bool:
        return v in self._g

    def has_edge(self, u: Hashable, v: Hashable) -> bool:
        self._require(u)
        self._require(v)
        return self._g.has_edge(u, v)

    def get_label(self, u: Hashable, v: Hashable) -> Any:
        self._require(u)
        self._require(v)
        if not self._g.has_edge(u, v):
            raise EdgeNotFoundError(u, v)
        return self._g.edges[u, v][LABEL]

    def out_neighbors(self, v: Hashable) -> Iterable:
        """Restartable view of the vertices v points to."""
        self._require(v)
        return self._g.succ[v].keys()

    def in_neighbors(self, v: Hashable) -> Iterable:
        """Restartable view of the vertices pointing to v."""
        self._require(v)
        return self._g.pred[v].keys()

    def out_degree(self, v: Hashable) -> int:
        self._require(v)
        return len(self._g.succ[v])

    def in_degree(self, v: Hashable) -> int:
        self._require(v)
        return len(self._g.pred[v])

    def num_vertices(self) -> int:
        return self._g.number_of_nodes()

    def num_edges(self) -> int:
        """Number of directed edges (an undirected pair counts twice)."""
        return self._g.number_of_edges()

    def vertices(self) -> Iterable:
        return self._g.nodes

    def as_networkx(self) -> nx.DiGraph:
        """Read-only NetworkX view, for drawing and checksums."""
        return self._g.copy(as_view=True)

    def __contains__(self, v) -> bool:
        return v in self._g

    def __len__(self) -> int:
        return self._g.number_of_nodes()

    def __repr__(self) -> str:
        lines = [f"Vertices: {list(self._g.nodes)}", "Out edges:"]
        for v in self._g.nodes:
            out = {n: d[LABEL] for n, d in self._g.succ[v].items()}
            lines.append(f"  {v!r}: {out}")
        return "\n".join(lines)
