"""
Graph algorithms for the separation game.

Spanning trees returned by ``bfs`` point from child to parent: every vertex
except the root has exactly one out-edge, labeled with its hop distance
from the root. Following out-edges therefore walks toward the root.
"""

import math
import random
from collections import deque
from typing import Hashable, List, Optional, Set

from baconverse.graph import Graph, StartNotFoundError, VertexNotFoundError

INF = math.inf


def random_walk(g: Graph, start: Hashable, steps: int, rng: Optional[random.Random] = None) -> List:
    """
    Walk up to ``steps`` hops from ``start``, picking a uniformly random
    out-neighbor each time.

    A 0-step walk is just ``[start]``. The walk stops early at a vertex with
    no out-edges.
    """
    if not g.has_vertex(start):
        raise StartNotFoundError(start)
    rng = rng or random

    walk = [start]
    current = start
    for _ in range(steps):
        neighbors = list(g.out_neighbors(current))
        if not neighbors:
            break
        current = rng.choice(neighbors)
        walk.append(current)
    return walk


def vertices_by_in_degree(g: Graph) -> List:
    """Vertices sorted by in-degree, largest first (ties keep vertex order)."""
    return sorted(g.vertices(), key=g.in_degree, reverse=True)


def vertices_by_out_degree(g: Graph) -> List:
    """Vertices sorted by out-degree, largest first (ties keep vertex order)."""
    return sorted(g.vertices(), key=g.out_degree, reverse=True)


def bfs(g: Graph, source: Hashable) -> Graph:
    """
    Build the shortest-path spanning tree of ``g`` rooted at ``source``.

    Vertices unreachable from ``source`` are left out of the tree.
    """
    if not g.has_vertex(source):
        raise VertexNotFoundError(source)

    tree = Graph()
    tree.insert_vertex(source)
    distance = {source: 0}
    frontier = deque([source])

    while frontier:
        v = frontier.popleft()
        for neighbor in g.out_neighbors(v):
            if tree.has_vertex(neighbor):
                continue
            distance[neighbor] = distance[v] + 1
            tree.insert_vertex(neighbor)
            tree.insert_directed(neighbor, v, distance[neighbor])
            frontier.append(neighbor)

    return tree


def get_distance(tree: Graph, v: Hashable) -> int:
    """Hop distance of ``v`` from the root of ``tree`` (0 for the root)."""
    for parent in tree.out_neighbors(v):
        return tree.get_label(v, parent)
    return 0


def get_path(tree: Graph, source: Hashable) -> List:
    """Vertices from ``source`` up to the root of ``tree``, both included."""
    path = [source]
    v = source
    while tree.out_degree(v) > 0:
        v = next(iter(tree.out_neighbors(v)))
        path.append(v)
    return path


def missing_vertices(graph: Graph, subgraph: Graph) -> Set:
    """Vertices of ``graph`` that are not in ``subgraph``."""
    return {v for v in graph.vertices() if not subgraph.has_vertex(v)}


def average_separation(tree: Graph) -> float:
    """
    Mean distance from the root of ``tree`` to every other vertex in it.

    Returns INF when the root reaches nothing.
    """
    n = tree.num_vertices() - 1
    if n <= 0:
        return INF

    # only non-root vertices have an out-edge
    total = sum(get_distance(tree, v) for v in tree.vertices() if tree.out_degree(v) > 0)
    return total / n
