import logging
from typing import Any, Callable, Hashable, List, Optional, Tuple

from baconverse import graph_lib
from baconverse.graph import Graph, UnreachableVertexError, VertexNotFoundError

logger = logging.getLogger("baconverse.game_logic")

Progress = Callable[[Hashable], None]  # called once per actor while averages are computed


class CenterSession:
    """
    Separation queries against one actor network and a movable center.

    At construction the average separation of every actor is computed (one
    BFS per actor) along with the degree ranking; both are independent of
    the center. Changing the center replaces the spanning tree and the
    separation ranking wholesale.

    Queries never mutate the session. Callers sharing a session between
    threads must serialize change_center against reads.
    """

    def __init__(
        self,
        graph: Graph,
        preferred_center: Optional[Hashable] = None,
        default_center: Optional[Hashable] = None,
        progress: Optional[Progress] = None,
    ):
        self.graph = graph
        self.center = None
        self.spanning_tree = Graph()
        self.by_separation: List = []

        self.avg_separation = {}
        for actor in graph.vertices():
            self.avg_separation[actor] = graph_lib.average_separation(graph_lib.bfs(graph, actor))
            if progress is not None:
                progress(actor)
        self.by_average_separation = sorted(self.avg_separation, key=self.avg_separation.get)
        self.by_degree = graph_lib.vertices_by_out_degree(graph)

        logger.info("Computed average separation for %d actors", len(self.avg_separation))

        for candidate in (preferred_center, default_center, next(iter(graph.vertices()), None)):
            if candidate is not None and graph.has_vertex(candidate):
                self.change_center(candidate)
                break

    def change_center(self, actor: Optional[Hashable]) -> bool:
        """
        Make ``actor`` the center and rebuild the spanning tree.

        Returns False (and changes nothing) for None or an unknown actor.
        """
        if actor is None or not self.graph.has_vertex(actor):
            logger.debug("Ignoring center change to %r", actor)
            return False

        self.center = actor
        self.spanning_tree = graph_lib.bfs(self.graph, actor)
        tree = self.spanning_tree
        self.by_separation = sorted(
            (v for v in tree.vertices() if v != actor),
            key=lambda v: graph_lib.get_distance(tree, v),
        )
        logger.info("Center is now %r (%d/%d reachable)", actor, self.num_reachable, self.num_vertices)
        return True

    # ---------- Accessors ----------
    @property
    def num_vertices(self) -> int:
        return self.graph.num_vertices()

    @property
    def num_reachable(self) -> int:
        """Vertices in the current spanning tree, the center included."""
        return self.spanning_tree.num_vertices()

    def average_separation(self, actor: Hashable) -> float:
        if actor not in self.avg_separation:
            raise VertexNotFoundError(actor)
        return self.avg_separation[actor]

    def separation(self, actor: Hashable) -> int:
        """Distance of ``actor`` from the center."""
        self._require_reachable(actor)
        return graph_lib.get_distance(self.spanning_tree, actor)

    def _require_reachable(self, actor):
        if not self.graph.has_vertex(actor):
            raise VertexNotFoundError(actor)
        if not self.spanning_tree.has_vertex(actor):
            raise UnreachableVertexError(actor, self.center)

    # ---------- Queries ----------
    def list_by_average_separation(self, count: int) -> List[Tuple[Any, float]]:
        """
        Best (count >= 0) or worst (count < 0) centers by average separation.

        Best centers come lowest average first; worst ones highest first.
        """
        n = min(abs(count), len(self.by_average_separation))
        if count >= 0:
            actors = self.by_average_separation[:n]
        else:
            actors = self.by_average_separation[::-1][:n]
        return [(a, self.avg_separation[a]) for a in actors]

    def list_by_degree(self, low: Optional[int] = None, high: Optional[int] = None) -> List[Tuple[Any, int]]:
        """
        Actors by degree, largest first.

        With bounds, only degrees in [low, high]; nothing when low >= high.
        """
        ranked = [(a, self.graph.out_degree(a)) for a in self.by_degree]
        if low is None and high is None:
            return ranked
        return [(a, d) for a, d in ranked if _within(d, low, high)] if _valid_range(low, high) else []

    def list_unreachable(self) -> List:
        """Actors with no path to the center, in network order."""
        missing = graph_lib.missing_vertices(self.graph, self.spanning_tree)
        return [v for v in self.graph.vertices() if v in missing]

    def path_to_center(self, actor: Hashable) -> List:
        """Actors from ``actor`` to the center, both included."""
        self._require_reachable(actor)
        return graph_lib.get_path(self.spanning_tree, actor)

    def connections_to_center(self, actor: Hashable) -> List[Tuple[Any, Any, Any]]:
        """
        The path to the center as (actor, shared movies, next actor) steps.

        Movies are read from the actor -> next actor edge of the network, so
        this assumes undirected (paired) edges like the ones the cast network
        builds. On a one-way edge it raises EdgeNotFoundError.
        """
        path = self.path_to_center(actor)
        return [(a, self.graph.get_label(a, b), b) for a, b in zip(path, path[1:])]

    def list_by_separation(self, low: Optional[int] = None, high: Optional[int] = None) -> List[Tuple[Any, int]]:
        """
        Reachable actors by distance from the center, nearest first.

        With bounds, only distances in [low, high]; nothing when low >= high.
        """
        tree = self.spanning_tree
        ranked = [(a, graph_lib.get_distance(tree, a)) for a in self.by_separation]
        if low is None and high is None:
            return ranked
        return [(a, d) for a, d in ranked if _within(d, low, high)] if _valid_range(low, high) else []


def _valid_range(low, high) -> bool:
    return low is None or high is None or low < high


def _within(value, low, high) -> bool:
    return (low is None or value >= low) and (high is None or value <= high)
