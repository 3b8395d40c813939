"""
Build the actor network from pipe-delimited record files.

Inputs:
- movies file:        movie_id|title
- actors file:        actor_id|name
- movie-actors file:  movie_id|actor_id

The result is a Graph where:
- Vertices are actor names (every actor, including ones with no movies)
- Undirected edges join actors who appeared in the same movie
- Edge labels are frozensets of the shared movie titles
"""

import logging
from collections import defaultdict
from typing import Dict, Iterable, Iterator, List, Mapping, NamedTuple, Optional, Set, Tuple

from tqdm import tqdm

from baconverse.graph import Graph

logger = logging.getLogger("baconverse.cast_network")


class CastRecords(NamedTuple):
    actors: List[str]                 # actor names, in file order
    cast_by_movie: Dict[str, Set[str]]  # movie title -> actor names


def read_records(path: str) -> Iterator[Tuple[str, str]]:
    """
    Yield (key, value) pairs from a pipe-delimited file.

    Blank lines and lines without a separator are skipped. Bytes that are
    not valid UTF-8 decode to U+FFFD instead of aborting the load.
    """
    with open(path, encoding="utf-8", errors="replace") as f:
        for lineno, line in enumerate(f, 1):
            line = line.rstrip("\r\n")
            if not line.strip():
                continue
            fields = line.split("|")
            if len(fields) < 2:
                logger.warning("Skipping malformed record %s:%d: %r", path, lineno, line)
                continue
            yield fields[0], fields[1]


def parse_cast(movies_path: str, actors_path: str, movie_actors_path: str) -> CastRecords:
    """
    Resolve the three record files into actor names and per-movie casts.

    Movie-actor records that reference an unknown movie or actor are
    dropped; duplicate records collapse into the same cast set.
    """
    movies = {}
    cast_by_movie = {}
    for movie_id, title in read_records(movies_path):
        movies[movie_id] = title
        cast_by_movie[title] = set()

    actors = {}
    for actor_id, name in read_records(actors_path):
        actors[actor_id] = name
    actor_names = list(dict.fromkeys(actors.values()))

    unknown = 0
    for movie_id, actor_id in read_records(movie_actors_path):
        if movie_id not in movies or actor_id not in actors:
            unknown += 1
            continue
        cast_by_movie[movies[movie_id]].add(actors[actor_id])

    if unknown:
        logger.warning("Skipped %d movie-actor records with unknown references", unknown)
    logger.info("Parsed %d movies, %d actors", len(movies), len(actor_names))
    return CastRecords(actor_names, cast_by_movie)


def build_cast_network(
    actors: Iterable[str],
    cast_by_movie: Mapping[str, Iterable[str]],
    show_progress: bool = False,
) -> Graph:
    """
    Build the actor-actor network.

    Args:
        actors: Actor names; each becomes a vertex in the given order
        cast_by_movie: Movie title -> names of the actors in it
        show_progress: Show a tqdm bar while processing movies

    Returns:
        Graph with frozenset-of-titles labels on every co-star edge
    """
    graph = Graph()
    order = {}
    for actor in actors:
        graph.insert_vertex(actor)
        order.setdefault(actor, len(order))

    # Collect every shared movie per pair before inserting, so each pair is
    # written once with its final label. Casts are ordered by actor position
    # so edge order does not depend on set iteration.
    edge_movies = defaultdict(set)
    for movie, cast in tqdm(cast_by_movie.items(), desc="Processing movies", disable=not show_progress):
        cast = sorted((a for a in set(cast) if a in order), key=order.get)
        for i in range(len(cast)):
            for j in range(i + 1, len(cast)):
                edge_movies[(cast[i], cast[j])].add(movie)

    for a, b in sorted(edge_movies, key=lambda pair: (order[pair[0]], order[pair[1]])):
        graph.insert_undirected(a, b, frozenset(edge_movies[(a, b)]))

    logger.info("Built network: %d actors, %d co-star pairs", graph.num_vertices(), len(edge_movies))
    return graph


def load_cast_network(
    movies_path: str,
    actors_path: str,
    movie_actors_path: str,
    show_progress: bool = False,
) -> Tuple[Graph, Optional[str]]:
    """
    Read the record files and build the network.

    Returns:
        Tuple of (graph, first actor in the actors file or None)
    """
    records = parse_cast(movies_path, actors_path, movie_actors_path)
    graph = build_cast_network(records.actors, records.cast_by_movie, show_progress=show_progress)
    default_center = records.actors[0] if records.actors else None
    return graph, default_center
