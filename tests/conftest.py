"""Shared fixtures: small graphs and record files for the actor network."""

import pytest

from baconverse.graph import Graph


@pytest.fixture
def simple_graph() -> Graph:
    """0-1, 0-3, 2-1, 3-2, 4-3 (the textbook five-vertex example)."""
    g = Graph()
    for v in ["0", "1", "2", "3", "4"]:
        g.insert_vertex(v)
    g.insert_undirected("0", "1", "aaa")
    g.insert_undirected("0", "3", "eee")
    g.insert_undirected("2", "1", "bbb")
    g.insert_undirected("3", "2", "ccc")
    g.insert_undirected("4", "3", "ddd")
    return g


@pytest.fixture
def line_graph() -> Graph:
    """root - a - b - c, plus an isolated vertex z."""
    g = Graph()
    for v in ["root", "a", "b", "c", "z"]:
        g.insert_vertex(v)
    g.insert_undirected("root", "a", "m1")
    g.insert_undirected("a", "b", "m2")
    g.insert_undirected("b", "c", "m3")
    return g


@pytest.fixture
def record_files(tmp_path):
    """
    Record files for a tiny universe.

    Kevin Bacon links Tom Hanks (Apollo 13), Sean Penn (Mystic River) and
    Lori Singer (Footloose); Keanu Reeves only shares The Matrix with
    Carrie-Anne Moss; Nobody Special has no movies at all.
    """
    movies = tmp_path / "movies.txt"
    actors = tmp_path / "actors.txt"
    movie_actors = tmp_path / "movie-actors.txt"
    movies.write_text("1|Footloose\n2|Apollo 13\n3|Mystic River\n4|The Matrix\n5|Cast Away\n", encoding="utf-8")
    actors.write_text(
        "10|Lori Singer\n11|Kevin Bacon\n12|Tom Hanks\n13|Sean Penn\n"
        "14|Keanu Reeves\n15|Carrie-Anne Moss\n16|Nobody Special\n",
        encoding="utf-8",
    )
    movie_actors.write_text(
        "1|10\n1|11\n2|11\n2|12\n3|11\n3|13\n4|14\n4|15\n5|12\n"
        # duplicate record
        "2|12\n"
        # unknown movie and unknown actor
        "99|11\n3|99\n"
        "\n",
        encoding="utf-8",
    )
    return str(movies), str(actors), str(movie_actors)
