"""Tests for the interactive game shell."""

import io

import pytest

from baconverse import cli
from baconverse.cast_network import load_cast_network
from baconverse.game_logic import CenterSession


@pytest.fixture
def shell(record_files):
    graph, default_center = load_cast_network(*record_files)
    session = CenterSession(graph, preferred_center="Kevin Bacon", default_center=default_center)
    return cli.GameShell(session, out=io.StringIO())


def run(shell, line):
    shell.out.seek(0)
    shell.out.truncate()
    keep_going = shell.handle(line)
    return keep_going, shell.out.getvalue()


def test_quit(shell) -> None:
    assert run(shell, "q") == (False, "")
    assert run(shell, "q now") == (True, "Invalid command\n")


def test_list_centers(shell) -> None:
    _, out = run(shell, "c 2")
    assert "The top 2 actor(s) with lowest average separation" in out
    assert "Kevin Bacon - 1.0" in out
    _, out = run(shell, "c -1")
    assert "highest average separation" in out
    assert "Nobody Special - isolated" in out


@pytest.mark.parametrize(
    "line, message",
    [
        ("c", "Invalid command"),
        ("c two", "Invalid parameter"),
        ("d 1", "Invalid command"),
        ("d 1 x", "Invalid parameter"),
        ("s 1 2 3", "Invalid parameter"),
        ("d 1 2 3", "Invalid parameter"),
        ("h me", "Invalid command"),
        ("i all", "Invalid command"),
        ("p", "Invalid command"),
        ("u", "Invalid command"),
        ("u Ghost", "Actor not found"),
        ("x", "Unrecognized command"),
        ("", "Unrecognized command"),
    ],
)
def test_bad_commands(shell, line, message) -> None:
    assert run(shell, line) == (True, message + "\n")


def test_degree_and_separation(shell) -> None:
    _, out = run(shell, "d 2 5")
    assert out == "Actor(s) with degree between 2 to 5:\nKevin Bacon - 3\n"
    _, out = run(shell, "d 5 2")
    assert out == "Actor(s) with degree between 5 to 2:\n"
    _, out = run(shell, "s")
    assert out.splitlines() == [
        "Actor(s) sorted by separation from Kevin Bacon:",
        "Lori Singer - 1",
        "Tom Hanks - 1",
        "Sean Penn - 1",
    ]


def test_unreachable(shell) -> None:
    _, out = run(shell, "i")
    assert out.splitlines()[:4] == [
        "Actor(s) unreachable from Kevin Bacon",
        "Keanu Reeves",
        "Carrie-Anne Moss",
        "Nobody Special",
    ]


def test_show_path(shell) -> None:
    _, out = run(shell, "u Tom Hanks")
    assert out.startswith("Tom Hanks is now the center of the acting universe, connected to 4/7 actors")
    _, out = run(shell, "p Lori Singer")
    assert out.splitlines()[:3] == [
        "Lori Singer's number is 2",
        "Lori Singer appeared in ['Footloose'] with Kevin Bacon",
        "Kevin Bacon appeared in ['Apollo 13'] with Tom Hanks",
    ]
    assert run(shell, "p Tom Hanks")[1] == "Tom Hanks is the current center.\n"
    assert run(shell, "p Keanu Reeves")[1] == "This actor is not connected to Tom Hanks\n"
    assert run(shell, "p Ghost")[1] == "Actor not found\n"


def test_main_runs_commands_from_stdin(record_files, monkeypatch, capsys) -> None:
    movies, actors, movie_actors = record_files
    monkeypatch.setattr("sys.stdin", io.StringIO("p Sean Penn\nq\nc 1\n"))
    code = cli.main(["--movies", movies, "--actors", actors, "--movie-actors", movie_actors])
    out = capsys.readouterr().out
    assert code == 0
    assert "Kevin Bacon is now the center of the acting universe" in out
    assert "Sean Penn's number is 1" in out
    assert "The top 1 actor(s)" not in out


def test_main_with_missing_files(tmp_path, capsys) -> None:
    missing = str(tmp_path / "missing.txt")
    assert cli.main(["--movies", missing, "--actors", missing, "--movie-actors", missing]) == 1
    assert "Unable to start game" in capsys.readouterr().out


def test_help(shell) -> None:
    _, out = run(shell, "h")
    assert out.startswith("Commands:\n")
    assert "u <name>: make <name> the center of the universe" in out
    assert "q: quit game" in out


def test_range_with_extra_spaces(shell) -> None:
    _, out = run(shell, "  d   2   5 ")
    assert out == "Actor(s) with degree between 2 to 5:\nKevin Bacon - 3\n"


def test_main_with_non_utf8_record_file(record_files, monkeypatch, capsys) -> None:
    movies, actors, movie_actors = record_files
    with open(movies, "ab") as f:
        f.write("6|Am\xe9lie\n".encode("latin-1"))
    monkeypatch.setattr("sys.stdin", io.StringIO("p Tom Hanks\nq\n"))
    code = cli.main(["--movies", movies, "--actors", actors, "--movie-actors", movie_actors])
    out = capsys.readouterr().out
    assert code == 0
    assert "Tom Hanks's number is 1" in out
