"""
Interactive Kevin Bacon game.

Usage:
    baconverse                                   # record files from config / .env
    baconverse --actors inputs/actorsTest.txt --movies inputs/moviesTest.txt \\
               --movie-actors inputs/movie-actorsTest.txt --center "Kevin Bacon"
"""

import argparse
import logging
import math
import sys

from tqdm import tqdm

from baconverse import config
from baconverse.cast_network import load_cast_network
from baconverse.game_logic import CenterSession

INSTRUCTIONS = """Commands:
c <#>: list top (positive number) or bottom (negative) <#> centers of the universe, sorted by average separation
d <low> <high>: list actors sorted by degree, with degree between low and high
h: show the instructions again
i: list actors with infinite separation from the current center
p <name>: find path from <name> to current center of the universe
s <low> <high>: list actors sorted by non-infinite separation from the current center, with separation between low and high
u <name>: make <name> the center of the universe
q: quit game
"""
PROMPT = "Kevin Bacon game > "

ERR_INVALID_COMMAND = "Invalid command"
ERR_INVALID_PARAMETER = "Invalid parameter"
ERR_UNKNOWN_ACTOR = "Actor not found"
ERR_UNREACHABLE_ACTOR = "This actor is not connected to "
ERR_UNRECOGNIZED_COMMAND = "Unrecognized command"


def format_average(avg: float) -> str:
    return "isolated" if math.isinf(avg) else str(avg)


class GameShell:
    """Runs command lines against a CenterSession and prints the answers."""

    def __init__(self, session: CenterSession, out=None):
        self.session = session
        self.out = out or sys.stdout

    def say(self, text=""):
        print(text, file=self.out)

    def announce_center(self):
        s = self.session
        self.say(f"{s.center} is now the center of the acting universe, connected to "
                 f"{s.num_reachable}/{s.num_vertices} actors with average separation "
                 f"{format_average(s.average_separation(s.center))}\n")

    def handle(self, line: str) -> bool:
        """Run one command line; returns False once the player quits."""
        tokens = line.split()
        if not tokens:
            self.say(ERR_UNRECOGNIZED_COMMAND)
            return True
        command, rest = tokens[0], line.strip()[len(tokens[0]):].strip()

        if command == "q":
            if len(tokens) == 1:
                return False
            self.say(ERR_INVALID_COMMAND)
        elif command == "h":
            self.say(INSTRUCTIONS if len(tokens) == 1 else ERR_INVALID_COMMAND)
        elif command == "c":
            if len(tokens) < 2:
                self.say(ERR_INVALID_COMMAND)
            else:
                self._with_ints([rest], self.list_centers)
        elif command == "d":
            self._ranged(line, tokens, self.list_by_degree)
        elif command == "s":
            self._ranged(line, tokens, self.list_by_separation)
        elif command == "i":
            if len(tokens) == 1:
                self.list_unreachable()
            else:
                self.say(ERR_INVALID_COMMAND)
        elif command == "p":
            if not rest:
                self.say(ERR_INVALID_COMMAND)
            else:
                self.show_path(rest)
        elif command == "u":
            if not rest:
                self.say(ERR_INVALID_COMMAND)
            elif self.session.change_center(rest):
                self.announce_center()
            else:
                self.say(ERR_UNKNOWN_ACTOR)
        else:
            self.say(ERR_UNRECOGNIZED_COMMAND)
        return True

    def _with_ints(self, raw, action):
        try:
            values = [int(v) for v in raw]
        except ValueError:
            self.say(ERR_INVALID_PARAMETER)
            return
        action(*values)

    def _ranged(self, line, tokens, action):
        if len(tokens) == 1:
            action()
        elif len(tokens) > 2:
            # anything after <low> is read as <high>, so "d 1 2 3" is a bad parameter
            self._with_ints(line.split(maxsplit=2)[1:], action)
        else:
            self.say(ERR_INVALID_COMMAND)

    # ---------- Commands ----------
    def list_centers(self, count: int):
        ranked = self.session.list_by_average_separation(count)
        self.say(f"The top {len(ranked)} actor(s) with {'lowest' if count >= 0 else 'highest'} average separation")
        for actor, avg in ranked:
            self.say(f"{actor} - {format_average(avg)}")
        self.say()

    def list_by_degree(self, low=None, high=None):
        if low is None:
            self.say("Actor(s) sorted by degree:")
        else:
            self.say(f"Actor(s) with degree between {low} to {high}:")
        for actor, degree in self.session.list_by_degree(low, high):
            self.say(f"{actor} - {degree}")

    def list_by_separation(self, low=None, high=None):
        center = self.session.center
        if low is None:
            self.say(f"Actor(s) sorted by separation from {center}:")
        else:
            self.say(f"Actor(s) with separation from {center} between {low} to {high}:")
        for actor, separation in self.session.list_by_separation(low, high):
            self.say(f"{actor} - {separation}")

    def list_unreachable(self):
        self.say(f"Actor(s) unreachable from {self.session.center}")
        for actor in self.session.list_unreachable():
            self.say(actor)
        self.say()

    def show_path(self, actor):
        s = self.session
        if not s.graph.has_vertex(actor):
            self.say(ERR_UNKNOWN_ACTOR)
            return
        if not s.spanning_tree.has_vertex(actor):
            self.say(ERR_UNREACHABLE_ACTOR + str(s.center))
            return

        steps = s.connections_to_center(actor)
        if not steps:
            self.say(f"{actor} is the current center.")
            return
        self.say(f"{actor}'s number is {len(steps)}")
        for a, movies, b in steps:
            self.say(f"{a} appeared in {sorted(movies)} with {b}")
        self.say()

    def run(self, lines):
        self.say(INSTRUCTIONS)
        self.announce_center()
        for line in lines:
            if not self.handle(line):
                break


def build_session(movies_path, actors_path, movie_actors_path, center=None, show_progress=True):
    graph, default_center = load_cast_network(
        movies_path, actors_path, movie_actors_path, show_progress=show_progress
    )
    with tqdm(total=graph.num_vertices(), desc="Loading", disable=not show_progress) as bar:
        return CenterSession(
            graph,
            preferred_center=center,
            default_center=default_center,
            progress=lambda actor: bar.update(1),
        )


def read_commands(stream):
    while True:
        print(PROMPT, end="", flush=True)
        line = stream.readline()
        if not line:
            return
        yield line.rstrip("\n")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Play the Kevin Bacon game on an actor network")
    parser.add_argument("--movies", type=str, default=config.MOVIES_PATH, help="movie_id|title records")
    parser.add_argument("--actors", type=str, default=config.ACTORS_PATH, help="actor_id|name records")
    parser.add_argument("--movie-actors", type=str, default=config.MOVIE_ACTORS_PATH,
                        help="movie_id|actor_id records")
    parser.add_argument("--center", type=str, default=config.PREFERRED_CENTER,
                        help="Initial center of the universe, if present")
    args = parser.parse_args(argv)

    logging.basicConfig(level=config.LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    try:
        session = build_session(args.movies, args.actors, args.movie_actors, center=args.center)
    except OSError as e:
        print(f"Unable to start game: {e}")
        return 1

    if session.center is None:
        print("Unable to start game: the actor network is empty.")
        return 1

    GameShell(session).run(read_commands(sys.stdin))
    return 0


if __name__ == "__main__":
    sys.exit(main())
