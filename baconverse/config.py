import os

from dotenv import load_dotenv

load_dotenv()

MOVIES_PATH = os.getenv("BACON_MOVIES_PATH", "inputs/movies.txt")
ACTORS_PATH = os.getenv("BACON_ACTORS_PATH", "inputs/actors.txt")
MOVIE_ACTORS_PATH = os.getenv("BACON_MOVIE_ACTORS_PATH", "inputs/movie-actors.txt")

# Center chosen at startup when this actor is in the network
PREFERRED_CENTER = os.getenv("BACON_PREFERRED_CENTER", "Kevin Bacon")

LOG_LEVEL = os.getenv("BACON_LOG_LEVEL", "WARNING")
