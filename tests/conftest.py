import pytest

from blocks_config import load_config
from blocks_game import Game

# default board: 20 visible rows under 2 buffer rows
BOTTOM = 21


def fill(board, y, xs, t="Z"):
    for x in xs:
        board.grid[y][x] = t


def place(game, piece):
    """Swap in a hand-placed active piece."""
    game.state.active = piece
    game.state.rotated_last = False


@pytest.fixture
def config():
    return load_config({"SEED": 1234})


@pytest.fixture
def game(config):
    return Game(config)
