from blocks_game import Intent
from blocks_piece import Piece
from blocks_render import clear_banner
from conftest import BOTTOM, fill, place


def test_no_banner_without_a_clear(game):
    assert clear_banner(game.snapshot()) == ""
    game.apply_intent(Intent.HARD_DROP)
    assert clear_banner(game.snapshot()) == ""


def test_t_spin_double_banner(game):
    st = game.state
    fill(st.board, BOTTOM, [x for x in range(10) if x != 4])
    fill(st.board, BOTTOM - 1, [x for x in range(10) if x not in (3, 4, 5)])
    st.board.grid[BOTTOM - 2][3] = "Z"
    place(game, Piece("T", 1, 3, BOTTOM - 2))
    game.rotate(cw=True)
    game.hard_drop()
    assert clear_banner(game.snapshot()) == "T-SPIN DOUBLE"


def test_perfect_clear_banner(game):
    fill(game.state.board, BOTTOM, range(6))
    place(game, Piece("I", 0, 6, BOTTOM - 1))
    game.hard_drop()
    assert clear_banner(game.snapshot()) == "SINGLE  PERFECT CLEAR"
