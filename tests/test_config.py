import pytest

from blocks_config import CONFIG, ConfigError, GameConfig, load_config
from blocks_piece import KINDS, build_rotation_table


def test_defaults_are_valid():
    cfg = load_config()
    assert (cfg.width, cfg.height, cfg.buffer_rows) == (10, 20, 2)
    assert cfg.starting_level == 1
    assert cfg.line_scores == {1: 100, 2: 300, 3: 500, 4: 800}
    assert set(cfg.rotations) == set(KINDS)
    assert cfg.seed is CONFIG["SEED"]


def test_overrides_and_field_keywords():
    cfg = load_config({"BOARD_WIDTH": 12, "SEED": 9}, perfect_clear_bonus=1000)
    assert cfg.width == 12
    assert cfg.seed == 9
    assert cfg.perfect_clear_bonus == 1000


def test_config_is_frozen():
    cfg = load_config()
    with pytest.raises(AttributeError):
        cfg.width = 5


def test_config_error_is_a_value_error():
    assert issubclass(ConfigError, ValueError)


@pytest.mark.parametrize("overrides", [
    {"BOARD_WIDTH": 0},
    {"BOARD_HEIGHT": -1},
    {"BOARD_WIDTH": 3},
    {"BUFFER_ROWS": -1},
    {"PREVIEW_COUNT": -1},
    {"STARTING_LEVEL": 0},
    {"STARTING_LEVEL": 5, "MAX_LEVEL": 4},
    {"LINES_PER_LEVEL": 0},
    {"LOCK_DELAY_MS": -10},
    {"NO_SUCH_KEY": 1},
])
def test_bad_overrides_fail_fast(overrides):
    with pytest.raises(ConfigError):
        load_config(overrides)


def test_unknown_field_keyword():
    with pytest.raises(ConfigError):
        load_config(colour="red")


def test_missing_line_score():
    with pytest.raises(ConfigError, match="line_scores"):
        GameConfig(line_scores={1: 100, 2: 300, 3: 500})


@pytest.mark.parametrize("curve", [(), (500, 600), (800, 0)])
def test_bad_gravity_curve(curve):
    with pytest.raises(ConfigError):
        GameConfig(gravity_curve_ms=curve)


def test_non_positive_gravity_floor():
    with pytest.raises(ConfigError):
        GameConfig(min_gravity_ms=0)


def test_rotation_table_missing_a_kind():
    rot = build_rotation_table()
    del rot["T"]
    with pytest.raises(ConfigError, match="missing"):
        GameConfig(rotations=rot)


def test_rotation_table_missing_a_state():
    rot = build_rotation_table()
    rot["S"] = rot["S"][:3]
    with pytest.raises(ConfigError, match="4 rotation states"):
        GameConfig(rotations=rot)


def test_rotation_state_with_duplicate_cells():
    rot = build_rotation_table()
    rot["L"] = (((0, 0), (0, 0), (1, 0), (2, 0)),) + rot["L"][1:]
    with pytest.raises(ConfigError, match="distinct"):
        GameConfig(rotations=rot)


@pytest.mark.parametrize("kicks", [
    {"Q": {}},
    {"T": {(0, 5): [(0, 0)]}},
    {"T": {(0, 1): []}},
])
def test_bad_kick_tables(kicks):
    with pytest.raises(ConfigError):
        GameConfig(kicks=kicks)


@pytest.mark.parametrize("kicks", [
    {"T": {(0, 1): [(0,)]}},
    {"T": {(0, 1): [(0, 0, 1)]}},
    {"T": {(0, 1): [(0, "1")]}},
    {"T": {(0, 1): [(0.5, 0)]}},
    {"T": {(0, 1): (0, 0)}},
    {"T": {"0->1": [(0, 0)]}},
])
def test_malformed_kick_offsets(kicks):
    with pytest.raises(ConfigError, match="pair"):
        GameConfig(kicks=kicks)


def test_kick_lists_from_json_become_tuples():
    cfg = GameConfig(kicks={"T": {(0, 1): [[0, 0], [-1, 0]]}})
    assert cfg.kicks["T"][(0, 1)] == ((0, 0), (-1, 0))


def test_rotation_lists_from_json_are_accepted():
    rot = build_rotation_table()
    rot["L"] = [[list(c) for c in offs] for offs in rot["L"]]
    cfg = GameConfig(rotations=rot)
    assert cfg.rotations["L"] == build_rotation_table()["L"]


@pytest.mark.parametrize("state", [
    [[0, 0], [1, 0], [2, 0], [2]],
    [[0, 0], [1, 0], [2, 0], "21"],
    [[0, 0], [1, 0], [2, 0], [2, None]],
])
def test_malformed_rotation_cells(state):
    rot = build_rotation_table()
    rot["L"] = (state,) + tuple(rot["L"][1:])
    with pytest.raises(ConfigError, match="pair"):
        GameConfig(rotations=rot)


def test_board_too_short_for_a_spawn():
    with pytest.raises(ConfigError, match="rows tall"):
        load_config({"BOARD_HEIGHT": 1, "BUFFER_ROWS": 0})
    # two visible rows fit every spawn state
    assert load_config({"BOARD_HEIGHT": 2, "BUFFER_ROWS": 0}).height == 2


def test_tables_are_read_only_and_config_is_hashable():
    cfg = load_config()
    with pytest.raises(TypeError):
        cfg.line_scores[1] = 0
    with pytest.raises(TypeError):
        cfg.rotations["T"] = ()
    with pytest.raises(TypeError):
        cfg.kicks["T"][(0, 1)] = ()
    assert cfg.gravity_curve_ms == (800, 730, 660, 590, 520, 450, 380, 310, 240,
                                    200, 190, 180, 170, 160, 150, 140, 130, 120, 110, 100)
    assert {cfg: 1}[cfg] == 1


def test_caller_dicts_are_copied():
    scores = {1: 100, 2: 300, 3: 500, 4: 800}
    cfg = GameConfig(line_scores=scores)
    scores[1] = 0
    assert cfg.line_scores[1] == 100
