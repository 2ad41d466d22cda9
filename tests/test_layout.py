from blocks_layout import compute_dims


def test_compute_dims():
    d = compute_dims(10, 20, cell=20)
    assert (d.board_w, d.board_h) == (200, 400)
    assert d.total_w == 16 + 200 + 16 + 220 + 16
    assert d.total_h == 16 + 400 + 16
    assert d.panel_x == 16 + 200 + 16
    assert (d.cols, d.rows) == (10, 20)


def test_default_cell_size_comes_from_config():
    from blocks_config import CONFIG
    d = compute_dims(10, 20)
    assert d.cell == CONFIG["CELL_SIZE"]


def test_dims_follow_the_visible_board():
    from blocks_config import load_config
    from blocks_layout import dims_for
    d = dims_for(load_config({"BOARD_WIDTH": 8, "BOARD_HEIGHT": 16, "BUFFER_ROWS": 4}), cell=10)
    assert (d.cols, d.rows) == (8, 16)
    assert d.board_h == 160


def test_panel_rows_and_cell_origins():
    d = compute_dims(10, 20, cell=20)
    assert d.text_x == d.panel_x + 12
    assert d.next_label_y < d.preview_y
    assert d.preview_cell == 10
    assert d.controls_y(8) + 8*20 + 8 == d.panel_y + d.board_h
    assert d.cell_origin(0, 0) == (17, 17)
    assert d.cell_origin(2, 3, inset=4) == (16 + 40 + 4, 16 + 60 + 4)
