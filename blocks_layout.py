# blocks_layout.py
from dataclasses import dataclass
from typing import Optional, Tuple
from blocks_config import CONFIG, GameConfig

MARGIN = 16
PANEL_W = 220
HUD_LINE = 24
CONTROLS_LINE = 20

@dataclass(frozen=True)
class Dims:
    """Pixel geometry of the visible board and the side panel."""
    cell: int
    cols: int
    rows: int
    margin: int = MARGIN
    panel_w: int = PANEL_W

    @property
    def board_x(self) -> int: return self.margin
    @property
    def board_y(self) -> int: return self.margin
    @property
    def board_w(self) -> int: return self.cols * self.cell
    @property
    def board_h(self) -> int: return self.rows * self.cell
    @property
    def panel_x(self) -> int: return self.board_x + self.board_w + self.margin
    @property
    def panel_y(self) -> int: return self.margin
    @property
    def total_w(self) -> int: return self.panel_x + self.panel_w + self.margin
    @property
    def total_h(self) -> int: return self.board_y + self.board_h + self.margin

    # Panel rows: HUD lines from the top, then "Next:" and the previews
    @property
    def text_x(self) -> int: return self.panel_x + 12
    @property
    def next_label_y(self) -> int: return self.panel_y + 12 + 6*HUD_LINE + 4
    @property
    def preview_y(self) -> int: return self.next_label_y + 26
    @property
    def preview_cell(self) -> int: return max(10, self.cell // 2)

    def controls_y(self, n_lines: int) -> int:
        """Top of a block of n control lines pinned to the panel bottom."""
        return self.panel_y + self.board_h - CONTROLS_LINE*n_lines - 8

    def cell_origin(self, bx: int, by: int, inset: int = 1) -> Tuple[int, int]:
        """Screen position of visible board cell (bx, by), shifted by inset pixels."""
        return (self.board_x + bx*self.cell + inset, self.board_y + by*self.cell + inset)

def compute_dims(cols: int, rows: int, cell: Optional[int] = None) -> Dims:
    return Dims(cell=int(CONFIG["CELL_SIZE"] if cell is None else cell), cols=cols, rows=rows)

def dims_for(cfg: GameConfig, cell: Optional[int] = None) -> Dims:
    """Geometry for the visible part of cfg's board; buffer rows are never drawn."""
    return compute_dims(cfg.width, cfg.height, cell)
