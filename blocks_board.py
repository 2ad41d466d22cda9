"""Board model: occupancy, commit, line clear, drop distance"""
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

Cell = Optional[str]
Cells = Iterable[Tuple[int, int]]


@dataclass(frozen=True)
class ClearEvent:
    """Outcome of a lock: cleared row indices (before compaction) and flags."""
    rows: Tuple[int, ...] = ()
    is_t_spin: bool = False
    is_perfect_clear: bool = False

    @property
    def lines(self) -> int:
        return len(self.rows)


class Board:
    """width x (height + hidden) grid, row 0 at the top.

    The first `hidden` rows are a buffer above the visible area.
    """

    def __init__(self, width: int, height: int, hidden: int = 0):
        self.width = width
        self.height = height + hidden
        self.hidden = hidden
        self.grid: List[List[Cell]] = [[None] * width for _ in range(self.height)]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_occupied(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return True
        return self.grid[y][x] is not None

    def full_rows(self) -> List[int]:
        return [y for y, row in enumerate(self.grid) if all(row)]

    def is_empty(self) -> bool:
        return not any(any(row) for row in self.grid)

    def commit(self, cells: Cells, t: str) -> ClearEvent:
        """Merge cells into the grid, then clear and compact full rows."""
        cells = list(cells)
        for x, y in cells:
            if not self.in_bounds(x, y):
                raise ValueError(f"cell ({x}, {y}) is outside the {self.width}x{self.height} board")
        for x, y in cells:
            self.grid[y][x] = t

        cleared = self.full_rows()
        if not cleared:
            return ClearEvent()
        kept = [row for y, row in enumerate(self.grid) if y not in cleared]
        self.grid = [[None] * self.width for _ in cleared] + kept
        return ClearEvent(rows=tuple(cleared), is_perfect_clear=self.is_empty())

    def rows(self) -> Tuple[Tuple[Cell, ...], ...]:
        return tuple(tuple(row) for row in self.grid)


def collide(board: Board, cells: Cells) -> bool:
    return any(board.is_occupied(x, y) for x, y in cells)


def drop_distance(board: Board, cells: Cells) -> int:
    """Rows the cells can fall before resting on the floor or a block."""
    cells = list(cells)
    d = 0
    while not collide(board, [(x, y + d + 1) for x, y in cells]):
        d += 1
    return d
