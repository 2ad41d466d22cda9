"""Piece model, shapes, rotation table, SRS kicks, T-spin test"""
from dataclasses import dataclass, replace
from typing import List, Mapping, Optional, Sequence, Tuple

from blocks_board import Board, collide

Offsets = Tuple[Tuple[int, int], ...]
RotationTable = Mapping[str, Tuple[Offsets, ...]]
KickTable = Mapping[str, Mapping[Tuple[int, int], Sequence[Tuple[int, int]]]]

KINDS = ("I", "J", "L", "O", "S", "T", "Z")

SHAPES = {
    "I": [[0,0,0,0],[1,1,1,1],[0,0,0,0],[0,0,0,0]],
    "J": [[1,0,0],[1,1,1],[0,0,0]],
    "L": [[0,0,1],[1,1,1],[0,0,0]],
    "O": [[1,1],[1,1]],
    "S": [[0,1,1],[1,1,0],[0,0,0]],
    "T": [[0,1,0],[1,1,1],[0,0,0]],
    "Z": [[1,1,0],[0,1,1],[0,0,0]],
}

def rotate_cw(m): return [list(r) for r in zip(*m[::-1])]

def shape_offsets(m) -> Offsets:
    return tuple((x, y) for y, row in enumerate(m) for x, v in enumerate(row) if v)

def build_rotation_table(shapes=SHAPES) -> RotationTable:
    """State 0..3 offsets per kind, rotating clockwise inside the bounding box."""
    table = {}
    for t, m in shapes.items():
        states = []
        for _ in range(4):
            states.append(shape_offsets(m))
            m = rotate_cw(m)
        table[t] = tuple(states)
    return table

# Guideline SRS tables, y-up as usually published; try_rotate flips dy.
JLSTZ_KICKS = {
    (0,1):[(0,0),(-1,0),(-1,1),(0,-2),(-1,-2)],
    (1,0):[(0,0),(1,0),(1,-1),(0,2),(1,2)],
    (1,2):[(0,0),(1,0),(1,-1),(0,2),(1,2)],
    (2,1):[(0,0),(-1,0),(-1,1),(0,-2),(-1,-2)],
    (2,3):[(0,0),(1,0),(1,1),(0,-2),(1,-2)],
    (3,2):[(0,0),(-1,0),(-1,-1),(0,2),(-1,2)],
    (3,0):[(0,0),(-1,0),(-1,-1),(0,2),(-1,2)],
    (0,3):[(0,0),(1,0),(1,1),(0,-2),(1,-2)],
}
I_KICKS = {
    (0,1):[(0,0),(-2,0),(1,0),(-2,-1),(1,2)],
    (1,0):[(0,0),(2,0),(-1,0),(2,1),(-1,-2)],
    (1,2):[(0,0),(-1,0),(2,0),(-1,2),(2,-1)],
    (2,1):[(0,0),(1,0),(-2,0),(1,-2),(-2,1)],
    (2,3):[(0,0),(2,0),(-1,0),(2,1),(-1,-2)],
    (3,2):[(0,0),(-2,0),(1,0),(-2,-1),(1,2)],
    (3,0):[(0,0),(1,0),(-2,0),(1,-2),(-2,1)],
    (0,3):[(0,0),(-1,0),(2,0),(-1,2),(2,-1)],
}

def build_kick_table() -> KickTable:
    kicks = {t: JLSTZ_KICKS for t in "JLSTZ"}
    kicks["I"] = I_KICKS
    kicks["O"] = {}
    return kicks


@dataclass(frozen=True)
class Piece:
    t: str
    state: int
    x: int
    y: int

    def cells(self, rotations: RotationTable) -> List[Tuple[int, int]]:
        return [(self.x + dx, self.y + dy) for dx, dy in rotations[self.t][self.state]]

    def moved(self, dx: int, dy: int) -> "Piece":
        return replace(self, x=self.x + dx, y=self.y + dy)


def spawn_piece(t: str, rotations: RotationTable, cols: int, top: int = 0) -> Piece:
    """State 0, centred, top occupied row on row `top`."""
    offs = rotations[t][0]
    w = max(x for x, _ in offs) + 1
    empty = min(y for _, y in offs)
    return Piece(t, 0, (cols - w) // 2, top - empty)


def try_rotate(board: Board, piece: Piece, rotations: RotationTable,
               kicks: KickTable, cw: bool = True) -> Optional[Piece]:
    old = piece.state
    new = (old + (1 if cw else -1)) % 4
    for dx, dy in kicks.get(piece.t, {}).get((old, new), [(0, 0)]):
        test = Piece(piece.t, new, piece.x + dx, piece.y - dy)
        if not collide(board, test.cells(rotations)):
            return test
    return None


def is_t_spin(board: Board, piece: Piece) -> bool:
    """3 of the 4 cells diagonal to the T centre are blocked."""
    if piece.t != "T":
        return False
    cx, cy = piece.x + 1, piece.y + 1
    corners = [(cx - 1, cy - 1), (cx + 1, cy - 1), (cx - 1, cy + 1), (cx + 1, cy + 1)]
    return sum(board.is_occupied(x, y) for x, y in corners) >= 3
