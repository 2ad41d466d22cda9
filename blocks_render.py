"""
Rendering helpers for the falling-blocks front end.

- Pre-render block cell Surfaces per kind (normal + ghost outline) and blit them.
- Pre-render the static background (grid + panel frame) once per Dims.
- Cache HUD text surfaces; re-render only when values change.
- Cache a BOARD SURFACE with all *locked* blocks; rebuild it only when the
  snapshot's lock count changes.
"""
from __future__ import annotations
import pygame
from dataclasses import dataclass, field
from typing import Dict, Tuple, Optional
from blocks_layout import CONTROLS_LINE, HUD_LINE, Dims
from blocks_piece import SHAPES
from blocks_game import Phase, Snapshot

COLORS: Dict[str, Tuple[int,int,int]] = {
    "I": (102,224,255),
    "J": (106,119,255),
    "L": (255,158,94),
    "O": (255,224,102),
    "S": (94,224,142),
    "T": (200,119,255),
    "Z": (255,102,119),
}
TEXT = (200,210,240)
DIM_TEXT = (165,175,215)

@dataclass
class HudCache:
    values: Dict[str, object] = field(default_factory=dict)
    surfaces: Dict[str, pygame.Surface] = field(default_factory=dict)
    previews: Dict[str, pygame.Surface] = field(default_factory=dict)
    controls: Optional[list] = None

def clear_banner(snap: Snapshot) -> str:
    """Text describing the most recent clear, or '' when it cleared nothing."""
    ev = snap.last_clear
    if ev is None or not ev.lines:
        return ""
    names = {1: "SINGLE", 2: "DOUBLE", 3: "TRIPLE", 4: "TETRIS"}
    parts = []
    if snap.back_to_back: parts.append("B2B")
    parts.append(("T-SPIN " if ev.is_t_spin else "") + names.get(ev.lines, f"{ev.lines} LINES"))
    if snap.combo > 0: parts.append(f"COMBO x{snap.combo}")
    if ev.is_perfect_clear: parts.append("PERFECT CLEAR")
    return "  ".join(parts)

class RenderAssets:
    """Holds all pre-rendered assets for fast blitting."""
    def __init__(self, dims: Dims, font: pygame.font.Font, big_font: pygame.font.Font):
        self.dims = dims
        self.font = font
        self.big_font = big_font
        self._make_static()
        self._make_cells()
        self.hud = HudCache()
        self.board_surface = pygame.Surface((dims.board_w, dims.board_h), pygame.SRCALPHA)
        self._board_pieces = -1

    # ---------- Static background (grid + panel) ----------
    def _make_static(self):
        d = self.dims
        self.bg = pygame.Surface((d.total_w, d.total_h))
        self.bg.fill((10,13,34))
        grid_col = (40,50,90)
        for x in range(d.cols+1):
            X = d.board_x + x*d.cell
            pygame.draw.line(self.bg, grid_col, (X, d.board_y), (X, d.board_y + d.board_h))
        for y in range(d.rows+1):
            Y = d.board_y + y*d.cell
            pygame.draw.line(self.bg, grid_col, (d.board_x, Y), (d.board_x + d.board_w, Y))
        panel_rect = pygame.Rect(d.panel_x, d.panel_y, d.panel_w, d.board_h)
        pygame.draw.rect(self.bg, (21,25,53), panel_rect)
        pygame.draw.rect(self.bg, (50,60,100), panel_rect, 1)

    # ---------- Small cell sprites (solid + ghost outline) ----------
    def _make_cells(self):
        self.cell_surf: Dict[str, pygame.Surface] = {}
        self.ghost_surf: Dict[str, pygame.Surface] = {}
        c = self.dims.cell
        for t, col in COLORS.items():
            s = pygame.Surface((c-2, c-2))
            s.fill(col)
            self.cell_surf[t] = s
            g = pygame.Surface((c-8, c-8), pygame.SRCALPHA)
            pygame.draw.rect(g, col, (0,0,c-8,c-8), 2)
            self.ghost_surf[t] = g

    # ---------- Board surface cache ----------
    def rebuild_board_surface(self, snap: Snapshot):
        """Rebuilds the "locked blocks" surface from the visible board rows."""
        self.board_surface.fill((0,0,0,0))
        c = self.dims.cell
        for y, row in enumerate(snap.board[snap.hidden_rows:]):
            for x, t in enumerate(row):
                if t:
                    self.board_surface.blit(self.cell_surf[t], (x*c + 1, y*c + 1))
        self._board_pieces = snap.pieces

    # ---------- Per-cell helpers for moving/ghost piece ----------
    def draw_cell(self, screen: pygame.Surface, t: str, bx: int, by: int):
        screen.blit(self.cell_surf[t], self.dims.cell_origin(bx, by))

    def draw_ghost_cell(self, screen: pygame.Surface, t: str, bx: int, by: int):
        screen.blit(self.ghost_surf[t], self.dims.cell_origin(bx, by, inset=4))

    # ---------- HUD / Panel ----------
    def _text(self, key: str, value, label: str) -> pygame.Surface:
        if self.hud.values.get(key) != value or key not in self.hud.surfaces:
            self.hud.values[key] = value
            self.hud.surfaces[key] = self.font.render(label, True, TEXT)
        return self.hud.surfaces[key]

    def _preview(self, t: str) -> pygame.Surface:
        if t not in self.hud.previews:
            c = self.dims.preview_cell
            s = pygame.Surface((c*4, c*2), pygame.SRCALPHA)
            shape = [r for r in SHAPES[t] if any(r)]
            offx = (4 - len(shape[0])) // 2
            for y, row in enumerate(shape):
                for x, v in enumerate(row):
                    if v:
                        block = pygame.Surface((c-2, c-2))
                        block.fill(COLORS[t])
                        s.blit(block, ((x + offx)*c + 1, y*c + 1))
            self.hud.previews[t] = s
        return self.hud.previews[t]

    def draw_panel_hud(self, screen: pygame.Surface, snap: Snapshot):
        d = self.dims
        x = d.text_x
        lines = [
            self._text("title", 0, "Falling Blocks"),
            self._text("score", snap.score, f"Score: {snap.score}"),
            self._text("level", snap.level, f"Level: {snap.level}"),
            self._text("lines", snap.lines, f"Lines: {snap.lines}"),
            self._text("combo", snap.combo, f"Combo: {max(snap.combo, 0)}"),
            self._text("b2b", snap.back_to_back, "Back-to-back" if snap.back_to_back else ""),
        ]
        y = d.panel_y + 12
        for s in lines:
            screen.blit(s, (x, y)); y += HUD_LINE
        screen.blit(self._text("next", 0, "Next:"), (x, d.next_label_y))
        y = d.preview_y
        for t in snap.next_pieces:
            screen.blit(self._preview(t), (x, y)); y += d.preview_cell*2 + 8
        if not self.hud.controls:
            self.hud.controls = [
                self.font.render("Controls:", True, TEXT),
                self.font.render("←/→ Move", True, DIM_TEXT),
                self.font.render("↓ Soft drop", True, DIM_TEXT),
                self.font.render("↑/X Rot CW", True, DIM_TEXT),
                self.font.render("Z Rot CCW", True, DIM_TEXT),
                self.font.render("Space Hard", True, DIM_TEXT),
                self.font.render("P Pause • R Restart", True, DIM_TEXT),
                self.font.render("Esc Quit", True, DIM_TEXT),
            ]
        y = d.controls_y(len(self.hud.controls))
        for surf in self.hud.controls:
            screen.blit(surf, (x, y)); y += CONTROLS_LINE

    def _center_text(self, screen: pygame.Surface, text: str, dy: int, color):
        d = self.dims
        msg = self.big_font.render(text, True, color)
        screen.blit(msg, msg.get_rect(center=(d.board_x + d.board_w // 2, d.board_y + d.board_h // 2 + dy)))

    # ---------- Whole frame ----------
    def draw(self, screen: pygame.Surface, snap: Snapshot):
        if snap.pieces != self._board_pieces:
            self.rebuild_board_surface(snap)
        screen.blit(self.bg, (0,0))
        screen.blit(self.board_surface, (self.dims.board_x, self.dims.board_y))
        top = snap.hidden_rows
        if snap.piece:
            for bx, by in snap.ghost_cells:
                if by >= top: self.draw_ghost_cell(screen, snap.piece, bx, by - top)
            for bx, by in snap.piece_cells:
                if by >= top: self.draw_cell(screen, snap.piece, bx, by - top)
        self.draw_panel_hud(screen, snap)
        banner = clear_banner(snap)
        if banner:
            s = self._text("banner", banner, banner)
            screen.blit(s, (self.dims.board_x + 4, self.dims.board_y + 4))
        if snap.phase is Phase.GAME_OVER:
            self._center_text(screen, "GAME OVER (R to Restart)", 0, (255,220,220))
        elif snap.paused:
            self._center_text(screen, "PAUSED (P to Resume)", -40, (220,240,255))
