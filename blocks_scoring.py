"""Score, combo, back-to-back and level progression"""
import logging
from dataclasses import dataclass

from blocks_board import ClearEvent
from blocks_config import GameConfig

log = logging.getLogger(__name__)


def gravity_interval_ms(level: int, cfg: GameConfig) -> int:
    """Milliseconds between gravity steps at `level`."""
    curve = cfg.gravity_curve_ms
    i = min(max(level - 1, 0), len(curve) - 1)
    return max(cfg.min_gravity_ms, curve[i])


def combo_factor(combo: int, cfg: GameConfig) -> float:
    return 1 + max(combo, 0) * cfg.combo_multiplier


def base_score(lines: int, t_spin: bool, cfg: GameConfig) -> int:
    if t_spin and lines in cfg.tspin_scores:
        return cfg.tspin_scores[lines]
    return cfg.line_scores[min(lines, 4)]


@dataclass
class Progress:
    """
    Scoring state machine fed one ClearEvent per lock.

    combo is -1 when no combo is running and counts consecutive clearing
    locks from 0. last_clear_was_difficult remembers whether the previous
    clear was a T-spin or a four-line clear; back_to_back is set when the
    current clear earned the back-to-back bonus.
    """
    score: int = 0
    level: int = 1
    lines: int = 0
    combo: int = -1
    back_to_back: bool = False
    last_clear_was_difficult: bool = False
    tetrises: int = 0
    t_spins: int = 0
    perfect_clears: int = 0

    @classmethod
    def start(cls, cfg: GameConfig) -> "Progress":
        return cls(level=cfg.starting_level)

    def add_drop(self, cells: int, hard: bool, cfg: GameConfig) -> int:
        pts = cells * (cfg.hard_drop_points if hard else cfg.soft_drop_points)
        self.score += pts
        return pts

    def on_clear(self, event: ClearEvent, cfg: GameConfig) -> int:
        """Apply a lock outcome; return the points it earned."""
        n = event.lines
        if n == 0:
            self.combo = -1
            return 0

        self.combo += 1
        difficult = event.is_t_spin or n >= 4
        points = base_score(n, event.is_t_spin, cfg) * self.level * combo_factor(self.combo, cfg)
        self.back_to_back = difficult and self.last_clear_was_difficult
        if self.back_to_back:
            points *= cfg.back_to_back_multiplier
        self.last_clear_was_difficult = difficult
        points = int(points)
        if event.is_perfect_clear:
            points += cfg.perfect_clear_bonus * self.level
            self.perfect_clears += 1
        if event.is_t_spin:
            self.t_spins += 1
        elif n >= 4:
            self.tetrises += 1

        self.score += points
        self.lines += n
        self._update_level(cfg)
        return points

    def _update_level(self, cfg: GameConfig):
        level = min(cfg.max_level, cfg.starting_level + self.lines // cfg.lines_per_level)
        if level != self.level:
            log.info("level %d -> %d at %d lines", self.level, level, self.lines)
            self.level = level
