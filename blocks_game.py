"""
Game state and driver: intents, movement, gravity, lock, spawn, restart.

Everything runs synchronously inside `apply_intent` and `tick`. The caller
owns the clock: it queues intents as input arrives and calls `tick` once a
frame with the elapsed milliseconds. Queued intents are applied in arrival
order before gravity, so input wins within a frame.
"""
from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Tuple

from blocks_bag import SevenBag
from blocks_board import Board, Cell, ClearEvent, collide, drop_distance
from blocks_config import GameConfig, load_config
from blocks_piece import Piece, is_t_spin, spawn_piece, try_rotate
from blocks_scoring import Progress, gravity_interval_ms

log = logging.getLogger(__name__)


class Intent(Enum):
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    SOFT_DROP = "soft_drop"
    ROTATE_CW = "rotate_cw"
    ROTATE_CCW = "rotate_ccw"
    HARD_DROP = "hard_drop"
    PAUSE = "pause"
    RESTART = "restart"


class Phase(Enum):
    PLAYING = "playing"
    GAME_OVER = "game_over"


@dataclass
class GameState:
    board: Board
    bag: SevenBag
    progress: Progress
    active: Optional[Piece] = None
    phase: Phase = Phase.PLAYING
    paused: bool = False
    last_clear: Optional[ClearEvent] = None
    pieces: int = 0
    rotated_last: bool = False   # last successful action was a rotation
    gravity_ms: float = 0.0
    grounded_ms: float = 0.0


@dataclass(frozen=True)
class Snapshot:
    """Read-only view handed to the renderer."""
    width: int
    height: int
    hidden_rows: int
    board: Tuple[Tuple[Cell, ...], ...]
    piece: Optional[str]
    piece_cells: Tuple[Tuple[int, int], ...]
    ghost_cells: Tuple[Tuple[int, int], ...]
    next_pieces: Tuple[str, ...]
    score: int
    level: int
    lines: int
    combo: int
    back_to_back: bool
    phase: Phase
    paused: bool
    last_clear: Optional[ClearEvent]
    pieces: int
    gravity_ms: int
    stats: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))


class Game:
    """Movement resolver and loop driver over one GameState."""

    def __init__(self, config: Optional[GameConfig] = None,
                 rng_factory: Optional[Callable[[], random.Random]] = None):
        self.config = config if config is not None else load_config()
        self.rng_factory = rng_factory or (lambda: random.Random(self.config.seed))
        self.pending = deque()
        self.state = self._new_state()
        self.spawn()

    def _new_state(self) -> GameState:
        cfg = self.config
        return GameState(
            board=Board(cfg.width, cfg.height, cfg.buffer_rows),
            bag=SevenBag(self.rng_factory()),
            progress=Progress.start(cfg),
        )

    # ---------- Intents & clock ----------
    def queue_intent(self, intent: Intent):
        self.pending.append(intent)

    def apply_intent(self, intent: Intent):
        if intent is Intent.RESTART:
            # intents queued behind a RESTART belong to the new game
            self._reset()
            return
        st = self.state
        if intent is Intent.PAUSE:
            if st.phase is Phase.PLAYING:
                st.paused = not st.paused
            return
        if not self._ready():
            return
        if intent is Intent.MOVE_LEFT:
            self.try_move(-1, 0)
        elif intent is Intent.MOVE_RIGHT:
            self.try_move(1, 0)
        elif intent is Intent.SOFT_DROP:
            self.soft_drop()
        elif intent is Intent.ROTATE_CW:
            self.rotate(cw=True)
        elif intent is Intent.ROTATE_CCW:
            self.rotate(cw=False)
        elif intent is Intent.HARD_DROP:
            if self.hard_drop():
                self.spawn()

    def tick(self, elapsed_ms: float):
        """Drain queued intents, then advance gravity by `elapsed_ms`."""
        while self.pending:
            self.apply_intent(self.pending.popleft())
        if not self._ready():
            return
        st = self.state
        lock_delay = self.config.lock_delay_ms
        interval = self.gravity_interval_ms()
        st.gravity_ms += elapsed_ms
        while st.gravity_ms >= interval:
            st.gravity_ms -= interval
            if not self.try_move(0, 1):
                st.gravity_ms = 0.0
                if lock_delay <= 0:
                    self._lock_and_spawn()
                    return
                break
        if lock_delay > 0 and self._grounded():
            st.grounded_ms += elapsed_ms
            if st.grounded_ms >= lock_delay:
                self._lock_and_spawn()
        else:
            st.grounded_ms = 0.0

    def restart(self):
        """Start over, dropping any intents still queued for the old game."""
        self.pending.clear()
        self._reset()

    def _reset(self):
        log.info("restart (previous score %d)", self.state.progress.score)
        self.state = self._new_state()
        self.spawn()

    def gravity_interval_ms(self) -> int:
        return gravity_interval_ms(self.state.progress.level, self.config)

    def _ready(self) -> bool:
        st = self.state
        if st.phase is not Phase.PLAYING or st.paused:
            return False
        return st.active is not None or self.spawn()

    def _grounded(self) -> bool:
        p = self.state.active
        rot = self.config.rotations
        return p is not None and collide(self.state.board, p.moved(0, 1).cells(rot))

    # ---------- Movement ----------
    def try_move(self, dx: int, dy: int) -> bool:
        st = self.state
        p = st.active
        if p is None or st.phase is not Phase.PLAYING:
            return False
        test = p.moved(dx, dy)
        if collide(st.board, test.cells(self.config.rotations)):
            return False
        st.active = test
        st.rotated_last = False
        st.grounded_ms = 0.0
        return True

    def soft_drop(self) -> bool:
        if not self.try_move(0, 1):
            return False
        self.state.progress.add_drop(1, False, self.config)
        self.state.gravity_ms = 0.0
        return True

    def rotate(self, cw: bool = True) -> bool:
        st = self.state
        if st.active is None or st.phase is not Phase.PLAYING:
            return False
        cfg = self.config
        test = try_rotate(st.board, st.active, cfg.rotations, cfg.kicks, cw)
        if test is None:
            return False
        st.active = test
        st.rotated_last = True
        st.grounded_ms = 0.0
        return True

    def hard_drop(self) -> bool:
        """Drop and lock; False when there is nothing to drop."""
        st = self.state
        p = st.active
        if p is None or st.phase is not Phase.PLAYING:
            return False
        d = drop_distance(st.board, p.cells(self.config.rotations))
        if d:
            st.active = p.moved(0, d)
            st.rotated_last = False
            st.progress.add_drop(d, True, self.config)
        self.lock()
        return True

    # ---------- Lock & spawn ----------
    def lock(self) -> Optional[ClearEvent]:
        st = self.state
        p = st.active
        if p is None:
            return None
        cfg = self.config
        t_spin = st.rotated_last and is_t_spin(st.board, p)
        event = st.board.commit(p.cells(cfg.rotations), p.t)
        event = replace(event, is_t_spin=t_spin)
        points = st.progress.on_clear(event, cfg)
        log.debug("lock %s state %d at (%d, %d): rows=%s t_spin=%s perfect=%s +%d",
                  p.t, p.state, p.x, p.y, event.rows, event.is_t_spin,
                  event.is_perfect_clear, points)
        st.active = None
        st.last_clear = event
        st.pieces += 1
        st.rotated_last = False
        st.gravity_ms = 0.0
        st.grounded_ms = 0.0
        return event

    def spawn(self) -> bool:
        st = self.state
        if st.phase is not Phase.PLAYING:
            return False
        if st.active is not None:
            return True
        cfg = self.config
        p = spawn_piece(st.bag.next_piece(), cfg.rotations, cfg.width, st.board.hidden)
        if collide(st.board, p.cells(cfg.rotations)):
            st.phase = Phase.GAME_OVER
            log.info("game over: %s blocked at spawn, score %d after %d pieces",
                     p.t, st.progress.score, st.pieces)
            return False
        st.active = p
        st.rotated_last = False
        return True

    def _lock_and_spawn(self):
        self.lock()
        self.spawn()

    # ---------- Read-only view ----------
    def snapshot(self) -> Snapshot:
        st = self.state
        cfg = self.config
        pr = st.progress
        cells = ghost = ()
        if st.active is not None:
            cells = tuple(st.active.cells(cfg.rotations))
            d = drop_distance(st.board, cells)
            ghost = tuple((x, y + d) for x, y in cells)
        return Snapshot(
            width=st.board.width,
            height=st.board.height,
            hidden_rows=st.board.hidden,
            board=st.board.rows(),
            piece=st.active.t if st.active is not None else None,
            piece_cells=cells,
            ghost_cells=ghost,
            next_pieces=tuple(st.bag.peek(cfg.preview_count)),
            score=pr.score,
            level=pr.level,
            lines=pr.lines,
            combo=pr.combo,
            back_to_back=pr.back_to_back,
            phase=st.phase,
            paused=st.paused,
            last_clear=st.last_clear,
            pieces=st.pieces,
            gravity_ms=self.gravity_interval_ms(),
            stats=MappingProxyType({"tetrises": pr.tetrises, "t_spins": pr.t_spins,
                                    "perfect_clears": pr.perfect_clears}),
        )
