"""DAS/ARR controller and key bindings"""
import pygame
from blocks_config import CONFIG
from blocks_game import Intent

KEY_INTENTS = {
    pygame.K_UP: Intent.ROTATE_CW,
    pygame.K_x: Intent.ROTATE_CW,
    pygame.K_z: Intent.ROTATE_CCW,
    pygame.K_SPACE: Intent.HARD_DROP,
    pygame.K_p: Intent.PAUSE,
    pygame.K_r: Intent.RESTART,
}

class ShiftRepeat:
    def __init__(self, das_ms=None, arr_ms=None):
        self.das = CONFIG["DAS_MS"] if das_ms is None else das_ms
        self.arr = CONFIG["ARR_MS"] if arr_ms is None else arr_ms
        self.dir=0; self.held_ms=0; self.last=0; self.initial=False
    def update(self, dt, left, right):
        nd=(-1 if left else 0)+(1 if right else 0)
        if nd!=self.dir:
            self.dir=nd; self.held_ms=0; self.last=0; self.initial=False
        if self.dir==0: return 0
        self.held_ms+=dt
        if not self.initial:
            self.initial=True; return self.dir
        if self.held_ms < self.das: return 0
        if self.arr==0: return self.dir
        self.last+=dt
        if self.last>=self.arr:
            self.last=0; return self.dir
        return 0
    def intent(self, dt, left, right):
        step = self.update(dt, left, right)
        if step < 0: return Intent.MOVE_LEFT
        if step > 0: return Intent.MOVE_RIGHT
        return None
