"""Tunables, scoring tables and the validated GameConfig the core consumes"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Optional, Tuple

from blocks_piece import KINDS, KickTable, RotationTable, build_kick_table, build_rotation_table

CONFIG = {
    # Front end
    "CELL_SIZE": 32,
    "DAS_MS": 170,
    "ARR_MS": 30,
    "SOFT_DROP_MULT": 1.0,
    # Board
    "BOARD_WIDTH": 10,
    "BOARD_HEIGHT": 20,
    "BUFFER_ROWS": 2,
    "PREVIEW_COUNT": 3,
    # Progression
    "STARTING_LEVEL": 1,
    "LINES_PER_LEVEL": 10,
    "MAX_LEVEL": 30,
    "LOCK_DELAY_MS": 0,       # 0 => lock on the first failed gravity step
    "SEED": None,             # int for a reproducible piece sequence
}

LINE_SCORES = {1: 100, 2: 300, 3: 500, 4: 800}
TSPIN_SCORES = {1: 800, 2: 1200, 3: 1600}
COMBO_MULTIPLIER = 0.5
BACK_TO_BACK_MULTIPLIER = 1.5
PERFECT_CLEAR_BONUS = 3000
SOFT_DROP_POINTS = 1
HARD_DROP_POINTS = 2

# ms between gravity steps, indexed by level - 1; the last entry holds past the end
GRAVITY_CURVE_MS = (800, 730, 660, 590, 520, 450, 380, 310, 240,
                    200, 190, 180, 170, 160, 150, 140, 130, 120, 110, 100)
MIN_GRAVITY_MS = 100

# CONFIG key -> GameConfig field, for the keys the core consumes
CORE_KEYS = {
    "BOARD_WIDTH": "width",
    "BOARD_HEIGHT": "height",
    "BUFFER_ROWS": "buffer_rows",
    "PREVIEW_COUNT": "preview_count",
    "STARTING_LEVEL": "starting_level",
    "LINES_PER_LEVEL": "lines_per_level",
    "MAX_LEVEL": "max_level",
    "LOCK_DELAY_MS": "lock_delay_ms",
    "SEED": "seed",
}


class ConfigError(ValueError):
    """Raised when the game cannot run on the supplied configuration."""


# compared and hashed by identity; table fields are read-only after __post_init__
@dataclass(frozen=True, eq=False)
class GameConfig:
    width: int = 10
    height: int = 20
    buffer_rows: int = 2
    preview_count: int = 3
    starting_level: int = 1
    lines_per_level: int = 10
    max_level: int = 30
    lock_delay_ms: float = 0
    seed: Optional[int] = None
    line_scores: Dict[int, int] = field(default_factory=lambda: dict(LINE_SCORES))
    tspin_scores: Dict[int, int] = field(default_factory=lambda: dict(TSPIN_SCORES))
    combo_multiplier: float = COMBO_MULTIPLIER
    back_to_back_multiplier: float = BACK_TO_BACK_MULTIPLIER
    perfect_clear_bonus: int = PERFECT_CLEAR_BONUS
    soft_drop_points: int = SOFT_DROP_POINTS
    hard_drop_points: int = HARD_DROP_POINTS
    gravity_curve_ms: Tuple[int, ...] = GRAVITY_CURVE_MS
    min_gravity_ms: int = MIN_GRAVITY_MS
    rotations: RotationTable = field(default_factory=build_rotation_table)
    kicks: KickTable = field(default_factory=build_kick_table)

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f"board must be at least 1x1, got {self.width}x{self.height}")
        if self.buffer_rows < 0:
            raise ConfigError(f"buffer_rows must be >= 0, got {self.buffer_rows}")
        if self.preview_count < 0:
            raise ConfigError(f"preview_count must be >= 0, got {self.preview_count}")
        if self.starting_level < 1 or self.max_level < self.starting_level:
            raise ConfigError(
                f"need 1 <= starting_level <= max_level, got {self.starting_level}..{self.max_level}")
        if self.lines_per_level <= 0:
            raise ConfigError(f"lines_per_level must be positive, got {self.lines_per_level}")
        if self.lock_delay_ms < 0:
            raise ConfigError(f"lock_delay_ms must be >= 0, got {self.lock_delay_ms}")
        missing = [n for n in (1, 2, 3, 4) if n not in self.line_scores]
        if missing:
            raise ConfigError(f"line_scores has no entry for {missing} lines")
        object.__setattr__(self, "line_scores", MappingProxyType(dict(self.line_scores)))
        object.__setattr__(self, "tspin_scores", MappingProxyType(dict(self.tspin_scores)))
        object.__setattr__(self, "gravity_curve_ms", tuple(self.gravity_curve_ms))
        self._check_gravity()
        self._check_rotations()
        self._check_kicks()

    def _check_gravity(self):
        curve = self.gravity_curve_ms
        if not curve:
            raise ConfigError("gravity_curve_ms is empty")
        if self.min_gravity_ms <= 0 or any(ms <= 0 for ms in curve):
            raise ConfigError("gravity intervals must be positive")
        if any(b > a for a, b in zip(curve, curve[1:])):
            raise ConfigError("gravity_curve_ms must not get slower as the level rises")

    def _check_rotations(self):
        missing = set(KINDS) - set(self.rotations)
        if missing:
            raise ConfigError(f"rotation table is missing kinds {sorted(missing)}")
        table = {}
        for t in KINDS:
            states = self.rotations[t]
            if len(states) != 4:
                raise ConfigError(f"{t} needs 4 rotation states, got {len(states)}")
            states = tuple(_offsets(offs, f"{t} state {i}") for i, offs in enumerate(states))
            for i, offs in enumerate(states):
                if len(offs) != 4 or len(set(offs)) != 4:
                    raise ConfigError(f"{t} state {i} must list 4 distinct cells, got {offs}")
            w = max(x for x, _ in states[0]) + 1
            if w > self.width:
                raise ConfigError(f"{t} is {w} wide, board is only {self.width}")
            h = max(y for _, y in states[0]) - min(y for _, y in states[0]) + 1
            if h > self.height:
                raise ConfigError(f"{t} spawns {h} rows tall, board has only {self.height} visible rows")
            table[t] = states
        object.__setattr__(self, "rotations", MappingProxyType(table))

    def _check_kicks(self):
        kicks = {}
        for t, table in self.kicks.items():
            if t not in KINDS:
                raise ConfigError(f"kick table for unknown kind {t!r}")
            checked = {}
            for key, offsets in table.items():
                pair = _offsets([key], f"{t} kick key")[0]
                if pair[0] not in range(4) or pair[1] not in range(4):
                    raise ConfigError(f"{t} kick key {key} is not a rotation pair")
                if not offsets:
                    raise ConfigError(f"{t} kick list {key} is empty")
                checked[pair] = _offsets(offsets, f"{t} kick list {key}")
            kicks[t] = MappingProxyType(checked)
        object.__setattr__(self, "kicks", MappingProxyType(kicks))


def _offsets(seq, what: str) -> Tuple[Tuple[int, int], ...]:
    """(x, y) integer pairs from any sequence of pairs, e.g. lists out of a JSON file."""
    if not isinstance(seq, (tuple, list)):
        raise ConfigError(f"{what}: expected a list of (x, y) pairs, got {seq!r}")
    out = []
    for item in seq:
        if (not isinstance(item, (tuple, list)) or len(item) != 2
                or not all(isinstance(v, int) and not isinstance(v, bool) for v in item)):
            raise ConfigError(f"{what}: {item!r} is not an (x, y) pair of ints")
        out.append((item[0], item[1]))
    return tuple(out)


def load_config(overrides: Optional[dict] = None, **fields) -> GameConfig:
    """Build a GameConfig from CONFIG plus upper-case overrides and field keywords."""
    values = dict(CONFIG)
    for key, v in (overrides or {}).items():
        if key not in values:
            raise ConfigError(f"unknown config key {key!r}")
        values[key] = v
    kwargs = {name: values[key] for key, name in CORE_KEYS.items()}
    kwargs.update(fields)
    try:
        return GameConfig(**kwargs)
    except TypeError as e:
        raise ConfigError(str(e)) from e
