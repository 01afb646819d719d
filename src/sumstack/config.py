"""Round configuration shared by the board, match and round systems."""
from __future__ import annotations

from dataclasses import dataclass

from sumstack.constants import (
    BIG_CLEAR_THRESHOLD,
    BLOCK_MAX,
    BLOCK_MIN,
    CLEAR_DELAY_MS,
    GRID_COLS,
    GRID_ROWS,
    INITIAL_ROWS,
    POINTS_PER_TILE,
    TARGET_MAX,
    TARGET_MIN,
    TIME_MODE_INTERVAL_MS,
)


@dataclass(frozen=True, slots=True)
class RoundConfig:
    """Tunable round parameters; defaults reproduce the standard game."""

    rows: int = GRID_ROWS
    cols: int = GRID_COLS
    initial_rows: int = INITIAL_ROWS
    block_min: int = BLOCK_MIN
    block_max: int = BLOCK_MAX
    target_min: int = TARGET_MIN
    target_max: int = TARGET_MAX
    time_interval_ms: int = TIME_MODE_INTERVAL_MS
    clear_delay_ms: int = CLEAR_DELAY_MS
    big_clear_threshold: int = BIG_CLEAR_THRESHOLD
    points_per_tile: int = POINTS_PER_TILE

    def __post_init__(self) -> None:
        if self.rows < 2 or self.cols < 1:
            raise ValueError(f"Board must have at least 2 rows and 1 column, got {self.rows}x{self.cols}")
        if not 0 <= self.initial_rows < self.rows:
            raise ValueError(f"initial_rows must be in [0, {self.rows - 1}], got {self.initial_rows}")
        if self.block_min > self.block_max:
            raise ValueError(f"Invalid block range [{self.block_min}, {self.block_max}]")
        if self.target_min > self.target_max:
            raise ValueError(f"Invalid target range [{self.target_min}, {self.target_max}]")
        if self.time_interval_ms <= 0:
            raise ValueError("time_interval_ms must be positive")
        if self.clear_delay_ms < 0:
            raise ValueError("clear_delay_ms cannot be negative")
