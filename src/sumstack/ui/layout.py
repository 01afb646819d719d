from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from sumstack.components.game_state import RoundPhase
from sumstack.constants import (
    BOARD_MAX_HEIGHT_PCT,
    BOARD_MAX_WIDTH_PCT,
    BOTTOM_MARGIN,
    GRID_COLS,
    GRID_ROWS,
    HEADER_HEIGHT,
)


def compute_board_geometry(window_width: int, window_height: int, rows: int = GRID_ROWS, cols: int = GRID_COLS):
    """Return (tile_size, start_x, start_y) for the board's lower-left corner.

    Shared by rendering and input so clicks land on the cell that was drawn.
    """
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - HEADER_HEIGHT - BOTTOM_MARGIN) * BOARD_MAX_HEIGHT_PCT
    tile_size = int(min(max_board_w / cols, max_board_h / rows))
    if tile_size < 20:
        tile_size = 20
    start_x = (window_width - cols * tile_size) / 2
    start_y = BOTTOM_MARGIN
    return tile_size, start_x, start_y


def cell_origin(row: int, col: int, window_width: int, window_height: int,
                rows: int = GRID_ROWS, cols: int = GRID_COLS) -> Tuple[float, float, int]:
    """Lower-left pixel of a cell plus tile size. Row 0 is drawn at the top."""
    tile_size, start_x, start_y = compute_board_geometry(window_width, window_height, rows, cols)
    return start_x + col * tile_size, start_y + (rows - 1 - row) * tile_size, tile_size


def cell_at_point(x: float, y: float, window_width: int, window_height: int,
                  rows: int = GRID_ROWS, cols: int = GRID_COLS) -> Tuple[int, int] | None:
    tile_size, start_x, start_y = compute_board_geometry(window_width, window_height, rows, cols)
    col = int((x - start_x) // tile_size)
    row_from_bottom = int((y - start_y) // tile_size)
    if not (0 <= col < cols and 0 <= row_from_bottom < rows):
        return None
    return rows - 1 - row_from_bottom, col


@dataclass(frozen=True, slots=True)
class OverlayButton:
    label: str
    action: str
    x: float
    y: float
    width: float = 220.0
    height: float = 56.0

    def contains(self, px: float, py: float) -> bool:
        half_w = self.width / 2
        half_h = self.height / 2
        return self.x - half_w <= px <= self.x + half_w and self.y - half_h <= py <= self.y + half_h


def overlay_buttons(phase: RoundPhase, window_width: int, window_height: int) -> List[OverlayButton]:
    """Buttons shown over the board for the pause and game-over screens."""
    cx = window_width / 2
    cy = window_height / 2
    if phase == RoundPhase.PAUSED:
        return [OverlayButton("Resume", "resume", cx, cy - 40)]
    if phase == RoundPhase.GAME_OVER:
        return [
            OverlayButton("Try again", "reset", cx, cy - 40),
            OverlayButton("Menu", "menu", cx, cy - 110),
        ]
    return []
