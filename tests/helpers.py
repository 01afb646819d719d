from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from esper import World

from sumstack.components.board_position import BoardPosition
from sumstack.components.tile import Tile
from sumstack.config import RoundConfig
from sumstack.events.bus import EVENT_TICK, EventBus
from sumstack.systems.animation import AnimationSystem
from sumstack.systems.board import BoardSystem
from sumstack.systems.board_ops import board_dimensions, remove_all_tiles, tile_entities
from sumstack.systems.match import MatchSystem
from sumstack.systems.round_system import RoundSystem
from sumstack.world import create_world


class DummyWindow:
    def __init__(self, width=480, height=800):
        self.width = width
        self.height = height


@dataclass
class RoundHarness:
    bus: EventBus
    world: World
    board: BoardSystem
    matcher: MatchSystem
    animation: AnimationSystem
    rounds: RoundSystem


def build_round(config: RoundConfig | None = None, *, seed: int = 7, high_score: int = 0) -> RoundHarness:
    """Wire the core systems the way the window does, minus rendering."""
    bus = EventBus()
    world = create_world(
        bus,
        config=config or RoundConfig(clear_delay_ms=0),
        high_score=high_score,
        rng=random.Random(seed),
    )
    board = BoardSystem(world, bus)
    matcher = MatchSystem(world, bus)
    animation = AnimationSystem(world, bus)
    rounds = RoundSystem(world, bus, board_system=board, match_system=matcher)
    return RoundHarness(bus, world, board, matcher, animation, rounds)


def load_grid(world: World, layout: Sequence[Sequence[Optional[Tile]]]) -> None:
    """Replace the board contents with an explicit layout (row 0 first)."""
    rows, cols = board_dimensions(world)
    if len(layout) != rows or any(len(row) != cols for row in layout):
        raise ValueError(f"Layout must be {rows}x{cols}")
    remove_all_tiles(world)
    for r, row_cells in enumerate(layout):
        for c, tile in enumerate(row_cells):
            if tile is not None:
                world.create_entity(tile, BoardPosition(row=r, col=c))


def find_tile_position(world: World, tile_id: str) -> Optional[tuple]:
    for _, tile, position in tile_entities(world):
        if tile.id == tile_id:
            return position.row, position.col
    return None


def place_tiles(world: World, rows: int, cols: int, tiles: Dict[tuple, Tile]) -> None:
    """Replace the board with ``tiles`` keyed by (row, col); everything else empty."""
    layout: List[List[Optional[Tile]]] = [[None] * cols for _ in range(rows)]
    for (row, col), tile in tiles.items():
        layout[row][col] = tile
    load_grid(world, layout)


def bottom_row(world: World, values: Sequence[int], rows: int = 10, cols: int = 6, prefix: str = "t") -> List[str]:
    """Load ``values`` into the bottom row from column 0; returns the ids used."""
    ids = [f"{prefix}{col}" for col in range(len(values))]
    place_tiles(world, rows, cols, {(rows - 1, col): Tile(ids[col], value) for col, value in enumerate(values)})
    return ids


def drive_ticks(bus: EventBus, count: int, dt_ms: int = 100) -> None:
    for _ in range(count):
        bus.emit(EVENT_TICK, dt_ms=dt_ms)


def record(bus: EventBus, name: str) -> List[dict]:
    """Collect every payload emitted under ``name``."""
    received: List[dict] = []
    bus.subscribe(name, lambda sender, **payload: received.append(payload))
    return received
