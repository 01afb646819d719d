import logging
from typing import List, Optional, Tuple

from esper import World

from sumstack.components.board import Board
from sumstack.components.tile import Tile
from sumstack.constants import GRID_COLS, GRID_ROWS
from sumstack.events.bus import (
    EVENT_BOARD_CHANGED,
    EVENT_GRAVITY_APPLIED,
    EVENT_ROW_INJECTED,
    EVENT_ROW_INJECTION_SUPPRESSED,
    EventBus,
)
from sumstack.factories.tiles import TileFactory
from sumstack.systems import board_ops
from sumstack.systems.board_ops import GravityMove, GridSnapshot, Position

logger = logging.getLogger(__name__)


class BoardSystem:
    """Owns the board entity and the tile factory; every grid mutation goes through here."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        rows: int | None = None,
        cols: int | None = None,
        *,
        factory: Optional[TileFactory] = None,
    ):
        self.world = world
        self.event_bus = event_bus
        config = getattr(world, "config", None)
        if rows is None:
            rows = config.rows if config is not None else GRID_ROWS
        if cols is None:
            cols = config.cols if config is not None else GRID_COLS
        if factory is None:
            rng = getattr(world, "random", None)
            if config is not None:
                factory = TileFactory(rng, value_min=config.block_min, value_max=config.block_max)
            else:
                factory = TileFactory(rng)
        self.factory = factory
        existing = list(self.world.get_component(Board))
        if existing:
            self.board_entity, board = existing[0]
            board.rows, board.cols = rows, cols
        else:
            self.board_entity = self.world.create_entity(Board(rows=rows, cols=cols))

    @property
    def dimensions(self) -> Tuple[int, int]:
        board: Board = self.world.component_for_entity(self.board_entity, Board)
        return board.rows, board.cols

    def fill_initial(self, initial_rows: int) -> List[Position]:
        spawned = board_ops.initialize_grid(self.world, self.factory, initial_rows)
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason="initialize", positions=spawned)
        return spawned

    def clear(self) -> None:
        board_ops.remove_all_tiles(self.world)
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason="clear", positions=[])

    def inject_row(self) -> List[Position] | None:
        spawned = board_ops.inject_row(self.world, self.factory)
        if spawned is None:
            logger.debug("Row injection suppressed: top row occupied")
            self.event_bus.emit(EVENT_ROW_INJECTION_SUPPRESSED)
            return None
        logger.debug("Injected row of %d tiles", len(spawned))
        self.event_bus.emit(EVENT_ROW_INJECTED, positions=spawned)
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason="inject", positions=spawned)
        return spawned

    def clear_and_compact(self, ids) -> Tuple[List[Tile], List[GravityMove]]:
        removed, moves = board_ops.clear_and_compact(self.world, ids)
        self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=moves)
        self.event_bus.emit(
            EVENT_BOARD_CHANGED,
            reason="match",
            positions=[move.target for move in moves],
        )
        return removed, moves

    def is_top_row_occupied(self) -> bool:
        return board_ops.is_top_row_occupied(self.world)

    def snapshot(self) -> GridSnapshot:
        return board_ops.grid_snapshot(self.world)
