from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set, Tuple

from esper import World

from sumstack.components.board import Board
from sumstack.components.board_position import BoardPosition
from sumstack.components.tile import Tile
from sumstack.factories.tiles import TileFactory

Position = Tuple[int, int]
GridSnapshot = List[List[Optional[Tile]]]


@dataclass(slots=True)
class GravityMove:
    tile_id: str
    source: Position
    target: Position


def board_dimensions(world: World) -> Tuple[int, int] | None:
    for _, board in world.get_component(Board):
        return board.rows, board.cols
    return None


def _require_dimensions(world: World) -> Tuple[int, int]:
    dims = board_dimensions(world)
    if dims is None:
        raise RuntimeError("Board component not found")
    return dims


def tile_entities(world: World) -> List[Tuple[int, Tile, BoardPosition]]:
    return [(entity, tile, position) for entity, (tile, position) in world.get_components(Tile, BoardPosition)]


def get_tile_at(world: World, row: int, col: int) -> Tile | None:
    for _, tile, position in tile_entities(world):
        if position.row == row and position.col == col:
            return tile
    return None


def live_tile_ids(world: World) -> Set[str]:
    return {tile.id for _, tile, _ in tile_entities(world)}


def tile_values(world: World) -> Dict[str, int]:
    """Identity -> value lookup built from the live board."""
    return {tile.id: tile.value for _, tile, _ in tile_entities(world)}


def grid_snapshot(world: World) -> GridSnapshot:
    rows, cols = _require_dimensions(world)
    grid: GridSnapshot = [[None] * cols for _ in range(rows)]
    for _, tile, position in tile_entities(world):
        grid[position.row][position.col] = tile
    return grid


def spawn_tile(world: World, factory: TileFactory, row: int, col: int, live_ids: Set[str] | None = None) -> Position:
    ids = live_ids if live_ids is not None else live_tile_ids(world)
    tile = factory.create_tile(ids)
    ids.add(tile.id)
    world.create_entity(tile, BoardPosition(row=row, col=col))
    return row, col


def remove_all_tiles(world: World) -> None:
    for entity, _, _ in tile_entities(world):
        world.delete_entity(entity, immediate=True)


def initialize_grid(world: World, factory: TileFactory, initial_rows: int) -> List[Position]:
    """Empty the board and fill its bottom ``initial_rows`` rows with fresh tiles."""
    rows, cols = _require_dimensions(world)
    remove_all_tiles(world)
    live_ids: Set[str] = set()
    spawned: List[Position] = []
    for row in range(rows - initial_rows, rows):
        for col in range(cols):
            spawned.append(spawn_tile(world, factory, row, col, live_ids))
    return spawned


def is_top_row_occupied(world: World) -> bool:
    return any(position.row == 0 for _, _, position in tile_entities(world))


def inject_row(world: World, factory: TileFactory) -> List[Position] | None:
    """Shift every tile up one row and fill the bottom row with new tiles.

    Returns None without touching the board when row 0 is occupied.
    """
    rows, cols = _require_dimensions(world)
    if is_top_row_occupied(world):
        return None
    for _, _, position in tile_entities(world):
        position.row -= 1
    live_ids = live_tile_ids(world)
    return [spawn_tile(world, factory, rows - 1, col, live_ids) for col in range(cols)]


def clear_tiles(world: World, ids: Iterable[str]) -> List[Tile]:
    doomed = set(ids)
    if not doomed:
        return []
    removed: List[Tile] = []
    for entity, tile, _ in tile_entities(world):
        if tile.id in doomed:
            removed.append(tile)
            world.delete_entity(entity, immediate=True)
    return removed


def compute_gravity_moves(world: World) -> List[GravityMove]:
    rows, _ = _require_dimensions(world)
    columns: Dict[int, List[Tuple[int, str]]] = {}
    for _, tile, position in tile_entities(world):
        columns.setdefault(position.col, []).append((position.row, tile.id))
    moves: List[GravityMove] = []
    for col, entries in sorted(columns.items()):
        # Bottom-most tile lands on the last row, the next one above it, and so on.
        entries.sort(reverse=True)
        for offset, (row, tile_id) in enumerate(entries):
            target_row = rows - 1 - offset
            if row != target_row:
                moves.append(GravityMove(tile_id=tile_id, source=(row, col), target=(target_row, col)))
    return moves


def apply_gravity_moves(world: World, moves: List[GravityMove]) -> None:
    by_id = {move.tile_id: move for move in moves}
    for _, tile, position in tile_entities(world):
        move = by_id.get(tile.id)
        if move is None:
            continue
        position.row, position.col = move.target


def clear_and_compact(world: World, ids: Iterable[str]) -> Tuple[List[Tile], List[GravityMove]]:
    """Remove tiles by id, then let each column fall to the bottom without gaps."""
    removed = clear_tiles(world, ids)
    moves = compute_gravity_moves(world)
    if moves:
        apply_gravity_moves(world, moves)
    return removed, moves
