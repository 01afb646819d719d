import random

import pytest
from esper import World

from sumstack.components.tile import Tile
from sumstack.config import RoundConfig
from sumstack.events.bus import (
    EVENT_BOARD_CHANGED,
    EVENT_ROW_INJECTED,
    EVENT_ROW_INJECTION_SUPPRESSED,
    EventBus,
)
from sumstack.systems.board import BoardSystem
from sumstack.systems.board_ops import (
    compute_gravity_moves,
    get_tile_at,
    grid_snapshot,
    live_tile_ids,
    tile_values,
)
from sumstack.world import create_world
from tests.helpers import find_tile_position, load_grid, place_tiles, record


def _board(seed=1):
    bus = EventBus()
    world = create_world(bus, rng=random.Random(seed))
    return bus, world, BoardSystem(world, bus)


def _assert_no_gaps(grid):
    for col in range(len(grid[0])):
        seen_tile = False
        for row in range(len(grid)):
            if grid[row][col] is not None:
                seen_tile = True
            else:
                assert not seen_tile, f"gap under a tile in column {col} at row {row}"


def test_fill_initial_populates_bottom_rows():
    bus, world, board = _board()
    board.fill_initial(3)
    grid = board.snapshot()
    assert board.dimensions == (10, 6)
    for row in range(7):
        assert all(cell is None for cell in grid[row])
    for row in range(7, 10):
        assert all(cell is not None for cell in grid[row])
        assert all(1 <= cell.value <= 9 for cell in grid[row])
    assert len(live_tile_ids(world)) == 18


def test_inject_row_shifts_everything_up_one():
    bus, world, board = _board()
    board.fill_initial(3)
    injected = record(bus, EVENT_ROW_INJECTED)
    before = board.snapshot()

    spawned = board.inject_row()

    after = board.snapshot()
    assert spawned == [(9, col) for col in range(6)]
    for row in range(9):
        assert after[row] == before[row + 1]
    old_ids = {tile.id for row in before for tile in row if tile is not None}
    new_ids = {tile.id for tile in after[9]}
    assert len(new_ids) == 6
    assert not new_ids & old_ids
    assert len(injected) == 1


def test_inject_row_suppressed_when_top_row_occupied():
    bus, world, board = _board()
    place_tiles(world, 10, 6, {(row, 2): Tile(f"c{row}", 1) for row in range(10)})
    suppressed = record(bus, EVENT_ROW_INJECTION_SUPPRESSED)
    changes = record(bus, EVENT_BOARD_CHANGED)
    before = board.snapshot()

    assert board.inject_row() is None

    assert board.snapshot() == before
    assert len(suppressed) == 1
    assert changes == []


def test_inject_row_suppressed_on_full_board():
    bus, world, board = _board()
    load_grid(world, [[Tile(f"r{r}c{c}", 5) for c in range(6)] for r in range(10)])
    before = board.snapshot()
    assert board.inject_row() is None
    assert board.snapshot() == before


def test_clear_and_compact_keeps_column_order():
    bus, world, board = _board()
    column = {(row, 0): Tile(name, 1) for row, name in zip(range(5, 10), "abcde")}
    column[(9, 1)] = Tile("z", 2)
    place_tiles(world, 10, 6, column)

    removed, moves = board.clear_and_compact({"b", "d"})

    assert sorted(tile.id for tile in removed) == ["b", "d"]
    assert find_tile_position(world, "a") == (7, 0)
    assert find_tile_position(world, "c") == (8, 0)
    assert find_tile_position(world, "e") == (9, 0)
    assert find_tile_position(world, "z") == (9, 1)
    assert {move.tile_id for move in moves} == {"a", "c"}
    _assert_no_gaps(board.snapshot())


def test_clear_with_no_ids_leaves_grid_unchanged():
    bus, world, board = _board()
    board.fill_initial(3)
    before = board.snapshot()
    removed, moves = board.clear_and_compact(set())
    assert removed == []
    assert moves == []
    assert board.snapshot() == before


def test_clearing_same_ids_twice_matches_clearing_once():
    bus, world, board = _board()
    board.fill_initial(3)
    ids = {tile.id for tile in board.snapshot()[9][:3]}
    board.clear_and_compact(ids)
    once = board.snapshot()
    board.clear_and_compact(ids)
    assert board.snapshot() == once


def test_unknown_ids_are_ignored():
    bus, world, board = _board()
    board.fill_initial(2)
    before = board.snapshot()
    removed, _ = board.clear_and_compact({"not-a-tile"})
    assert removed == []
    assert board.snapshot() == before


def test_gravity_leaves_no_gaps_after_random_clears():
    bus, world, board = _board(seed=11)
    rng = random.Random(11)
    board.fill_initial(3)
    for _ in range(4):
        board.inject_row()
    for _ in range(10):
        ids = sorted(live_tile_ids(world))
        if not ids:
            break
        board.clear_and_compact(rng.sample(ids, min(len(ids), rng.randint(1, 5))))
        _assert_no_gaps(board.snapshot())
        assert compute_gravity_moves(world) == []


def test_is_top_row_occupied():
    bus, world, board = _board()
    place_tiles(world, 10, 6, {(9, 0): Tile("a", 1)})
    assert not board.is_top_row_occupied()
    place_tiles(world, 10, 6, {(0, 3): Tile("a", 1)})
    assert board.is_top_row_occupied()


def test_board_queries_require_board():
    with pytest.raises(RuntimeError):
        grid_snapshot(World())


def test_board_dimensions_follow_config():
    bus = EventBus()
    world = create_world(bus, config=RoundConfig(rows=6, cols=4, initial_rows=2), rng=random.Random(0))
    board = BoardSystem(world, bus)
    board.fill_initial(2)
    assert board.dimensions == (6, 4)
    assert len(live_tile_ids(world)) == 8


def test_tile_lookups_by_cell():
    bus, world, board = _board()
    place_tiles(world, 10, 6, {(9, 3): Tile("k", 7)})
    assert get_tile_at(world, 9, 3) == Tile("k", 7)
    assert get_tile_at(world, 9, 2) is None
    assert tile_values(world) == {"k": 7}
