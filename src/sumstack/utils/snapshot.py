from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple

from esper import World

from sumstack.components.game_state import GameMode, RoundPhase
from sumstack.components.selection import Selection
from sumstack.components.target import Target
from sumstack.components.tile import Tile
from sumstack.systems.board_ops import board_dimensions, grid_snapshot, tile_values
from sumstack.utils.game_state import get_round_state


@dataclass(frozen=True, slots=True)
class RoundSnapshot:
    """Read-only view of everything a renderer needs after an accepted input."""

    grid: Tuple[Tuple[Optional[Tile], ...], ...]
    target: Optional[int]
    score: int
    high_score: int
    phase: RoundPhase
    mode: GameMode
    time_remaining_ms: int
    selection: Tuple[str, ...]
    selection_total: int
    clearing_ids: FrozenSet[str]


def build_snapshot(world: World) -> RoundSnapshot:
    state = get_round_state(world)
    grid: Tuple[Tuple[Optional[Tile], ...], ...] = ()
    if board_dimensions(world) is not None:
        grid = tuple(tuple(row) for row in grid_snapshot(world))
    target = None
    for _, target_comp in world.get_component(Target):
        target = target_comp.value
        break
    selected: Tuple[str, ...] = ()
    for _, selection in world.get_component(Selection):
        selected = tuple(selection.ids)
        break
    values = tile_values(world)
    return RoundSnapshot(
        grid=grid,
        target=target,
        score=state.score,
        high_score=state.high_score,
        phase=state.phase,
        mode=state.mode,
        time_remaining_ms=state.time_remaining_ms,
        selection=selected,
        selection_total=sum(values.get(tile_id, 0) for tile_id in selected),
        clearing_ids=frozenset(state.clearing_ids),
    )
