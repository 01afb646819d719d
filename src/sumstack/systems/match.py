import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import FrozenSet, Tuple

from esper import World

from sumstack.components.selection import Selection
from sumstack.components.target import Target
from sumstack.events.bus import EVENT_SELECTION_CHANGED, EVENT_SELECTION_OVERFLOW, EventBus
from sumstack.systems.board_ops import tile_values

logger = logging.getLogger(__name__)


class OutcomeKind(Enum):
    PENDING = auto()
    OVERFLOW = auto()
    MATCH = auto()


@dataclass(frozen=True, slots=True)
class MatchOutcome:
    kind: OutcomeKind
    ids: FrozenSet[str] = frozenset()
    total: int = 0


class MatchSystem:
    """Tracks the in-progress selection and judges each click against the target.

    Selections hold tile ids, never positions, and are re-resolved against the
    live board on every evaluation so gravity and row injection cannot leave a
    dangling reference. Ids missing from the board count as zero.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self._selection_entity = self._ensure_entity(Selection)
        self._target_entity = self._ensure_entity(Target)

    def _ensure_entity(self, component_type) -> int:
        existing = list(self.world.get_component(component_type))
        if existing:
            return existing[0][0]
        return self.world.create_entity(component_type())

    @property
    def selection(self) -> Selection:
        return self.world.component_for_entity(self._selection_entity, Selection)

    @property
    def target(self) -> Target:
        return self.world.component_for_entity(self._target_entity, Target)

    def selected_ids(self) -> Tuple[str, ...]:
        return tuple(self.selection.ids)

    def running_sum(self) -> int:
        values = tile_values(self.world)
        return sum(values.get(tile_id, 0) for tile_id in self.selection.ids)

    def toggle(self, tile_id: str) -> MatchOutcome:
        selection = self.selection
        if tile_id in selection.ids:
            selection.ids.remove(tile_id)
        else:
            selection.ids.append(tile_id)
        selection.total = self.running_sum()
        total = selection.total
        target = self.target.value

        if target is not None and total == target:
            # Caller still needs the ids, so the selection is cleared later via clear().
            ids = frozenset(selection.ids)
            logger.debug("Match: %d tiles sum to %d", len(ids), total)
            self.event_bus.emit(EVENT_SELECTION_CHANGED, ids=tuple(selection.ids), total=total)
            return MatchOutcome(OutcomeKind.MATCH, ids=ids, total=total)
        if target is not None and total > target:
            logger.debug("Overflow: %d exceeds target %d, selection reset", total, target)
            selection.clear()
            self.event_bus.emit(EVENT_SELECTION_OVERFLOW, total=total, target=target)
            self.event_bus.emit(EVENT_SELECTION_CHANGED, ids=(), total=0)
            return MatchOutcome(OutcomeKind.OVERFLOW, total=total)
        self.event_bus.emit(EVENT_SELECTION_CHANGED, ids=tuple(selection.ids), total=total)
        return MatchOutcome(OutcomeKind.PENDING, ids=frozenset(selection.ids), total=total)

    def clear(self) -> None:
        selection = self.selection
        had_ids = bool(selection.ids)
        selection.clear()
        if had_ids:
            self.event_bus.emit(EVENT_SELECTION_CHANGED, ids=(), total=0)
