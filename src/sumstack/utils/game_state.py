from __future__ import annotations

from esper import World

from sumstack.components.game_state import RoundPhase, RoundState
from sumstack.events.bus import EVENT_PHASE_CHANGED, EventBus


def get_round_state(world: World) -> RoundState:
    """Return the singleton round state, creating it on first use."""
    for _, state in world.get_component(RoundState):
        return state
    state = RoundState()
    world.create_entity(state)
    return state


def set_round_phase(world: World, event_bus: EventBus, phase: RoundPhase) -> bool:
    """Update the round phase and emit a change event when it differs."""
    state = get_round_state(world)
    previous_phase = state.phase
    if previous_phase == phase:
        return False
    state.phase = phase
    event_bus.emit(EVENT_PHASE_CHANGED, previous_phase=previous_phase, new_phase=phase)
    return True
