import random

from esper import World

from sumstack.components.game_state import GameMode, RoundState
from sumstack.components.selection import Selection
from sumstack.components.target import Target
from sumstack.config import RoundConfig
from sumstack.events.bus import EventBus


def create_world(
    event_bus: EventBus,
    *,
    config: RoundConfig | None = None,
    initial_mode: GameMode = GameMode.CLASSIC,
    high_score: int = 0,
    rng: random.Random | None = None,
) -> World:
    world = World()
    setattr(world, "random", rng or random.Random())
    setattr(world, "config", config or RoundConfig())

    # Singleton resources shared by the board, match and round systems.
    world.create_entity(
        RoundState(
            mode=initial_mode,
            high_score=max(0, int(high_score)),
            time_remaining_ms=world.config.time_interval_ms,
        )
    )
    world.create_entity(Selection())
    world.create_entity(Target())
    return world
