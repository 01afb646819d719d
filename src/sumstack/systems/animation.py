from typing import List

from esper import World

from sumstack.components.animation_fade import FadeAnimation
from sumstack.components.duration import Duration
from sumstack.components.game_state import RoundPhase, RoundState
from sumstack.events.bus import EVENT_ANIMATION_COMPLETE, EVENT_ANIMATION_START, EVENT_TICK, EventBus


class AnimationSystem:
    """Drives timing of clearing fades; each fading tile is its own entity.

    Completion is announced with EVENT_ANIMATION_COMPLETE so resolution runs as a
    scheduled callback on the tick stream instead of a blocking sleep.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        event_bus.subscribe(EVENT_TICK, self.on_tick)
        event_bus.subscribe(EVENT_ANIMATION_START, self.on_animation_start)

    def on_animation_start(self, sender, **kwargs):
        kind = kwargs.get('kind')
        items = kwargs.get('items', [])
        duration_ms = int(kwargs.get('duration_ms', 0))
        if kind != 'fade':
            return
        if duration_ms <= 0:
            self.event_bus.emit(EVENT_ANIMATION_COMPLETE, kind='fade', items=sorted(items))
            return
        self.create_fade_group(items, duration_ms)

    def create_fade_group(self, tile_ids, duration_ms: int) -> List[int]:
        ents = []
        for tile_id in sorted(tile_ids):
            ents.append(self.world.create_entity(FadeAnimation(tile_id=tile_id), Duration(duration_ms)))
        return ents

    def on_tick(self, sender, **kwargs):
        if self._paused():
            return
        dt_ms = int(kwargs.get('dt_ms', 0))
        fades = list(self.world.get_component(FadeAnimation))
        if not fades:
            return
        finished = True
        for ent, fade in fades:
            duration = self.world.component_for_entity(ent, Duration)
            fade.elapsed_ms = min(duration.value_ms, fade.elapsed_ms + dt_ms)
            fade.alpha = 1.0 - fade.elapsed_ms / duration.value_ms
            if fade.elapsed_ms < duration.value_ms:
                finished = False
        if finished:
            tile_ids = sorted(fade.tile_id for _, fade in fades)
            self.cancel_all()
            self.event_bus.emit(EVENT_ANIMATION_COMPLETE, kind='fade', items=tile_ids)

    def cancel_all(self) -> None:
        for ent, _ in list(self.world.get_component(FadeAnimation)):
            self.world.delete_entity(ent, immediate=True)

    def _paused(self) -> bool:
        for _, state in self.world.get_component(RoundState):
            return state.phase == RoundPhase.PAUSED
        return False
