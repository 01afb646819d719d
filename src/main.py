"""Entry point for the SumStack arithmetic puzzle.

Sets up the ECS world, event bus, systems, and the Arcade window that acts as
host clock and renderer.
"""
import logging
import os

from arcade import Window, run, set_background_color

from sumstack.components.game_state import RoundPhase
from sumstack.constants import TICK_INTERVAL_MS, WINDOW_HEIGHT, WINDOW_TITLE, WINDOW_WIDTH
from sumstack.events.bus import EVENT_KEY_PRESS, EVENT_MOUSE_PRESS, EventBus
from sumstack.menu.factory import spawn_main_menu
from sumstack.menu.input_system import MenuInputSystem
from sumstack.menu.render_system import MenuRenderSystem
from sumstack.systems.animation import AnimationSystem
from sumstack.systems.board import BoardSystem
from sumstack.systems.high_score_system import HighScoreSystem
from sumstack.systems.input import InputSystem
from sumstack.systems.match import MatchSystem
from sumstack.systems.render import BACKGROUND, RenderSystem
from sumstack.systems.round_system import RoundSystem
from sumstack.utils.game_state import get_round_state
from sumstack.utils.tick_clock import TickClock
from sumstack.world import create_world


class SumStackWindow(Window):
    def __init__(self):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, WINDOW_TITLE, resizable=True)
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.world = create_world(self.event_bus)
        self.tick_clock = TickClock(self.event_bus, TICK_INTERVAL_MS)

        # Persistence first so the menu shows the stored best score.
        self.high_score_system = HighScoreSystem(self.world, self.event_bus)

        # Core systems
        self.board_system = BoardSystem(self.world, self.event_bus)
        self.match_system = MatchSystem(self.world, self.event_bus)
        self.animation_system = AnimationSystem(self.world, self.event_bus)
        self.round_system = RoundSystem(
            self.world,
            self.event_bus,
            board_system=self.board_system,
            match_system=self.match_system,
        )

        # Interface systems
        self.menu_input_system = MenuInputSystem(
            self.world,
            self.event_bus,
            menu_size_provider=lambda: (self.width, self.height),
        )
        self.menu_render_system = MenuRenderSystem(self.world, self)
        self.input_system = InputSystem(self.event_bus, self, self.world)
        self.render_system = RenderSystem(self.world, self.event_bus, self)

        spawn_main_menu(self.world, self.width, self.height)
        set_background_color(BACKGROUND)

    def on_draw(self):
        self.clear()
        if self._phase() == RoundPhase.IDLE:
            self.menu_render_system.process()
            return
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.tick_clock.advance(delta_time)

    def on_resize(self, width: int, height: int):
        if self._phase() == RoundPhase.IDLE:
            spawn_main_menu(self.world, width, height)
        return super().on_resize(width, height)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        if self._phase() == RoundPhase.IDLE:
            self.menu_input_system.handle_mouse_press(x, y, button)
            return
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        if self._phase() == RoundPhase.IDLE:
            self.menu_input_system.handle_key_press(symbol, modifiers)
            return
        self.event_bus.emit(EVENT_KEY_PRESS, symbol=symbol, modifiers=modifiers)

    def _phase(self) -> RoundPhase:
        return get_round_state(self.world).phase


def main():
    logging.basicConfig(
        level=os.environ.get("SUMSTACK_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    SumStackWindow()
    run()

if __name__ == "__main__":
    main()
