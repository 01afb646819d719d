"""Input handling for the ECS-driven main menu."""
from typing import Callable, Tuple

from esper import World

from sumstack.components.game_state import RoundPhase
from sumstack.events.bus import EVENT_PHASE_CHANGED, EVENT_ROUND_START_REQUEST, EventBus
from sumstack.menu.components import MenuAction, MenuButton
from sumstack.menu.factory import clear_main_menu, spawn_main_menu
from sumstack.utils.game_state import get_round_state

KEY_ENTER = (65293, 13)


class MenuInputSystem:
    """Processes input while no round is running.

    The window routes presses here directly in the idle phase so a menu click
    can never fall through to the board once the round has started.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        menu_size_provider: Callable[[], Tuple[int, int]] | None = None,
    ) -> None:
        self.world = world
        self._event_bus = event_bus
        self._menu_size_provider = menu_size_provider
        event_bus.subscribe(EVENT_PHASE_CHANGED, self.on_phase_changed)

    def on_phase_changed(self, sender, **payload) -> None:
        if payload.get("new_phase") != RoundPhase.IDLE or self._menu_size_provider is None:
            return
        width, height = self._menu_size_provider()
        spawn_main_menu(self.world, width, height)

    def handle_mouse_press(self, x: float, y: float, button: int) -> None:
        """Start a round when a mode button is clicked."""
        if not self._menu_active():
            return
        for _, menu_button in self.world.get_component(MenuButton):
            if not menu_button.enabled:
                continue
            if self._point_inside_button(x, y, menu_button):
                self._activate_action(menu_button.action)
                return

    def handle_key_press(self, symbol: int, modifiers: int) -> None:
        """Enter starts a classic round."""
        if not self._menu_active():
            return
        if symbol in KEY_ENTER:
            self._activate_action(MenuAction.CLASSIC)

    def _activate_action(self, action: MenuAction) -> None:
        clear_main_menu(self.world)
        self._event_bus.emit(EVENT_ROUND_START_REQUEST, mode=action.value)

    def _menu_active(self) -> bool:
        return get_round_state(self.world).phase == RoundPhase.IDLE

    @staticmethod
    def _point_inside_button(x: float, y: float, button: MenuButton) -> bool:
        half_w = button.width / 2
        half_h = button.height / 2
        return (
            button.x - half_w <= x <= button.x + half_w
            and button.y - half_h <= y <= button.y + half_h
        )
