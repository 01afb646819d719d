from esper import World

from sumstack.components.game_state import RoundPhase
from sumstack.events.bus import (
    EVENT_KEY_PRESS,
    EVENT_MENU_REQUEST,
    EVENT_MOUSE_PRESS,
    EVENT_PAUSE_TOGGLE_REQUEST,
    EVENT_RESET_REQUEST,
    EVENT_RESUME_REQUEST,
    EVENT_TILE_CLICK,
    EventBus,
)
from sumstack.systems.board_ops import board_dimensions, get_tile_at
from sumstack.ui.layout import cell_at_point, overlay_buttons
from sumstack.utils.game_state import get_round_state

# arcade.key values, kept literal so the input layer does not import arcade.
KEY_SPACE = 32
KEY_H = 104
KEY_P = 112
KEY_R = 114
KEY_ESCAPE = 65307

MOUSE_BUTTON_LEFT = 1

_OVERLAY_EVENTS = {
    "resume": EVENT_RESUME_REQUEST,
    "reset": EVENT_RESET_REQUEST,
    "menu": EVENT_MENU_REQUEST,
}


class InputSystem:
    """Translates raw mouse and keyboard events into round requests."""

    def __init__(self, event_bus: EventBus, window, world: World):
        self.event_bus = event_bus
        self.window = window
        self.world = world
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)
        self.event_bus.subscribe(EVENT_KEY_PRESS, self.on_key_press)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        if x is None or y is None or kwargs.get('button') != MOUSE_BUTTON_LEFT:
            return
        phase = get_round_state(self.world).phase
        if phase == RoundPhase.IDLE:
            return  # menu input owns this screen
        for button in overlay_buttons(phase, self.window.width, self.window.height):
            if button.contains(x, y):
                self.event_bus.emit(_OVERLAY_EVENTS[button.action])
                return
        if phase != RoundPhase.PLAYING:
            return
        dims = board_dimensions(self.world)
        if dims is None:
            return
        cell = cell_at_point(x, y, self.window.width, self.window.height, *dims)
        if cell is None:
            return
        tile = get_tile_at(self.world, *cell)
        if tile is not None:
            self.event_bus.emit(EVENT_TILE_CLICK, tile_id=tile.id)

    def on_key_press(self, sender, **kwargs):
        symbol = kwargs.get('symbol')
        if get_round_state(self.world).phase == RoundPhase.IDLE:
            return
        if symbol in (KEY_P, KEY_SPACE):
            self.event_bus.emit(EVENT_PAUSE_TOGGLE_REQUEST)
        elif symbol == KEY_R:
            self.event_bus.emit(EVENT_RESET_REQUEST)
        elif symbol in (KEY_ESCAPE, KEY_H):
            self.event_bus.emit(EVENT_MENU_REQUEST)
