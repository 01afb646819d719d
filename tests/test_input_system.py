from sumstack.components.game_state import RoundPhase
from sumstack.events.bus import EVENT_KEY_PRESS, EVENT_MOUSE_PRESS, EVENT_TILE_CLICK
from sumstack.systems.input import KEY_ESCAPE, KEY_P, KEY_R, InputSystem
from sumstack.ui.layout import cell_origin
from tests.helpers import DummyWindow, bottom_row, build_round, record


def _cell_center(row, col, window):
    left, bottom, size = cell_origin(row, col, window.width, window.height, 10, 6)
    return left + size / 2, bottom + size / 2


def _setup():
    h = build_round()
    window = DummyWindow()
    InputSystem(h.bus, window, h.world)
    return h, window


def test_click_on_tile_selects_it():
    h, window = _setup()
    h.rounds.start("classic")
    a, b = bottom_row(h.world, [2, 3])
    h.matcher.target.value = 20
    clicks = record(h.bus, EVENT_TILE_CLICK)

    x, y = _cell_center(9, 1, window)
    h.bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=1)

    assert clicks == [{"tile_id": b}]
    assert h.matcher.selected_ids() == (b,)


def test_click_on_empty_cell_or_other_button_is_ignored():
    h, window = _setup()
    h.rounds.start("classic")
    bottom_row(h.world, [2, 3])
    clicks = record(h.bus, EVENT_TILE_CLICK)

    h.bus.emit(EVENT_MOUSE_PRESS, x=_cell_center(0, 0, window)[0], y=_cell_center(0, 0, window)[1], button=1)
    x, y = _cell_center(9, 0, window)
    h.bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=4)

    assert clicks == []


def test_clicks_ignored_on_menu_screen():
    h, window = _setup()
    clicks = record(h.bus, EVENT_TILE_CLICK)
    x, y = _cell_center(9, 0, window)
    h.bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=1)
    h.bus.emit(EVENT_KEY_PRESS, symbol=KEY_P, modifiers=0)
    assert clicks == []
    assert h.rounds.state.phase == RoundPhase.IDLE


def test_pause_key_and_resume_button():
    h, window = _setup()
    h.rounds.start("classic")

    h.bus.emit(EVENT_KEY_PRESS, symbol=KEY_P, modifiers=0)
    assert h.rounds.state.phase == RoundPhase.PAUSED

    h.bus.emit(EVENT_MOUSE_PRESS, x=window.width / 2, y=window.height / 2 - 40, button=1)
    assert h.rounds.state.phase == RoundPhase.PLAYING


def test_reset_and_menu_keys():
    h, window = _setup()
    h.rounds.start("timed")
    h.rounds.state.score = 50

    h.bus.emit(EVENT_KEY_PRESS, symbol=KEY_R, modifiers=0)
    assert h.rounds.state.score == 0
    assert h.rounds.state.phase == RoundPhase.PLAYING

    h.bus.emit(EVENT_KEY_PRESS, symbol=KEY_ESCAPE, modifiers=0)
    assert h.rounds.state.phase == RoundPhase.IDLE


def test_game_over_buttons():
    h, window = _setup()
    h.rounds.start("classic")
    h.rounds.state.phase = RoundPhase.GAME_OVER

    h.bus.emit(EVENT_MOUSE_PRESS, x=window.width / 2, y=window.height / 2 - 110, button=1)
    assert h.rounds.state.phase == RoundPhase.IDLE

    h.rounds.start("classic")
    h.rounds.state.phase = RoundPhase.GAME_OVER
    h.bus.emit(EVENT_MOUSE_PRESS, x=window.width / 2, y=window.height / 2 - 40, button=1)
    assert h.rounds.state.phase == RoundPhase.PLAYING
