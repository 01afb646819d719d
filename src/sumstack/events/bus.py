from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems that are not stored anywhere else alive.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                        # payload: dt_ms=int


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"          # payload: x, y, button
EVENT_KEY_PRESS = "key_press"              # payload: symbol, modifiers
EVENT_TILE_CLICK = "tile_click"            # payload: tile_id=str


# ============================================================================
# ROUND REQUESTS
# ============================================================================
EVENT_ROUND_START_REQUEST = "round_start_request"  # payload: mode=GameMode|str
EVENT_PAUSE_REQUEST = "pause_request"              # payload: None
EVENT_RESUME_REQUEST = "resume_request"            # payload: None
EVENT_PAUSE_TOGGLE_REQUEST = "pause_toggle_request"  # payload: None
EVENT_RESET_REQUEST = "reset_request"              # payload: None
EVENT_MENU_REQUEST = "menu_request"                # payload: None


# ============================================================================
# SELECTION & MATCHING
# ============================================================================
EVENT_SELECTION_CHANGED = "selection_changed"      # payload: ids=tuple[str,...], total=int
EVENT_SELECTION_OVERFLOW = "selection_overflow"    # payload: total=int, target=int
EVENT_MATCH_FOUND = "match_found"                  # payload: ids=frozenset[str], size=int, points=int
EVENT_MATCH_CLEARED = "match_cleared"              # payload: ids=frozenset[str], count=int
EVENT_BIG_CLEAR = "big_clear"                      # payload: count=int
EVENT_TARGET_CHANGED = "target_changed"            # payload: target=int


# ============================================================================
# BOARD
# ============================================================================
EVENT_BOARD_CHANGED = "board_changed"              # payload: reason=str, positions=list[(r,c)]
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: moves=list[GravityMove]
EVENT_ROW_INJECTED = "row_injected"                # payload: positions=list[(r,c)]
EVENT_ROW_INJECTION_SUPPRESSED = "row_injection_suppressed"  # payload: None


# ============================================================================
# ANIMATION
# ============================================================================
EVENT_ANIMATION_START = "animation_start"          # payload: kind=str, items=list, duration_ms=int
EVENT_ANIMATION_COMPLETE = "animation_complete"    # payload: kind=str, items=list


# ============================================================================
# ROUND STATE
# ============================================================================
EVENT_PHASE_CHANGED = "phase_changed"              # payload: previous_phase=RoundPhase, new_phase=RoundPhase
EVENT_STATE_CHANGED = "state_changed"              # payload: snapshot=RoundSnapshot
EVENT_TIME_CHANGED = "time_changed"                # payload: time_remaining_ms=int
EVENT_SCORE_CHANGED = "score_changed"              # payload: score=int, delta=int
EVENT_NEW_HIGH_SCORE = "new_high_score"            # payload: value=int
EVENT_GAME_OVER = "game_over"                      # payload: final_score=int
