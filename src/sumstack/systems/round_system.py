"""Round controller: lifecycle phases, row-injection cadence and match resolution."""
from __future__ import annotations

import logging
import random
from typing import FrozenSet

from esper import World

from sumstack.components.animation_fade import FadeAnimation
from sumstack.components.game_state import GameMode, RoundPhase, RoundState
from sumstack.config import RoundConfig
from sumstack.events.bus import (
    EVENT_ANIMATION_COMPLETE,
    EVENT_ANIMATION_START,
    EVENT_BIG_CLEAR,
    EVENT_GAME_OVER,
    EVENT_MATCH_CLEARED,
    EVENT_MATCH_FOUND,
    EVENT_MENU_REQUEST,
    EVENT_NEW_HIGH_SCORE,
    EVENT_PAUSE_REQUEST,
    EVENT_PAUSE_TOGGLE_REQUEST,
    EVENT_RESET_REQUEST,
    EVENT_RESUME_REQUEST,
    EVENT_ROUND_START_REQUEST,
    EVENT_SCORE_CHANGED,
    EVENT_STATE_CHANGED,
    EVENT_TARGET_CHANGED,
    EVENT_TICK,
    EVENT_TILE_CLICK,
    EVENT_TIME_CHANGED,
    EventBus,
)
from sumstack.factories.targets import next_target
from sumstack.systems.board import BoardSystem
from sumstack.systems.board_ops import live_tile_ids
from sumstack.systems.match import MatchOutcome, MatchSystem, OutcomeKind
from sumstack.utils.game_state import get_round_state, set_round_phase
from sumstack.utils.snapshot import RoundSnapshot, build_snapshot

logger = logging.getLogger(__name__)


class RoundSystem:
    """Single owner of the round state.

    Every entry point is a total function: requests that do not fit the current
    phase are ignored rather than raised. While a match is resolving the
    ``processing`` flag holds back clicks and timer ticks until the clearing fade
    reports completion.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        board_system: BoardSystem | None = None,
        match_system: MatchSystem | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.config: RoundConfig = getattr(world, "config", None) or RoundConfig()
        self._rng = getattr(world, "random", None) or random.Random()
        self.board = board_system or BoardSystem(world, event_bus)
        self.matcher = match_system or MatchSystem(world, event_bus)
        self._pending_clear: FrozenSet[str] = frozenset()

        self.event_bus.subscribe(EVENT_ROUND_START_REQUEST, self._on_start_request)
        self.event_bus.subscribe(EVENT_TILE_CLICK, self._on_tile_click)
        self.event_bus.subscribe(EVENT_PAUSE_REQUEST, self._on_pause_request)
        self.event_bus.subscribe(EVENT_RESUME_REQUEST, self._on_resume_request)
        self.event_bus.subscribe(EVENT_PAUSE_TOGGLE_REQUEST, self._on_pause_toggle_request)
        self.event_bus.subscribe(EVENT_RESET_REQUEST, self._on_reset_request)
        self.event_bus.subscribe(EVENT_MENU_REQUEST, self._on_menu_request)
        self.event_bus.subscribe(EVENT_TICK, self._on_tick)
        self.event_bus.subscribe(EVENT_ANIMATION_COMPLETE, self._on_animation_complete)

    @property
    def state(self) -> RoundState:
        return get_round_state(self.world)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def start(self, mode: GameMode | str | None = None) -> bool:
        """Begin a round from the menu or after a game over."""
        state = self.state
        if state.phase not in (RoundPhase.IDLE, RoundPhase.GAME_OVER):
            return False
        self._begin_round(GameMode.parse(mode) if mode is not None else state.mode)
        return True

    def reset(self) -> None:
        """Throw away the current round and start a fresh one in the same mode."""
        self._begin_round(self.state.mode)

    def return_to_menu(self) -> None:
        state = self.state
        self._discard_in_flight()
        self.matcher.clear()
        self.board.clear()
        self.matcher.target.value = None
        set_round_phase(self.world, self.event_bus, RoundPhase.IDLE)
        logger.info("Returned to menu with score %d", state.score)
        self._emit_state()

    def pause(self) -> bool:
        state = self.state
        if state.phase != RoundPhase.PLAYING or state.processing:
            return False
        set_round_phase(self.world, self.event_bus, RoundPhase.PAUSED)
        self._emit_state()
        return True

    def resume(self) -> bool:
        if self.state.phase != RoundPhase.PAUSED:
            return False
        set_round_phase(self.world, self.event_bus, RoundPhase.PLAYING)
        self._emit_state()
        return True

    def toggle_pause(self) -> bool:
        if self.state.phase == RoundPhase.PAUSED:
            return self.resume()
        return self.pause()

    def toggle_tile(self, tile_id: str) -> MatchOutcome | None:
        """Route a tile click to the match engine; None when the click is ignored."""
        state = self.state
        if state.phase != RoundPhase.PLAYING or state.processing:
            return None
        if tile_id in state.clearing_ids or tile_id not in live_tile_ids(self.world):
            return None
        outcome = self.matcher.toggle(tile_id)
        if outcome.kind == OutcomeKind.MATCH:
            self._begin_resolution(outcome.ids)
        self._emit_state()
        return outcome

    def tick(self, delta_ms: int) -> bool:
        """Advance the timed-mode row timer by ``delta_ms``."""
        state = self.state
        if state.phase != RoundPhase.PLAYING or state.processing:
            return False
        if state.mode != GameMode.TIMED or delta_ms <= 0:
            return False
        state.time_remaining_ms -= int(delta_ms)
        if state.time_remaining_ms <= 0:
            state.time_remaining_ms = self.config.time_interval_ms
            self.board.inject_row()
            if self.board.is_top_row_occupied():
                self._end_round()
        self.event_bus.emit(EVENT_TIME_CHANGED, time_remaining_ms=state.time_remaining_ms)
        self._emit_state()
        return True

    def snapshot(self) -> RoundSnapshot:
        return build_snapshot(self.world)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_start_request(self, sender, **payload) -> None:
        mode = payload.get("mode")
        if mode is None:
            return
        self.start(mode)

    def _on_tile_click(self, sender, **payload) -> None:
        tile_id = payload.get("tile_id")
        if tile_id is None:
            return
        self.toggle_tile(tile_id)

    def _on_pause_request(self, sender, **payload) -> None:
        self.pause()

    def _on_resume_request(self, sender, **payload) -> None:
        self.resume()

    def _on_pause_toggle_request(self, sender, **payload) -> None:
        self.toggle_pause()

    def _on_reset_request(self, sender, **payload) -> None:
        self.reset()

    def _on_menu_request(self, sender, **payload) -> None:
        self.return_to_menu()

    def _on_tick(self, sender, **payload) -> None:
        self.tick(payload.get("dt_ms", 0))

    def _on_animation_complete(self, sender, **payload) -> None:
        if payload.get("kind") != "fade":
            return
        state = self.state
        if not state.processing or state.phase != RoundPhase.RESOLVING:
            return
        self._complete_resolution()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _begin_round(self, mode: GameMode) -> None:
        state = self.state
        self._discard_in_flight()
        state.mode = mode
        state.score = 0
        state.time_remaining_ms = self.config.time_interval_ms
        self.matcher.clear()
        self.board.fill_initial(self.config.initial_rows)
        self._new_target()
        set_round_phase(self.world, self.event_bus, RoundPhase.PLAYING)
        logger.info("Round started in %s mode (target %s)", mode.value, self.matcher.target.value)
        self._emit_state()

    def _begin_resolution(self, ids: FrozenSet[str]) -> None:
        state = self.state
        points = self.config.points_per_tile * len(ids)
        self._add_score(points)
        state.processing = True
        state.clearing_ids = set(ids)
        self._pending_clear = ids
        set_round_phase(self.world, self.event_bus, RoundPhase.RESOLVING)
        self.event_bus.emit(EVENT_MATCH_FOUND, ids=ids, size=len(ids), points=points)
        if self.config.clear_delay_ms <= 0:
            self._complete_resolution()
            return
        self.event_bus.emit(
            EVENT_ANIMATION_START,
            kind="fade",
            items=sorted(ids),
            duration_ms=self.config.clear_delay_ms,
        )

    def _complete_resolution(self) -> None:
        state = self.state
        ids = self._pending_clear
        self._pending_clear = frozenset()
        self.board.clear_and_compact(ids)
        state.clearing_ids.clear()
        self._new_target()
        self.matcher.clear()
        state.processing = False
        count = len(ids)
        self.event_bus.emit(EVENT_MATCH_CLEARED, ids=ids, count=count)

        game_over = self.board.is_top_row_occupied()
        if not game_over and state.mode == GameMode.CLASSIC:
            self.board.inject_row()
            game_over = self.board.is_top_row_occupied()
        if game_over:
            self._end_round()
        else:
            set_round_phase(self.world, self.event_bus, RoundPhase.PLAYING)

        if count >= self.config.big_clear_threshold:
            self.event_bus.emit(EVENT_BIG_CLEAR, count=count)
        self._emit_state()

    def _end_round(self) -> None:
        state = self.state
        state.processing = False
        set_round_phase(self.world, self.event_bus, RoundPhase.GAME_OVER)
        logger.info("Game over: final score %d (best %d)", state.score, state.high_score)
        self.event_bus.emit(EVENT_GAME_OVER, final_score=state.score)

    def _add_score(self, points: int) -> None:
        state = self.state
        state.score += points
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=state.score, delta=points)
        if state.score > state.high_score:
            state.high_score = state.score
            self.event_bus.emit(EVENT_NEW_HIGH_SCORE, value=state.high_score)

    def _new_target(self) -> None:
        target = self.matcher.target
        target.value = next_target(self._rng, self.config.target_min, self.config.target_max)
        self.event_bus.emit(EVENT_TARGET_CHANGED, target=target.value)

    def _discard_in_flight(self) -> None:
        state = self.state
        state.processing = False
        state.clearing_ids.clear()
        self._pending_clear = frozenset()
        for ent, _ in list(self.world.get_component(FadeAnimation)):
            self.world.delete_entity(ent, immediate=True)

    def _emit_state(self) -> None:
        self.event_bus.emit(EVENT_STATE_CHANGED, snapshot=self.snapshot())
