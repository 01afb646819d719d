from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from esper import World

from sumstack.constants import HIGH_SCORE_KEY
from sumstack.events.bus import EVENT_NEW_HIGH_SCORE, EventBus
from sumstack.utils.game_state import get_round_state

logger = logging.getLogger(__name__)


class HighScoreSystem:
    """Persists the single best-score integer across sessions.

    The stored value is read once at construction and pushed into the round
    state; every new best reported by the round controller is written at once.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        save_path: Path | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self._save_path = Path(save_path) if save_path is not None else self._default_save_path()
        self._high_score = 0

        self.event_bus.subscribe(EVENT_NEW_HIGH_SCORE, self._on_new_high_score)
        self.load()

    @staticmethod
    def _default_save_path() -> Path:
        data_dir = os.environ.get("SUMSTACK_DATA_DIR")
        if data_dir:
            return Path(data_dir) / "high_score.json"
        return Path(__file__).resolve().parents[3] / "data" / "high_score.json"

    @property
    def save_path(self) -> Path:
        return self._save_path

    @property
    def high_score(self) -> int:
        return self._high_score

    def load(self) -> int:
        try:
            with self._save_path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except FileNotFoundError:
            payload = {}
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Could not read high score from %s: %s", self._save_path, exc)
            payload = {}
        value = payload.get(HIGH_SCORE_KEY, 0) if isinstance(payload, dict) else 0
        try:
            self._high_score = max(0, int(value))
        except (TypeError, ValueError):
            logger.warning("Ignoring malformed high score %r", value)
            self._high_score = 0
        state = get_round_state(self.world)
        state.high_score = max(state.high_score, self._high_score)
        return self._high_score

    def save(self, value: int) -> None:
        self._high_score = int(value)
        try:
            self._save_path.parent.mkdir(parents=True, exist_ok=True)
            with self._save_path.open("w", encoding="utf-8") as handle:
                json.dump({HIGH_SCORE_KEY: self._high_score}, handle, indent=2)
        except OSError as exc:
            logger.warning("Could not write high score to %s: %s", self._save_path, exc)

    def _on_new_high_score(self, sender, **payload) -> None:
        value = payload.get("value")
        if value is None or int(value) <= self._high_score:
            return
        logger.info("New high score: %d", value)
        self.save(int(value))
