"""Round state resource describing mode, phase and scoring."""
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Set

from sumstack.constants import TIME_MODE_INTERVAL_MS


class GameMode(Enum):
    """Row injection policy for a round."""
    CLASSIC = "classic"
    TIMED = "timed"

    @classmethod
    def parse(cls, value: "GameMode | str") -> "GameMode":
        if isinstance(value, GameMode):
            return value
        name = str(value).strip().lower()
        if name == "time":
            return cls.TIMED
        try:
            return cls(name)
        except ValueError:
            raise ValueError(f"Unknown game mode: {value!r}") from None


class RoundPhase(Enum):
    """Lifecycle phases of the round controller."""
    IDLE = auto()
    PLAYING = auto()
    PAUSED = auto()
    RESOLVING = auto()
    GAME_OVER = auto()


@dataclass
class RoundState:
    """Singleton component storing the state of the current round."""
    score: int = 0
    high_score: int = 0
    mode: GameMode = GameMode.CLASSIC
    time_remaining_ms: int = TIME_MODE_INTERVAL_MS
    phase: RoundPhase = RoundPhase.IDLE
    processing: bool = False
    clearing_ids: Set[str] = field(default_factory=set)
