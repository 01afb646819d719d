import random

from sumstack.constants import TARGET_MAX, TARGET_MIN


def next_target(rng: random.Random | None = None, low: int = TARGET_MIN, high: int = TARGET_MAX) -> int:
    """Return a uniformly random target sum in [low, high].

    Board contents are not consulted, so a target may be unreachable until new
    tiles arrive.
    """
    if low > high:
        raise ValueError(f"Invalid target range [{low}, {high}]")
    return (rng or random).randint(low, high)
