from dataclasses import dataclass
from typing import Optional

@dataclass(slots=True)
class Target:
    """Sum the player currently has to hit. None until a round starts."""
    value: Optional[int] = None
