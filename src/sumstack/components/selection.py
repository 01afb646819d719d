from dataclasses import dataclass, field
from typing import List


@dataclass(slots=True)
class Selection:
    """Tile ids picked by the player, in click order, with the cached running sum."""

    ids: List[str] = field(default_factory=list)
    total: int = 0

    def clear(self) -> None:
        self.ids.clear()
        self.total = 0
