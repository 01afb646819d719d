from dataclasses import dataclass

@dataclass(frozen=True, slots=True)
class Tile:
    """Numbered tile held by one board cell.

    ``id`` is the only stable handle across gravity and row injection; values repeat.
    Position lives in a separate BoardPosition component.
    """
    id: str
    value: int
