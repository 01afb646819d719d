from dataclasses import dataclass

@dataclass(slots=True)
class BoardPosition:
    """Cell coordinates of a tile entity. Row 0 is the top (death) row."""
    row: int
    col: int
