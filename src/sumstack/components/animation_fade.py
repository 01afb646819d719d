from dataclasses import dataclass

@dataclass(slots=True)
class FadeAnimation:
    tile_id: str
    elapsed_ms: int = 0
    alpha: float = 1.0
