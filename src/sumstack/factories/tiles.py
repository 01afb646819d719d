from __future__ import annotations

import random
from typing import Container

from sumstack.components.tile import Tile
from sumstack.constants import BLOCK_MAX, BLOCK_MIN

_ID_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
_ID_LENGTH = 9


class TileFactory:
    """Creates tiles with a random value and an id unused on the live board."""

    def __init__(
        self,
        rng: random.Random | None = None,
        *,
        value_min: int = BLOCK_MIN,
        value_max: int = BLOCK_MAX,
    ) -> None:
        self.rng = rng or random.Random()
        self.value_min = value_min
        self.value_max = value_max

    def create_tile(self, live_ids: Container[str] = ()) -> Tile:
        tile_id = self._new_id()
        while tile_id in live_ids:
            tile_id = self._new_id()
        return Tile(id=tile_id, value=self.rng.randint(self.value_min, self.value_max))

    def _new_id(self) -> str:
        return "".join(self.rng.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))
