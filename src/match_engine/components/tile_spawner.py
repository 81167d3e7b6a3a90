from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from match_engine.components.grid import Tile


@dataclass(slots=True)
class TileSpawner:
    """Creates tiles for one session.

    Holds the palette, the random source and the id counter, so ids stay
    unique for the lifetime of the session, across refills and shuffles.
    """

    tile_types: Sequence[str]
    rng: random.Random = field(default_factory=random.Random)
    next_id: int = 1

    def __post_init__(self) -> None:
        self.tile_types = tuple(self.tile_types)

    def random_type(self, choices: Iterable[str] | None = None) -> str:
        available: List[str] = list(choices) if choices is not None else list(self.tile_types)
        return self.rng.choice(available)

    def spawn(self, type_name: str | None = None) -> Tile:
        if type_name is None:
            type_name = self.random_type()
        tile = Tile(type_name=type_name, id=self.next_id)
        self.next_id += 1
        return tile

    def reserve_past(self, ids: Iterable[int]) -> None:
        """Make sure future ids do not collide with ids already on a board."""
        highest = max(ids, default=0)
        if highest >= self.next_id:
            self.next_id = highest + 1
