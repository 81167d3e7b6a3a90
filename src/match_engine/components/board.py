from dataclasses import dataclass

from match_engine.components.grid import Grid

@dataclass(slots=True)
class Board:
    rows: int
    cols: int
    grid: Grid
