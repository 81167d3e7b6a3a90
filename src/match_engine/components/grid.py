from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

Position = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class Tile:
    """A placed tile.

    ``type_name`` decides matching; ``id`` follows the tile through gravity so
    a renderer can animate the exact tile that falls.
    """

    type_name: str
    id: int


Cell = Optional[Tile]


@dataclass(frozen=True, slots=True)
class Grid:
    """Immutable board snapshot stored row-major; row 0 is the top row.

    Every update returns a new Grid. ``None`` cells only exist while a cascade
    is in progress.
    """

    rows: int
    cols: int
    cells: Tuple[Cell, ...]

    def __post_init__(self) -> None:
        if len(self.cells) != self.rows * self.cols:
            raise ValueError(
                f"Grid of {self.rows}x{self.cols} needs {self.rows * self.cols} cells, got {len(self.cells)}"
            )

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[str]], *, first_id: int = 1) -> "Grid":
        """Build a full grid from rows of type names, numbering ids row-major.

        A row may be a string when every type name is a single character.
        """
        if not rows:
            raise ValueError("Grid needs at least one row")
        width = len(rows[0])
        cells: List[Cell] = []
        next_id = first_id
        for row in rows:
            if len(row) != width:
                raise ValueError("All rows must have the same length")
            for type_name in row:
                cells.append(Tile(type_name=type_name, id=next_id))
                next_id += 1
        return cls(len(rows), width, tuple(cells))

    def in_bounds(self, pos: Position) -> bool:
        row, col = pos
        return 0 <= row < self.rows and 0 <= col < self.cols

    def _index(self, row: int, col: int) -> int:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"Position {(row, col)} outside {self.rows}x{self.cols} grid")
        return row * self.cols + col

    def at(self, row: int, col: int) -> Cell:
        return self.cells[self._index(row, col)]

    def type_at(self, row: int, col: int) -> Optional[str]:
        tile = self.at(row, col)
        return tile.type_name if tile is not None else None

    def with_cell(self, row: int, col: int, cell: Cell) -> "Grid":
        return self.with_cells({(row, col): cell})

    def with_cells(self, updates: Mapping[Position, Cell]) -> "Grid":
        cells = list(self.cells)
        for (row, col), cell in updates.items():
            cells[self._index(row, col)] = cell
        return Grid(self.rows, self.cols, tuple(cells))

    def swapped(self, a: Position, b: Position) -> "Grid":
        return self.with_cells({a: self.at(*b), b: self.at(*a)})

    def is_full(self) -> bool:
        return all(cell is not None for cell in self.cells)

    def tile_ids(self) -> List[int]:
        return [cell.id for cell in self.cells if cell is not None]

    def type_counts(self) -> Counter:
        return Counter(cell.type_name for cell in self.cells if cell is not None)

    def position_of(self, tile_id: int) -> Optional[Position]:
        for index, cell in enumerate(self.cells):
            if cell is not None and cell.id == tile_id:
                return divmod(index, self.cols)
        return None

    def type_map(self) -> Dict[Position, str]:
        """Mapping of occupied positions to type names."""
        return {
            divmod(index, self.cols): cell.type_name
            for index, cell in enumerate(self.cells)
            if cell is not None
        }

    def to_rows(self) -> List[List[Optional[str]]]:
        return [
            [self.type_at(row, col) for col in range(self.cols)]
            for row in range(self.rows)
        ]


def is_adjacent(a: Position, b: Position) -> bool:
    ar, ac = a
    br, bc = b
    return abs(ar - br) + abs(ac - bc) == 1