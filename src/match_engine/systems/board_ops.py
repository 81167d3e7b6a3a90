from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Set, Tuple

from match_engine.components.grid import Cell, Grid, Position
from match_engine.components.tile_spawner import TileSpawner
from match_engine.errors import UnstableGridError

SwapPair = Tuple[Position, Position]


@dataclass(slots=True)
class GravityMove:
    tile_id: int
    source: Position
    target: Position
    type_name: str


@dataclass(slots=True)
class MatchResult:
    """Tiles taking part in a run of three or more.

    ``run_lengths`` maps tile id to the longest single-direction run through
    that tile. ``runs`` keeps each qualifying run as scanned (rows first).
    """

    ids: FrozenSet[int] = frozenset()
    run_lengths: Dict[int, int] = field(default_factory=dict)
    positions: List[Position] = field(default_factory=list)
    runs: List[List[Position]] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.ids)

    def __len__(self) -> int:
        return len(self.ids)


def create_initial_grid(rows: int, cols: int, spawner: TileSpawner) -> Grid:
    """Fill a board left-to-right, top-to-bottom without creating any run.

    Only the left pair and the upper pair can complete a run at placement
    time, so excluding their shared type at each cell is enough.
    """
    layout: List[List[str]] = []
    cells: List[Cell] = []
    for row in range(rows):
        row_values: List[str] = []
        for col in range(cols):
            available = list(spawner.tile_types)
            if col >= 2:
                left1 = row_values[col - 1]
                left2 = row_values[col - 2]
                if left1 == left2:
                    available = [t for t in available if t != left1]
            if row >= 2:
                up1 = layout[row - 1][col]
                up2 = layout[row - 2][col]
                if up1 == up2:
                    available = [t for t in available if t != up1]
            type_name = spawner.random_type(available)
            row_values.append(type_name)
            cells.append(spawner.spawn(type_name))
        layout.append(row_values)
    return Grid(rows, cols, tuple(cells))


def _scan_line(grid: Grid, line: Sequence[Position]) -> List[List[Position]]:
    runs: List[List[Position]] = []
    run: List[Position] = []
    last_type: Optional[str] = None
    for pos in line:
        tval = grid.type_at(*pos)
        if tval is not None and tval == last_type:
            run.append(pos)
        else:
            if len(run) >= 3:
                runs.append(run)
            run = [pos] if tval is not None else []
            last_type = tval
    if len(run) >= 3:
        runs.append(run)
    return runs


def find_runs(grid: Grid) -> List[List[Position]]:
    """Every maximal horizontal or vertical run of length >= 3."""
    runs: List[List[Position]] = []
    for r in range(grid.rows):
        runs.extend(_scan_line(grid, [(r, c) for c in range(grid.cols)]))
    for c in range(grid.cols):
        runs.extend(_scan_line(grid, [(r, c) for r in range(grid.rows)]))
    return runs


def find_matches(grid: Grid) -> MatchResult:
    runs = find_runs(grid)
    if not runs:
        return MatchResult()
    run_lengths: Dict[int, int] = {}
    by_position: Dict[Position, int] = {}
    for run in runs:
        for pos in run:
            tile = grid.at(*pos)
            # A tile in both a row run and a column run keeps the longer one.
            run_lengths[tile.id] = max(run_lengths.get(tile.id, 0), len(run))
            by_position[pos] = tile.id
    return MatchResult(
        ids=frozenset(run_lengths),
        run_lengths=run_lengths,
        positions=sorted(by_position),
        runs=runs,
    )


def is_stable(grid: Grid) -> bool:
    return grid.is_full() and not find_runs(grid)


def ensure_stable(grid: Grid) -> None:
    if not grid.is_full():
        raise UnstableGridError("Grid contains empty cells outside a cascade")
    runs = find_runs(grid)
    if runs:
        raise UnstableGridError(f"Grid contains {len(runs)} run(s) while expected stable: {runs}")


def remove_tiles(grid: Grid, positions: Iterable[Position]) -> Grid:
    return grid.with_cells({pos: None for pos in positions})


def compute_gravity_moves(grid: Grid) -> List[GravityMove]:
    moves: List[GravityMove] = []
    for col in range(grid.cols):
        target_row = grid.rows - 1
        for row in range(grid.rows - 1, -1, -1):
            tile = grid.at(row, col)
            if tile is None:
                continue
            if row != target_row:
                moves.append(GravityMove(tile.id, (row, col), (target_row, col), tile.type_name))
            target_row -= 1
    return moves


def apply_gravity(grid: Grid, spawner: TileSpawner) -> Tuple[Grid, List[GravityMove], List[Position]]:
    """Drop surviving tiles, then refill the vacated top cells.

    Refilled tiles are unconstrained random draws; they may complete new runs.
    Returns the settled grid, the moves made, and the spawned positions.
    """
    moves = compute_gravity_moves(grid)
    updates: Dict[Position, Cell] = {}
    for move in moves:
        updates[move.source] = None
    for move in moves:
        updates[move.target] = grid.at(*move.source)
    settled = grid.with_cells(updates)
    spawned: List[Position] = []
    refill: Dict[Position, Cell] = {}
    for col in range(settled.cols):
        for row in range(settled.rows):
            if settled.at(row, col) is not None:
                break
            refill[(row, col)] = spawner.spawn()
            spawned.append((row, col))
    return settled.with_cells(refill), moves, spawned


def has_line_match(types: Dict[Position, str], pos: Position) -> bool:
    """Return True if a horizontal or vertical run of 3+ passes through pos."""
    row, col = pos
    tval = types.get(pos)
    if tval is None:
        return False
    h_len = 1
    c_left = col - 1
    while types.get((row, c_left)) == tval:
        h_len += 1
        c_left -= 1
    c_right = col + 1
    while types.get((row, c_right)) == tval:
        h_len += 1
        c_right += 1
    if h_len >= 3:
        return True
    v_len = 1
    r_up = row - 1
    while types.get((r_up, col)) == tval:
        v_len += 1
        r_up -= 1
    r_down = row + 1
    while types.get((r_down, col)) == tval:
        v_len += 1
        r_down += 1
    return v_len >= 3


def swap_creates_match(
    grid: Grid, src: Position, dst: Position, *, types: Dict[Position, str] | None = None
) -> bool:
    """Return True if swapping src/dst on a stable grid would create a run.

    On a stable grid any new run must pass through one of the two swapped
    cells, so only their lines are checked.
    """
    tile_map = types if types is not None else grid.type_map()
    if src not in tile_map or dst not in tile_map:
        return False
    if tile_map[src] == tile_map[dst]:
        return False
    swapped = tile_map.copy()
    swapped[src], swapped[dst] = swapped[dst], swapped[src]
    return has_line_match(swapped, src) or has_line_match(swapped, dst)


def _candidate_swaps(grid: Grid) -> Iterable[SwapPair]:
    for row in range(grid.rows):
        for col in range(grid.cols):
            pos = (row, col)
            if col + 1 < grid.cols:
                yield pos, (row, col + 1)
            if row + 1 < grid.rows:
                yield pos, (row + 1, col)


def find_valid_swaps(grid: Grid) -> List[SwapPair]:
    """Enumerate adjacent swaps that would produce a match, row-major, right before down."""
    tile_map = grid.type_map()
    return [
        (src, dst)
        for src, dst in _candidate_swaps(grid)
        if swap_creates_match(grid, src, dst, types=tile_map)
    ]


def find_hint(grid: Grid) -> Optional[SwapPair]:
    """First valid swap in scan order, or None when the board has no move."""
    tile_map = grid.type_map()
    for src, dst in _candidate_swaps(grid):
        if swap_creates_match(grid, src, dst, types=tile_map):
            return src, dst
    return None


def positions_in_runs(grid: Grid) -> Set[Position]:
    return {pos for run in find_runs(grid) for pos in run}