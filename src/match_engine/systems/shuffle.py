from __future__ import annotations

import logging
from typing import Dict, List

from match_engine.components.grid import Grid, Position, Tile
from match_engine.components.tile_spawner import TileSpawner
from match_engine.constants import SHUFFLE_MAX_ATTEMPTS
from match_engine.errors import ShuffleFailed, UnstableGridError
from match_engine.systems.board_ops import has_line_match, positions_in_runs

logger = logging.getLogger(__name__)


def _layout_grid(rows: int, cols: int, layout: List[str]) -> Grid:
    return Grid(rows, cols, tuple(Tile(type_name, index) for index, type_name in enumerate(layout)))


def _clean_trade(types: Dict[Position, str], src: Position, dst: Position) -> bool:
    traded = types.copy()
    traded[src], traded[dst] = traded[dst], traded[src]
    return not (has_line_match(traded, src) or has_line_match(traded, dst))


def shuffle_grid(grid: Grid, spawner: TileSpawner, *, max_attempts: int = SHUFFLE_MAX_ATTEMPTS) -> Grid:
    """Re-deal the board's tile types into a run-free arrangement.

    The multiset of types is kept; every tile gets a new id. Runs left by the
    random permutation are repaired one swap at a time: a cell inside a run
    trades types with a differently-typed cell outside every run, preferring
    trades that leave both cells out of any run.
    """
    if not grid.is_full():
        raise UnstableGridError("Cannot shuffle a grid with empty cells")
    rows, cols = grid.rows, grid.cols
    layout = [cell.type_name for cell in grid.cells]
    spawner.rng.shuffle(layout)
    attempts = 0
    while True:
        in_runs = positions_in_runs(_layout_grid(rows, cols, layout))
        if not in_runs:
            break
        if attempts >= max_attempts:
            raise ShuffleFailed(attempts, len(in_runs))
        attempts += 1
        src = spawner.rng.choice(sorted(in_runs))
        src_type = layout[src[0] * cols + src[1]]
        candidates = [
            divmod(index, cols)
            for index, type_name in enumerate(layout)
            if divmod(index, cols) not in in_runs and type_name != src_type
        ]
        if not candidates:
            spawner.rng.shuffle(layout)
            continue
        types = {divmod(index, cols): type_name for index, type_name in enumerate(layout)}
        clean = [dst for dst in candidates if _clean_trade(types, src, dst)]
        dst = spawner.rng.choice(clean or candidates)
        src_index, dst_index = src[0] * cols + src[1], dst[0] * cols + dst[1]
        layout[src_index], layout[dst_index] = layout[dst_index], layout[src_index]
    logger.debug("shuffle settled after %d repair attempt(s)", attempts)
    return Grid(rows, cols, tuple(spawner.spawn(type_name) for type_name in layout))
