from __future__ import annotations

import itertools
import random
from typing import Dict, Iterable, List, Sequence, Tuple

from match_engine.components.grid import Grid
from match_engine.config import EngineConfig
from match_engine.systems.board import BoardSystem
from match_engine.systems.hint_system import HintSystem
from match_engine.systems.match import MatchSystem
from match_engine.systems.shuffle_system import ShuffleSystem
from match_engine.world import create_world

PALETTE = "ABCDEFGH"
CONFIG = EngineConfig(tile_types=tuple(PALETTE))


class ScriptedRandom:
    """Random source whose choice() walks a fixed cycle of tile types.

    Choices over anything else (shuffle repair picks positions) and shuffle()
    fall back to a seeded Random so tests stay deterministic.
    """

    def __init__(self, sequence: Iterable[str], seed: int = 0):
        self._cycle = itertools.cycle(list(sequence))
        self._fallback = random.Random(seed)

    def choice(self, seq):
        value = next(self._cycle)
        if value in seq:
            return value
        return self._fallback.choice(seq)

    def shuffle(self, seq) -> None:
        self._fallback.shuffle(seq)


def stalemate_rows(rows: int = 8, cols: int = 8) -> List[List[str]]:
    """Diagonal A/B/C stripes: no runs and no swap that creates one."""
    pattern = "ABC"
    return [[pattern[(r + c) % 3] for c in range(cols)] for r in range(rows)]


def with_overrides(rows: List[List[str]], overrides: Dict[Tuple[int, int], str]) -> List[List[str]]:
    out = [list(row) for row in rows]
    for (r, c), type_name in overrides.items():
        out[r][c] = type_name
    return out


def three_run_rows() -> List[List[str]]:
    """Swapping (0,2) with (1,2) completes D-D-D across the top row."""
    return with_overrides(stalemate_rows(), {(0, 0): "D", (0, 1): "D", (1, 2): "D"})


def five_run_rows() -> List[List[str]]:
    """Swapping (0,2) with (1,2) completes five Ds across the top row."""
    return with_overrides(
        stalemate_rows(),
        {(0, 0): "D", (0, 1): "D", (0, 3): "D", (0, 4): "D", (1, 2): "D"},
    )


def has_run(grid: Grid) -> bool:
    # Independent scan so detector bugs cannot hide themselves.
    rows = grid.to_rows()
    lines: List[Sequence] = list(rows)
    lines += [[rows[r][c] for r in range(grid.rows)] for c in range(grid.cols)]
    for line in lines:
        run = 1
        for prev, cur in zip(line, line[1:]):
            run = run + 1 if cur is not None and cur == prev else 1
            if run >= 3:
                return True
    return False


def ids_unique(grid: Grid) -> bool:
    ids = grid.tile_ids()
    return len(ids) == len(set(ids))


def start_session(bus, rows: List[List[str]], refill: Sequence[str] = ("E", "F", "G"), config: EngineConfig = CONFIG):
    """Fresh world on a fixed board with every session system wired to ``bus``."""
    entity = create_world(config, rng=ScriptedRandom(refill), grid=Grid.from_rows(rows))
    board = BoardSystem(bus)
    MatchSystem(bus)
    ShuffleSystem(bus)
    HintSystem(bus)
    return entity, board


def record(bus, *names: str) -> List[Tuple[str, dict]]:
    events: List[Tuple[str, dict]] = []
    for name in names:
        bus.subscribe(name, lambda sender, _name=name, **payload: events.append((_name, payload)))
    return events
