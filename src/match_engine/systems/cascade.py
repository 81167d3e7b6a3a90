from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from match_engine.components.grid import Grid, Position
from match_engine.components.tile_spawner import TileSpawner
from match_engine.config import EngineConfig
from match_engine.errors import CascadeLimitExceeded
from match_engine.systems.board_ops import GravityMove, apply_gravity, find_matches, remove_tiles
from match_engine.systems.scoring import score_matches

logger = logging.getLogger(__name__)

TypeEntry = Tuple[int, int, str]


@dataclass(slots=True)
class CascadeStep:
    """One detect/score/remove/gravity/refill round of a cascade."""

    depth: int
    combo_level: int
    positions: List[Position]
    run_lengths: Dict[int, int]
    types: List[TypeEntry]
    score: int
    moves: List[GravityMove]
    spawned: List[Position]
    grid: Grid


@dataclass(slots=True)
class CascadeResult:
    grid: Grid
    steps: List[CascadeStep] = field(default_factory=list)

    @property
    def score(self) -> int:
        return sum(step.score for step in self.steps)

    @property
    def depth(self) -> int:
        return len(self.steps)


def resolve_cascade(
    grid: Grid,
    spawner: TileSpawner,
    config: EngineConfig,
    *,
    base_combo: int = 0,
) -> CascadeResult:
    """Resolve matches until the board is stable.

    Step ``n`` (from 0) of the chain scores at combo level ``base_combo + n``.
    Raises CascadeLimitExceeded rather than returning a board that still
    holds runs.
    """
    result = CascadeResult(grid=grid)
    current = grid
    while True:
        matches = find_matches(current)
        if not matches:
            break
        depth = len(result.steps)
        if depth >= config.max_cascade_steps:
            raise CascadeLimitExceeded(depth)
        combo_level = base_combo + depth
        score = score_matches(matches.run_lengths, combo_level, config)
        types = [(row, col, current.type_at(row, col)) for row, col in matches.positions]
        cleared = remove_tiles(current, matches.positions)
        current, moves, spawned = apply_gravity(cleared, spawner)
        logger.debug(
            "cascade step %d: cleared %d tiles at combo %d for %d points, spawned %d",
            depth + 1, len(matches), combo_level, score, len(spawned),
        )
        result.steps.append(
            CascadeStep(
                depth=depth + 1,
                combo_level=combo_level,
                positions=matches.positions,
                run_lengths=matches.run_lengths,
                types=types,
                score=score,
                moves=moves,
                spawned=spawned,
                grid=current,
            )
        )
    result.grid = current
    return result
