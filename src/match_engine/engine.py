from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from match_engine.components.combo_state import ComboState
from match_engine.components.grid import Grid, Position, is_adjacent
from match_engine.components.tile_spawner import TileSpawner
from match_engine.config import EngineConfig
from match_engine.systems import board_ops
from match_engine.systems.cascade import CascadeStep, resolve_cascade
from match_engine.systems.shuffle import shuffle_grid

logger = logging.getLogger(__name__)


class SwapOutcome(Enum):
    INVALID_SELECTION = "invalid_selection"
    NO_EFFECT = "no_effect"
    MATCHED = "matched"


@dataclass(slots=True)
class SwapResult:
    grid: Grid
    outcome: SwapOutcome
    score_delta: int = 0
    combo_level_after: int = 0
    steps: List[CascadeStep] = field(default_factory=list)
    # Resolution is synchronous, so input may resume as soon as a result exists.
    idle: bool = True

    @property
    def matched(self) -> bool:
        return self.outcome is SwapOutcome.MATCHED


def attempt_swap(
    grid: Grid,
    src: Position,
    dst: Position,
    *,
    spawner: TileSpawner,
    config: EngineConfig,
    combo: ComboState,
    now_ms: Optional[float] = None,
) -> SwapResult:
    """Validate a player swap and, when it matches, resolve the full cascade.

    Bad coordinates and swaps that form no run come back as outcomes with the
    input grid untouched. ``combo`` is only advanced by committed swaps.
    """
    board_ops.ensure_stable(grid)
    if not (grid.in_bounds(src) and grid.in_bounds(dst)) or not is_adjacent(src, dst):
        return SwapResult(grid=grid, outcome=SwapOutcome.INVALID_SELECTION, combo_level_after=combo.level)
    swapped = grid.swapped(src, dst)
    if not board_ops.find_matches(swapped):
        return SwapResult(grid=grid, outcome=SwapOutcome.NO_EFFECT, combo_level_after=combo.level)
    spawner.reserve_past(grid.tile_ids())
    level = combo.start_chain(now_ms)
    cascade = resolve_cascade(swapped, spawner, config, base_combo=level)
    logger.debug(
        "swap %s<->%s resolved in %d step(s) for %d points (combo %d)",
        src, dst, cascade.depth, cascade.score, level,
    )
    return SwapResult(
        grid=cascade.grid,
        outcome=SwapOutcome.MATCHED,
        score_delta=cascade.score,
        combo_level_after=combo.level,
        steps=cascade.steps,
    )


class MatchEngine:
    """In-process facade over the board operations for one game session.

    Owns the configuration, the tile spawner (random source and id counter)
    and the combo state. Every operation expects a stable grid and raises
    UnstableGridError when handed anything else.
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        *,
        rng: random.Random | None = None,
        spawner: TileSpawner | None = None,
    ):
        self.config = config or EngineConfig()
        self.spawner = spawner or TileSpawner(self.config.tile_types, rng or random.Random())
        self.combo = ComboState(window_ms=self.config.combo_window_ms)

    def create_initial_grid(self) -> Grid:
        return board_ops.create_initial_grid(self.config.rows, self.config.cols, self.spawner)

    def adopt_grid(self, grid: Grid) -> Grid:
        """Accept a board built elsewhere, keeping future tile ids clear of its ids."""
        board_ops.ensure_stable(grid)
        self.spawner.reserve_past(grid.tile_ids())
        return grid

    def attempt_swap(self, grid: Grid, src: Position, dst: Position, now_ms: Optional[float] = None) -> SwapResult:
        return attempt_swap(
            grid, src, dst,
            spawner=self.spawner,
            config=self.config,
            combo=self.combo,
            now_ms=now_ms,
        )

    def find_hint(self, grid: Grid) -> Optional[board_ops.SwapPair]:
        board_ops.ensure_stable(grid)
        return board_ops.find_hint(grid)

    def has_moves(self, grid: Grid) -> bool:
        return self.find_hint(grid) is not None

    def shuffle(self, grid: Grid) -> Grid:
        board_ops.ensure_stable(grid)
        return shuffle_grid(grid, self.spawner, max_attempts=self.config.shuffle_max_attempts)
