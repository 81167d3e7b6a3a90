import logging
import random

import esper

from match_engine.components.board import Board
from match_engine.components.cascade_state import CascadeState
from match_engine.components.combo_state import ComboState
from match_engine.components.grid import Grid
from match_engine.components.idle_timer import IdleTimer
from match_engine.components.score_board import ScoreBoard
from match_engine.components.selection import Selection
from match_engine.components.session import Session
from match_engine.components.shuffle_quota import ShuffleQuota
from match_engine.components.tile_spawner import TileSpawner
from match_engine.config import EngineConfig
from match_engine.systems import board_ops

logger = logging.getLogger(__name__)

DEFAULT_WORLD = "default"


def create_world(
    config: EngineConfig | None = None,
    *,
    rng: random.Random | None = None,
    grid: Grid | None = None,
    name: str = DEFAULT_WORLD,
) -> int:
    """Switch esper to ``name``, wipe it, and create the session entity.

    A supplied ``grid`` must be stable; otherwise a fresh match-free board is
    dealt. Returns the session entity id.
    """
    config = config or EngineConfig()
    esper.switch_world(name)
    esper.clear_database()

    spawner = TileSpawner(config.tile_types, rng or random.Random())
    if grid is None:
        grid = board_ops.create_initial_grid(config.rows, config.cols, spawner)
    else:
        board_ops.ensure_stable(grid)
        spawner.reserve_past(grid.tile_ids())

    session_entity = esper.create_entity(
        Session(config=config, spawner=spawner),
        Board(rows=grid.rows, cols=grid.cols, grid=grid),
        ScoreBoard(),
        ComboState(window_ms=config.combo_window_ms),
        ShuffleQuota(remaining=config.shuffle_quota),
        Selection(),
        CascadeState(),
        IdleTimer(delay_ms=config.hint_delay_ms),
    )
    logger.debug("session world %r ready with %dx%d board", name, grid.rows, grid.cols)
    return session_entity
