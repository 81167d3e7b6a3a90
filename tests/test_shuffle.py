import random

import pytest

from match_engine.components.grid import Grid
from match_engine.components.tile_spawner import TileSpawner
from match_engine.engine import MatchEngine
from match_engine.errors import ShuffleFailed, UnstableGridError
from match_engine.systems.board_ops import find_matches
from match_engine.systems.shuffle import shuffle_grid

from tests.helpers import CONFIG, PALETTE, has_run, ids_unique, stalemate_rows, with_overrides


@pytest.mark.parametrize("seed", range(10))
def test_shuffle_keeps_types_and_leaves_no_runs(seed):
    engine = MatchEngine(CONFIG, rng=random.Random(seed))
    grid = engine.adopt_grid(Grid.from_rows(stalemate_rows()))
    shuffled = engine.shuffle(grid)
    assert shuffled.type_counts() == grid.type_counts()
    assert not find_matches(shuffled)
    assert not has_run(shuffled)
    assert shuffled.is_full()


def test_shuffle_regenerates_ids():
    engine = MatchEngine(rng=random.Random(5))
    grid = engine.create_initial_grid()
    shuffled = engine.shuffle(grid)
    assert ids_unique(shuffled)
    assert not set(shuffled.tile_ids()) & set(grid.tile_ids())


@pytest.mark.parametrize("seed", range(5))
def test_shuffle_of_dealt_board(seed):
    engine = MatchEngine(rng=random.Random(seed))
    grid = engine.create_initial_grid()
    for _ in range(3):
        shuffled = engine.shuffle(grid)
        assert shuffled.type_counts() == grid.type_counts()
        assert not find_matches(shuffled)
        grid = shuffled


def test_impossible_shuffle_is_an_internal_error():
    # Eight of nine tiles share a type: every arrangement holds a run.
    grid = Grid.from_rows(["AAA", "AAA", "AAB"])
    spawner = TileSpawner(PALETTE, random.Random(1))
    with pytest.raises(ShuffleFailed) as excinfo:
        shuffle_grid(grid, spawner, max_attempts=10)
    assert excinfo.value.attempts == 10


def test_shuffle_requires_a_stable_grid():
    engine = MatchEngine(CONFIG, rng=random.Random(0))
    rows = with_overrides(stalemate_rows(), {(7, 5): "D", (7, 6): "D", (7, 7): "D"})
    with pytest.raises(UnstableGridError):
        engine.shuffle(Grid.from_rows(rows))
    with pytest.raises(UnstableGridError):
        shuffle_grid(Grid.from_rows(stalemate_rows()).with_cell(0, 0, None), engine.spawner)
