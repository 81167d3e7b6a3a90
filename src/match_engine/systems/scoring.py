from __future__ import annotations

import math
from fractions import Fraction
from typing import Mapping

from match_engine.config import EngineConfig


def combo_factor(combo_level: int, config: EngineConfig) -> Fraction:
    # Exact decimal value of the multiplier, so 0.7 scores as 7/10 and not 0.69999...
    return 1 + combo_level * Fraction(str(config.combo_multiplier))


def run_bonus(run_length: int, config: EngineConfig) -> int:
    # Five-or-longer replaces the four bonus rather than stacking on it.
    if run_length >= 5:
        return config.bonus_five
    if run_length >= 4:
        return config.bonus_four
    return 0


def tile_score(run_length: int, combo_level: int, config: EngineConfig) -> int:
    """Points for one removed tile, floored after the combo factor."""
    return math.floor((config.base_points + run_bonus(run_length, config)) * combo_factor(combo_level, config))


def score_matches(run_lengths: Mapping[int, int], combo_level: int, config: EngineConfig) -> int:
    return sum(tile_score(length, combo_level, config) for length in run_lengths.values())
