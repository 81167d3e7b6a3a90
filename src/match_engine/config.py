from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Tuple

from match_engine import constants
from match_engine.errors import ConfigError


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Session configuration, supplied once and immutable afterwards.

    Tile types are de-duplicated preserving order. Validation happens at
    construction so a bad admin setting fails before a board is dealt.
    """

    rows: int = constants.GRID_ROWS
    cols: int = constants.GRID_COLS
    tile_types: Tuple[str, ...] = field(default=constants.TILE_TYPES)
    base_points: int = constants.BASE_POINTS
    bonus_four: int = constants.BONUS_FOUR
    bonus_five: int = constants.BONUS_FIVE
    combo_multiplier: float = constants.COMBO_MULTIPLIER
    combo_window_ms: int = constants.COMBO_WINDOW_MS
    shuffle_quota: int = constants.SHUFFLE_QUOTA
    shuffle_max_attempts: int = constants.SHUFFLE_MAX_ATTEMPTS
    max_cascade_steps: int = constants.MAX_CASCADE_STEPS
    hint_delay_ms: int = constants.HINT_DELAY_MS

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ConfigError(f"Grid dimensions must be positive, got {self.rows}x{self.cols}")
        seen: set[str] = set()
        filtered: list[str] = []
        for name in self.tile_types:
            if not name:
                raise ConfigError("Tile type names must be non-empty")
            if name not in seen:
                filtered.append(name)
                seen.add(name)
        if len(filtered) < constants.MIN_TILE_TYPES:
            raise ConfigError(
                f"At least {constants.MIN_TILE_TYPES} distinct tile types are required, got {len(filtered)}"
            )
        # Frozen dataclass: normalize through object.__setattr__.
        object.__setattr__(self, "tile_types", tuple(filtered))
        for name in ("base_points", "bonus_four", "bonus_five", "shuffle_quota"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must not be negative")
        if self.combo_multiplier < 0:
            raise ConfigError("combo_multiplier must not be negative")
        if self.combo_window_ms < 0 or self.hint_delay_ms < 0:
            raise ConfigError("Time windows must not be negative")
        if self.shuffle_max_attempts < 1 or self.max_cascade_steps < 1:
            raise ConfigError("Retry caps must be at least 1")

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "EngineConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")
        kwargs = dict(values)
        if "tile_types" in kwargs:
            kwargs["tile_types"] = tuple(kwargs["tile_types"])
        return cls(**kwargs)