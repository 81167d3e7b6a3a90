from dataclasses import dataclass

from match_engine.components.tile_spawner import TileSpawner
from match_engine.config import EngineConfig

@dataclass(slots=True)
class Session:
    """Tag-plus-context component on the single session entity."""
    config: EngineConfig
    spawner: TileSpawner
