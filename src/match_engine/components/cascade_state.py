from dataclasses import dataclass


@dataclass(slots=True)
class CascadeState:
    """Tracks whether cascade events are still being published."""

    cascade_active: bool = False
    cascade_depth: int = 0
