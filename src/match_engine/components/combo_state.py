from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class ComboState:
    """Combo level carried across player actions.

    A chain that starts within ``window_ms`` of the previous chain's start
    raises the level by one; a later chain starts over at zero. Time is
    passed in by the caller, so there is no clock here.
    """

    window_ms: int
    level: int = 0
    last_chain_start_ms: Optional[float] = None

    def start_chain(self, now_ms: Optional[float]) -> int:
        if now_ms is None:
            # Untimed actions never build combo.
            self.reset()
            return 0
        last = self.last_chain_start_ms
        if last is not None and 0 <= now_ms - last < self.window_ms:
            self.level += 1
        else:
            self.level = 0
        self.last_chain_start_ms = now_ms
        return self.level

    def reset(self) -> None:
        self.level = 0
        self.last_chain_start_ms = None
