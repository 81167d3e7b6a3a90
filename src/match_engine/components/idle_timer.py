from dataclasses import dataclass
from typing import Optional, Tuple

Position = Tuple[int, int]


@dataclass(slots=True)
class IdleTimer:
    """Idle tracking for the hint policy.

    ``hinted`` is set once a hint has been offered for the current idle
    period so the same stall does not produce a hint on every tick.
    """

    delay_ms: int
    last_activity_ms: Optional[float] = None
    hinted: bool = False
    hint: Optional[Tuple[Position, Position]] = None

    def touch(self, now_ms: Optional[float]) -> None:
        if now_ms is not None:
            self.last_activity_ms = now_ms
        self.hinted = False
        self.hint = None

    def due(self, now_ms: float) -> bool:
        if self.hinted:
            return False
        if self.last_activity_ms is None:
            self.last_activity_ms = now_ms
            return False
        return now_ms - self.last_activity_ms >= self.delay_ms
