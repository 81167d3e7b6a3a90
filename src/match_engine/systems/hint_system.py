import logging

from match_engine.events.bus import (
    EventBus,
    EVENT_BOARD_STALEMATE,
    EVENT_HINT_AVAILABLE,
    EVENT_HINT_REQUEST,
    EVENT_TICK,
)
from match_engine.components.board import Board
from match_engine.components.cascade_state import CascadeState
from match_engine.components.idle_timer import IdleTimer
from match_engine.components.shuffle_quota import ShuffleQuota
from match_engine.systems.board_ops import ensure_stable, find_hint
from match_engine.systems.session_utils import session_component

logger = logging.getLogger(__name__)


class HintSystem:
    """Offers a hint once the player has been idle for ``hint_delay_ms``.

    Time only moves through ``tick`` payloads. One hint per idle period;
    any activity re-arms the timer.
    """
    def __init__(self, event_bus: EventBus):
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_HINT_REQUEST, self.on_hint_request)

    def on_tick(self, sender, **kwargs):
        now_ms = kwargs.get('now_ms')
        if now_ms is None:
            return
        if session_component(CascadeState).cascade_active:
            return
        if not session_component(IdleTimer).due(now_ms):
            return
        self._offer_hint()

    def on_hint_request(self, sender, **kwargs):
        if session_component(CascadeState).cascade_active:
            return
        self._offer_hint()

    def _offer_hint(self) -> None:
        grid = session_component(Board).grid
        ensure_stable(grid)
        timer = session_component(IdleTimer)
        timer.hinted = True
        pair = find_hint(grid)
        timer.hint = pair
        if pair is None:
            remaining = session_component(ShuffleQuota).remaining
            logger.debug("hint requested on a board with no move; %d shuffle(s) remaining", remaining)
            self.event_bus.emit(EVENT_BOARD_STALEMATE, shuffles_remaining=remaining)
            return
        src, dst = pair
        self.event_bus.emit(EVENT_HINT_AVAILABLE, src=src, dst=dst)
