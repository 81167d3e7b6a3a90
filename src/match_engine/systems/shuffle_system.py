import logging

from match_engine.events.bus import (
    EventBus,
    EVENT_BOARD_SHUFFLED,
    EVENT_SHUFFLE_REJECTED,
    EVENT_SHUFFLE_REQUEST,
)
from match_engine.components.board import Board
from match_engine.components.cascade_state import CascadeState
from match_engine.components.idle_timer import IdleTimer
from match_engine.components.session import Session
from match_engine.components.shuffle_quota import ShuffleQuota
from match_engine.systems.board_ops import ensure_stable
from match_engine.systems.session_utils import session_component
from match_engine.systems.shuffle import shuffle_grid

logger = logging.getLogger(__name__)


class ShuffleSystem:
    """Spends the session's shuffle quota on player request.

    An exhausted quota is reported with ``shuffle_rejected``; the board is
    left untouched in that case.
    """
    def __init__(self, event_bus: EventBus):
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_SHUFFLE_REQUEST, self.on_shuffle_request)

    def on_shuffle_request(self, sender, **kwargs):
        quota = session_component(ShuffleQuota)
        if session_component(CascadeState).cascade_active:
            self.event_bus.emit(EVENT_SHUFFLE_REJECTED, reason='cascade_active', remaining=quota.remaining)
            return
        if quota.remaining <= 0:
            logger.debug("shuffle rejected: quota exhausted")
            self.event_bus.emit(EVENT_SHUFFLE_REJECTED, reason='quota_exhausted', remaining=0)
            return
        session = session_component(Session)
        board = session_component(Board)
        ensure_stable(board.grid)
        board.grid = shuffle_grid(board.grid, session.spawner, max_attempts=session.config.shuffle_max_attempts)
        quota.consume()
        session_component(IdleTimer).touch(kwargs.get('now_ms'))
        self.event_bus.emit(EVENT_BOARD_SHUFFLED, remaining=quota.remaining, grid=board.grid)
