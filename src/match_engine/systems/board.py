import logging
from typing import Optional, Tuple

from match_engine.events.bus import (
    EventBus,
    EVENT_BOARD_SHUFFLED,
    EVENT_TILE_CLICK,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_SELECTED,
    EVENT_TILE_SWAP_INVALID,
    EVENT_TILE_SWAP_REQUEST,
)
from match_engine.components.board import Board
from match_engine.components.cascade_state import CascadeState
from match_engine.components.grid import is_adjacent
from match_engine.components.idle_timer import IdleTimer
from match_engine.components.selection import Selection
from match_engine.systems.session_utils import session_component

logger = logging.getLogger(__name__)


class BoardSystem:
    """Turns tile clicks into selections and swap requests.

    First click selects, the same tile again deselects, a non-adjacent tile
    becomes the new selection, and an adjacent tile requests a swap. A swap
    that is rejected leaves the second tile selected.
    """
    def __init__(self, event_bus: EventBus):
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_TILE_SWAP_INVALID, self.on_swap_invalid)
        self.event_bus.subscribe(EVENT_BOARD_SHUFFLED, self.on_board_shuffled)

    @property
    def selected(self) -> Optional[Tuple[int, int]]:
        return session_component(Selection).selected

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        if session_component(CascadeState).cascade_active:
            return
        board = session_component(Board)
        pos = (row, col)
        if not board.grid.in_bounds(pos):
            return
        now_ms = kwargs.get('now_ms')
        session_component(IdleTimer).touch(now_ms)
        selection = session_component(Selection)
        if selection.selected is None:
            self._select(selection, pos)
        elif selection.selected == pos:
            selection.selected = None
            self.event_bus.emit(EVENT_TILE_DESELECTED, reason='same_tile', prev_row=row, prev_col=col)
        elif is_adjacent(selection.selected, pos):
            src = selection.selected
            selection.selected = None
            self.event_bus.emit(EVENT_TILE_SWAP_REQUEST, src=src, dst=pos, now_ms=now_ms)
        else:
            self._select(selection, pos)

    def on_swap_invalid(self, sender, **kwargs):
        dst = kwargs.get('dst')
        if dst is None:
            return
        dst = tuple(dst)
        if not session_component(Board).grid.in_bounds(dst):
            return
        self._select(session_component(Selection), dst)

    def on_board_shuffled(self, sender, **kwargs):
        selection = session_component(Selection)
        prev = selection.selected
        if prev is not None:
            selection.selected = None
            self.event_bus.emit(EVENT_TILE_DESELECTED, reason='shuffle', prev_row=prev[0], prev_col=prev[1])

    def _select(self, selection: Selection, pos: Tuple[int, int]) -> None:
        selection.selected = pos
        logger.debug("tile selected at %s", pos)
        self.event_bus.emit(EVENT_TILE_SELECTED, row=pos[0], col=pos[1])
