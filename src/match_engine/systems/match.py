import logging

from match_engine.events.bus import (
    EventBus,
    EVENT_BOARD_STALEMATE,
    EVENT_CASCADE_COMPLETE,
    EVENT_CASCADE_STEP,
    EVENT_GRAVITY_APPLIED,
    EVENT_MATCH_CLEARED,
    EVENT_REFILL_COMPLETED,
    EVENT_SCORE_CHANGED,
    EVENT_TILE_SWAP_INVALID,
    EVENT_TILE_SWAP_REQUEST,
    EVENT_TILE_SWAP_VALID,
)
from match_engine.components.board import Board
from match_engine.components.cascade_state import CascadeState
from match_engine.components.combo_state import ComboState
from match_engine.components.idle_timer import IdleTimer
from match_engine.components.score_board import ScoreBoard
from match_engine.components.session import Session
from match_engine.components.shuffle_quota import ShuffleQuota
from match_engine.engine import attempt_swap
from match_engine.systems.board_ops import find_hint
from match_engine.systems.session_utils import session_component

logger = logging.getLogger(__name__)


class MatchSystem:
    """Runs swap requests through the engine and publishes the cascade.

    Every step is published in order (cascade step, cleared tiles, gravity,
    refill) so a renderer can pace its animations; ``cascade_complete`` is the
    signal that input may resume.
    """
    def __init__(self, event_bus: EventBus):
        self.event_bus = event_bus
        event_bus.subscribe(EVENT_TILE_SWAP_REQUEST, self.on_swap_request)

    def on_swap_request(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if src is None or dst is None:
            return
        src, dst = tuple(src), tuple(dst)
        session_component(IdleTimer).touch(kwargs.get('now_ms'))
        cascade_state = session_component(CascadeState)
        if cascade_state.cascade_active:
            self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst, reason='cascade_active')
            return
        session = session_component(Session)
        board = session_component(Board)
        result = attempt_swap(
            board.grid, src, dst,
            spawner=session.spawner,
            config=session.config,
            combo=session_component(ComboState),
            now_ms=kwargs.get('now_ms'),
        )
        if not result.matched:
            self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst, reason=result.outcome.value)
            return
        self.event_bus.emit(EVENT_TILE_SWAP_VALID, src=src, dst=dst)

        cascade_state.cascade_active = True
        try:
            for step in result.steps:
                board.grid = step.grid
                cascade_state.cascade_depth = step.depth
                self.event_bus.emit(
                    EVENT_CASCADE_STEP,
                    depth=step.depth,
                    combo_level=step.combo_level,
                    positions=step.positions,
                    score=step.score,
                    grid=step.grid,
                )
                self.event_bus.emit(
                    EVENT_MATCH_CLEARED,
                    positions=step.positions,
                    types=step.types,
                    run_lengths=step.run_lengths,
                )
                self.event_bus.emit(
                    EVENT_GRAVITY_APPLIED,
                    moves=[
                        {'id': move.tile_id, 'from': move.source, 'to': move.target, 'type_name': move.type_name}
                        for move in step.moves
                    ],
                )
                self.event_bus.emit(EVENT_REFILL_COMPLETED, new_tiles=step.spawned)
        finally:
            cascade_state.cascade_active = False

        board.grid = result.grid
        score = session_component(ScoreBoard)
        score.total += result.score_delta
        score.last_delta = result.score_delta
        score.matches += 1
        self.event_bus.emit(
            EVENT_SCORE_CHANGED,
            total=score.total,
            delta=result.score_delta,
            combo_level=result.combo_level_after,
        )
        self.event_bus.emit(
            EVENT_CASCADE_COMPLETE,
            depth=cascade_state.cascade_depth,
            score=result.score_delta,
            grid=result.grid,
        )
        if find_hint(result.grid) is None:
            remaining = session_component(ShuffleQuota).remaining
            logger.debug("no valid move left after cascade; %d shuffle(s) remaining", remaining)
            self.event_bus.emit(EVENT_BOARD_STALEMATE, shuffles_remaining=remaining)
