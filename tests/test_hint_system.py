from match_engine.components.idle_timer import IdleTimer
from match_engine.events.bus import (
    EVENT_BOARD_STALEMATE,
    EVENT_CASCADE_STEP,
    EVENT_HINT_AVAILABLE,
    EVENT_HINT_REQUEST,
    EVENT_SHUFFLE_REQUEST,
    EVENT_TICK,
    EVENT_TILE_CLICK,
)
from match_engine.systems.session_utils import session_component

from tests.helpers import record, stalemate_rows, start_session, three_run_rows


def test_hint_after_idle_delay(bus):
    start_session(bus, three_run_rows())
    hints = record(bus, EVENT_HINT_AVAILABLE)
    bus.emit(EVENT_TICK, now_ms=0)
    bus.emit(EVENT_TICK, now_ms=5000)
    assert hints == []
    bus.emit(EVENT_TICK, now_ms=10000)
    assert hints == [(EVENT_HINT_AVAILABLE, {'src': (0, 2), 'dst': (1, 2)})]
    assert session_component(IdleTimer).hint == ((0, 2), (1, 2))


def test_one_hint_per_idle_period(bus):
    start_session(bus, three_run_rows())
    hints = record(bus, EVENT_HINT_AVAILABLE)
    for now in (0, 10000, 15000, 20000):
        bus.emit(EVENT_TICK, now_ms=now)
    assert len(hints) == 1

    bus.emit(EVENT_TILE_CLICK, row=5, col=5, now_ms=21000)
    assert session_component(IdleTimer).hint is None
    bus.emit(EVENT_TICK, now_ms=30000)
    assert len(hints) == 1
    bus.emit(EVENT_TICK, now_ms=31000)
    assert len(hints) == 2


def test_stalemate_reported_instead_of_hint(bus):
    start_session(bus, stalemate_rows())
    events = record(bus, EVENT_HINT_AVAILABLE, EVENT_BOARD_STALEMATE)
    bus.emit(EVENT_TICK, now_ms=0)
    bus.emit(EVENT_TICK, now_ms=10000)
    assert events == [(EVENT_BOARD_STALEMATE, {'shuffles_remaining': 3})]


def test_shuffle_resets_idle_timer(bus):
    start_session(bus, stalemate_rows())
    events = record(bus, EVENT_HINT_AVAILABLE, EVENT_BOARD_STALEMATE)
    bus.emit(EVENT_TICK, now_ms=0)
    bus.emit(EVENT_SHUFFLE_REQUEST, now_ms=8000)
    bus.emit(EVENT_TICK, now_ms=10000)
    assert events == []


def test_explicit_request_skips_the_delay(bus):
    start_session(bus, three_run_rows())
    hints = record(bus, EVENT_HINT_AVAILABLE)
    bus.emit(EVENT_HINT_REQUEST)
    assert hints == [(EVENT_HINT_AVAILABLE, {'src': (0, 2), 'dst': (1, 2)})]


def test_untimed_ticks_are_ignored(bus):
    start_session(bus, three_run_rows())
    hints = record(bus, EVENT_HINT_AVAILABLE)
    bus.emit(EVENT_TICK)
    bus.emit(EVENT_TICK, now_ms=None)
    assert hints == []
    assert session_component(IdleTimer).last_activity_ms is None


def test_hint_request_ignored_while_cascade_runs(bus):
    # Refill A,A,A completes a second run, so the first step leaves an unsettled board.
    start_session(bus, three_run_rows(), refill=("A", "A", "A", "E", "F", "G", "H"))
    events = record(bus, EVENT_HINT_AVAILABLE, EVENT_BOARD_STALEMATE)
    depths = []

    def ask_mid_cascade(sender, **payload):
        depths.append(payload['depth'])
        bus.emit(EVENT_HINT_REQUEST)

    bus.subscribe(EVENT_CASCADE_STEP, ask_mid_cascade)
    bus.emit(EVENT_TILE_CLICK, row=0, col=2)
    bus.emit(EVENT_TILE_CLICK, row=1, col=2)
    assert depths == [1, 2]
    assert events == []
    assert session_component(IdleTimer).hinted is False

    bus.emit(EVENT_HINT_REQUEST)
    assert len(events) == 1
