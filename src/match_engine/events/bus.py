from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references so systems that are not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: now_ms=float


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_TILE_CLICK = "tile_click"                    # payload: row, col, now_ms=float|None
EVENT_SHUFFLE_REQUEST = "shuffle_request"          # payload: now_ms=float|None
EVENT_HINT_REQUEST = "hint_request"                # payload: now_ms=float|None


# ============================================================================
# TILE & BOARD MECHANICS
# ============================================================================
EVENT_TILE_SELECTED = "tile_selected"              # payload: row, col
EVENT_TILE_DESELECTED = "tile_deselected"          # payload: reason=str, prev_row, prev_col
EVENT_TILE_SWAP_REQUEST = "tile_swap_request"      # payload: src=(r,c), dst=(r,c), now_ms=float|None
EVENT_TILE_SWAP_VALID = "tile_swap_valid"          # payload: src=(r,c), dst=(r,c)
EVENT_TILE_SWAP_INVALID = "tile_swap_invalid"      # payload: src=(r,c), dst=(r,c), reason=str
EVENT_MATCH_CLEARED = "match_cleared"              # payload: positions=[(r,c),...], types=[(r,c,type),...], run_lengths=dict
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: moves=[{'id','from','to','type_name'},...]
EVENT_REFILL_COMPLETED = "refill_completed"        # payload: new_tiles=[(r,c),...]
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int, combo_level=int, positions=[(r,c),...], score=int, grid=Grid
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int, score=int, grid=Grid
EVENT_BOARD_SHUFFLED = "board_shuffled"            # payload: remaining=int, grid=Grid
EVENT_SHUFFLE_REJECTED = "shuffle_rejected"        # payload: reason=str, remaining=int
EVENT_BOARD_STALEMATE = "board_stalemate"          # payload: shuffles_remaining=int


# ============================================================================
# SCORE & ASSISTANCE
# ============================================================================
EVENT_SCORE_CHANGED = "score_changed"              # payload: total=int, delta=int, combo_level=int
EVENT_HINT_AVAILABLE = "hint_available"            # payload: src=(r,c), dst=(r,c)
