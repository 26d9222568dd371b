from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references so bound methods of systems nobody else holds keep receiving events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float
EVENT_TIME_CHANGED = "time_changed"                # payload: time_remaining=int


# ============================================================================
# INPUT & SELECTION
# ============================================================================
EVENT_TILE_CLICK = "tile_click"                    # payload: row, col
EVENT_TILE_SELECTED = "tile_selected"              # payload: row, col
EVENT_TILE_DESELECTED = "tile_deselected"          # payload: reason=str, prev_row, prev_col
EVENT_INPUT_REJECTED = "input_rejected"            # payload: row, col, reason=str


# ============================================================================
# TILE & BOARD MECHANICS
# ============================================================================
EVENT_TILE_SLIDE = "tile_slide"                    # payload: src=(r,c), dst=(r,c), direction=str, path=[(r,c),...]
EVENT_TILES_MATCHED = "tiles_matched"              # payload: cell_ids=[str], region_sizes=[int], positions=[(r,c),...], total=int, depth=int
EVENT_MATCH_CLEARED = "match_cleared"              # payload: positions=[(r,c),...]
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: moves=[GravityMove]
EVENT_REFILL_COMPLETED = "refill_completed"        # payload: new_tiles=[(r,c),...]
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int, positions=[(r,c),...]
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int
EVENT_BOARD_CHANGED = "board_changed"              # payload: reason=str, positions=list[(r,c)]


# ============================================================================
# SCORING
# ============================================================================
EVENT_SCORE_AWARDED = "score_awarded"              # payload: points=int, base_points=int, bonus=int, combo_level=int, score=int
EVENT_COMBO_CHANGED = "combo_changed"              # payload: count=int


# ============================================================================
# SESSION FLOW
# ============================================================================
EVENT_SESSION_STARTED = "session_started"          # payload: state=SessionState
EVENT_SESSION_CHANGED = "session_changed"          # payload: state=SessionState
EVENT_SESSION_ENDED = "session_ended"              # payload: won=bool, state=SessionState
