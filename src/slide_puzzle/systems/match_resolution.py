import logging
from typing import List, Optional, Tuple

from esper import World
from slide_puzzle.events.bus import (EventBus, EVENT_TILE_SLIDE, EVENT_TILES_MATCHED, EVENT_MATCH_CLEARED,
                                     EVENT_GRAVITY_APPLIED, EVENT_REFILL_COMPLETED, EVENT_CASCADE_STEP,
                                     EVENT_CASCADE_COMPLETE, EVENT_BOARD_CHANGED)
from slide_puzzle.components.tile import tile_id
from slide_puzzle.constants import MAX_SETTLE_PASSES
from slide_puzzle.systems.board_ops import MatchPass, apply_gravity, clear_matched, find_all_matches, get_board
from slide_puzzle.systems.state_utils import get_or_create_resolution_state

logger = logging.getLogger(__name__)


class MatchResolutionSystem:
    """Runs the detect -> clear -> gravity/refill cycle after every board mutation.

    The cycle is split in two phases so the presentation layer can show the
    matched tiles before they disappear:
      - detect_and_mark: scan once, flag regions, emit EVENT_TILES_MATCHED.
      - clear_and_settle: remove flagged tiles, apply gravity/refill and queue
        the next scan so cascades are picked up.
    A scan that finds nothing ends the cascade with EVENT_CASCADE_COMPLETE.
    """
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TILE_SLIDE, self.on_tile_slide)

    def on_tile_slide(self, sender, **kwargs):
        state = get_or_create_resolution_state(self.world)
        state.pending_check = True
        state.depth = 0

    def detect_and_mark(self) -> Optional[MatchPass]:
        """Run one pass if a scan is pending; returns None when there was nothing to do."""
        state = get_or_create_resolution_state(self.world)
        if not state.pending_check or state.marked:
            return None
        state.pending_check = False
        grid = get_board(self.world).grid
        match_pass = find_all_matches(grid)
        if not match_pass:
            depth = state.depth
            state.depth = 0
            logger.debug("Cascade complete after %d pass(es)", depth)
            self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=depth)
            return match_pass
        state.depth += 1
        positions = match_pass.positions
        state.marked = positions
        self.event_bus.emit(EVENT_CASCADE_STEP, depth=state.depth, positions=positions)
        self.event_bus.emit(
            EVENT_TILES_MATCHED,
            cell_ids=[tile_id(r, c) for r, c in positions],
            region_sizes=match_pass.region_sizes,
            positions=positions,
            total=match_pass.total,
            depth=state.depth,
        )
        return match_pass

    def clear_and_settle(self) -> List[Tuple[int, int]]:
        """Remove marked tiles and let the board settle; returns the refilled positions."""
        state = get_or_create_resolution_state(self.world)
        if not state.marked:
            return []
        board = get_board(self.world)
        positions = clear_matched(board.grid)
        state.marked = []
        self.event_bus.emit(EVENT_MATCH_CLEARED, positions=positions)
        moves, new_tiles = apply_gravity(board.grid, board.palette, self.world.random)
        self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=moves)
        self.event_bus.emit(EVENT_REFILL_COMPLETED, new_tiles=new_tiles)
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason='refill', positions=positions)
        state.pending_check = True
        return new_tiles

    def settle(self, max_passes: int = MAX_SETTLE_PASSES) -> int:
        """Drive both phases until the board is stable; returns the number of matching passes."""
        passes = 0
        while get_or_create_resolution_state(self.world).busy:
            if passes >= max_passes:
                raise RuntimeError(f"Board did not settle within {max_passes} passes")
            if self.detect_and_mark():
                passes += 1
            self.clear_and_settle()
        return passes
