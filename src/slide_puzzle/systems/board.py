import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from esper import World
from slide_puzzle.events.bus import (EventBus, EVENT_TILE_CLICK, EVENT_TILE_SELECTED, EVENT_TILE_DESELECTED,
                                     EVENT_INPUT_REJECTED, EVENT_TILE_SLIDE)
from slide_puzzle.components.grid import Grid, clone_grid
from slide_puzzle.systems.board_ops import get_board
from slide_puzzle.systems.slide_ops import apply_slide, is_aligned
from slide_puzzle.systems.state_utils import get_or_create_resolution_state, get_selection, get_session_state

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class SelectionResult(Enum):
    RECORDED = "recorded"
    CLEARED = "cleared"
    MOVED = "moved"
    INVALID = "invalid"
    REJECTED = "rejected"


@dataclass(frozen=True)
class SelectionOutcome:
    status: SelectionResult
    selected: Tuple[Position, ...] = ()
    direction: Optional[str] = None
    path: List[Position] = field(default_factory=list)
    grid: Optional[Grid] = None


class BoardSystem:
    """Owns player selection and turns a pair of aligned cells into a slide."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        self.select_cell(row, col)

    def select_cell(self, row: int, col: int) -> SelectionOutcome:
        board = get_board(self.world)
        if not board.grid.in_bounds(row, col):
            return self._reject(row, col, 'out_of_bounds', SelectionResult.INVALID)
        if get_session_state(self.world).ended:
            return self._reject(row, col, 'session_ended', SelectionResult.REJECTED)
        if get_or_create_resolution_state(self.world).busy:
            return self._reject(row, col, 'resolving', SelectionResult.REJECTED)

        selection = get_selection(self.world)
        first = selection.first
        pos = (row, col)
        if first is None:
            selection.cells = [pos]
            self.event_bus.emit(EVENT_TILE_SELECTED, row=row, col=col)
            return SelectionOutcome(SelectionResult.RECORDED, selected=(pos,))
        if first == pos:
            selection.clear()
            self.event_bus.emit(EVENT_TILE_DESELECTED, reason='reselect', prev_row=row, prev_col=col)
            return SelectionOutcome(SelectionResult.CLEARED)
        if not is_aligned(first, pos):
            # Not on a shared row or column: move the selection instead of sliding.
            selection.cells = [pos]
            self.event_bus.emit(EVENT_TILE_SELECTED, row=row, col=col)
            return SelectionOutcome(SelectionResult.RECORDED, selected=(pos,))

        selection.cells = [first, pos]
        result = apply_slide(board.grid, first, pos)
        selection.clear()
        self.event_bus.emit(EVENT_TILE_SLIDE, src=first, dst=pos, direction=result.direction, path=list(result.path))
        return SelectionOutcome(
            SelectionResult.MOVED,
            selected=(first, pos),
            direction=result.direction,
            path=list(result.path),
            grid=clone_grid(board.grid),
        )

    def clear_selection(self, reason: str = 'cancel') -> bool:
        selection = get_selection(self.world)
        prev = selection.first
        if prev is None:
            return False
        selection.clear()
        self.event_bus.emit(EVENT_TILE_DESELECTED, reason=reason, prev_row=prev[0], prev_col=prev[1])
        return True

    def _reject(self, row: int, col: int, reason: str, status: SelectionResult) -> SelectionOutcome:
        logger.debug("Rejected selection at (%s, %s): %s", row, col, reason)
        self.event_bus.emit(EVENT_INPUT_REJECTED, row=row, col=col, reason=reason)
        return SelectionOutcome(status, selected=tuple(get_selection(self.world).cells))
