"""In-process API for driving a slide puzzle session.

A presentation layer creates a session with ``new_session`` and then:
  - forwards clicks to ``select_cell``,
  - forwards elapsed time to ``tick``,
  - alternates ``detect_and_mark`` / ``clear_and_settle`` while ``busy``,
    animating the matched tiles in between (or calls ``settle`` headless),
  - subscribes to events such as EVENT_TILES_MATCHED, EVENT_SCORE_AWARDED
    and EVENT_SESSION_ENDED.
"""
from __future__ import annotations

import logging
import random
from typing import Callable, List, Optional, Tuple

from esper import World

from slide_puzzle.components.grid import Grid, clone_grid
from slide_puzzle.components.session_config import SessionConfig
from slide_puzzle.components.session_state import GameMode, SessionState
from slide_puzzle.events.bus import EVENT_SESSION_STARTED, EVENT_TICK, EventBus
from slide_puzzle.systems.board import BoardSystem, SelectionOutcome
from slide_puzzle.systems.board_ops import MatchPass, get_board
from slide_puzzle.systems.match_resolution import MatchResolutionSystem
from slide_puzzle.systems.mode_system import ModeSystem
from slide_puzzle.systems.score_system import ScoreSystem
from slide_puzzle.systems.state_utils import (
    get_combo_state,
    get_or_create_resolution_state,
    get_score_state,
    get_selection,
    get_session_state,
)
from slide_puzzle.world import create_world

logger = logging.getLogger(__name__)


class SessionHandle:
    """Owns one world, its event bus and the systems wired to it."""

    def __init__(self, mode: GameMode | str, config: SessionConfig | None = None, *, rng: random.Random | None = None) -> None:
        self.mode = GameMode.parse(mode)
        self.config = (config or SessionConfig()).for_mode(self.mode)
        self.rng = rng or random.Random()
        self.event_bus: EventBus
        self.world: World
        self.board_system: BoardSystem
        self.match_resolution: MatchResolutionSystem
        self._subscriptions: List[Tuple[str, Callable]] = []
        self._build()

    def _build(self) -> None:
        bus = EventBus()
        for name, fn in self._subscriptions:
            bus.subscribe(name, fn)
        self.event_bus = bus
        self.world = create_world(self.mode, self.config, rng=self.rng)
        self.board_system = BoardSystem(self.world, bus)
        self.match_resolution = MatchResolutionSystem(self.world, bus)
        ScoreSystem(self.world, bus)
        ModeSystem(self.world, bus)
        logger.info("Started %s session on a %dx%d board", self.mode.value, self.config.grid_size, self.config.grid_size)
        bus.emit(EVENT_SESSION_STARTED, state=self.state)

    def subscribe(self, name: str, fn: Callable) -> None:
        """Register a listener that survives restarts."""
        self._subscriptions.append((name, fn))
        self.event_bus.subscribe(name, fn)

    def restart(self) -> None:
        """Start over with a fresh grid, score, combo, selection and goal state."""
        logger.info("Restarting %s session", self.mode.value)
        self._build()

    # ------------------------------------------------------------------
    # Player actions and time
    # ------------------------------------------------------------------

    def select_cell(self, row: int, col: int) -> SelectionOutcome:
        return self.board_system.select_cell(row, col)

    def clear_selection(self) -> bool:
        return self.board_system.clear_selection()

    def tick(self, elapsed_seconds: float) -> None:
        self.event_bus.emit(EVENT_TICK, dt=elapsed_seconds)

    # ------------------------------------------------------------------
    # Resolution phases
    # ------------------------------------------------------------------

    def detect_and_mark(self) -> Optional[MatchPass]:
        return self.match_resolution.detect_and_mark()

    def clear_and_settle(self) -> List[Tuple[int, int]]:
        return self.match_resolution.clear_and_settle()

    def settle(self, max_passes: int | None = None) -> int:
        if max_passes is None:
            return self.match_resolution.settle()
        return self.match_resolution.settle(max_passes=max_passes)

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def grid(self) -> Grid:
        return clone_grid(get_board(self.world).grid)

    @property
    def colors(self) -> List[List[str | None]]:
        return get_board(self.world).grid.colors()

    @property
    def palette(self) -> Tuple[str, ...]:
        return get_board(self.world).palette

    @property
    def state(self) -> SessionState:
        return get_session_state(self.world)

    @property
    def score(self) -> int:
        return get_score_state(self.world).score

    @property
    def combo(self) -> int:
        return get_combo_state(self.world).count

    @property
    def moves_used(self) -> int:
        return self.state.moves_used

    @property
    def moves_remaining(self) -> Optional[int]:
        return self.state.moves_remaining

    @property
    def time_remaining(self) -> Optional[int]:
        return self.state.time_remaining

    @property
    def is_over(self) -> bool:
        return self.state.is_over

    @property
    def is_won(self) -> bool:
        return self.state.is_won

    @property
    def selection(self) -> Tuple[Tuple[int, int], ...]:
        return tuple(get_selection(self.world).cells)

    @property
    def busy(self) -> bool:
        return get_or_create_resolution_state(self.world).busy


def new_session(
    mode: GameMode | str = GameMode.ENDLESS,
    config: SessionConfig | None = None,
    *,
    rng: random.Random | None = None,
    seed: int | None = None,
) -> SessionHandle:
    if rng is None and seed is not None:
        rng = random.Random(seed)
    return SessionHandle(mode, config, rng=rng)
