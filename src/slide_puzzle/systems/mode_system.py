"""Win/loss evaluation for the time- and move-limited modes."""
from __future__ import annotations

import logging
from dataclasses import replace

from esper import World

from slide_puzzle.components.session_state import GameMode, SessionState
from slide_puzzle.events.bus import (
    EventBus,
    EVENT_CASCADE_COMPLETE,
    EVENT_SCORE_AWARDED,
    EVENT_SESSION_CHANGED,
    EVENT_SESSION_ENDED,
    EVENT_TICK,
    EVENT_TILE_SLIDE,
    EVENT_TIME_CHANGED,
)
from slide_puzzle.systems.state_utils import (
    get_clock,
    get_or_create_resolution_state,
    get_score_state,
    get_session_state,
    set_session_state,
)

logger = logging.getLogger(__name__)


class ModeSystem:
    """Applies move/time consumption and decides when a session is won or over.

    The win condition is always checked before the loss condition, so reaching
    the target on the move or second that exhausts the budget counts as a win.
    Move budgets are only judged lost once the board has settled, since a
    cascade still in flight may add score.
    """

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TICK, self._on_tick)
        self.event_bus.subscribe(EVENT_TILE_SLIDE, self._on_tile_slide)
        self.event_bus.subscribe(EVENT_SCORE_AWARDED, self._on_score_awarded)
        self.event_bus.subscribe(EVENT_CASCADE_COMPLETE, self._on_cascade_complete)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_tick(self, sender, **payload) -> None:
        state = get_session_state(self.world)
        if state.ended or state.mode is not GameMode.TIMEATTACK:
            return
        dt = payload.get("dt", 0.0) or 0.0
        if dt <= 0:
            return
        clock = get_clock(self.world)
        clock.carry += dt
        while clock.carry >= 1.0 and not state.ended:
            clock.carry -= 1.0
            remaining = max(0, (state.time_remaining or 0) - 1)
            state = self._transition(replace(state, time_remaining=remaining))
            self.event_bus.emit(EVENT_TIME_CHANGED, time_remaining=remaining)
            state = self.evaluate(allow_loss=True)

    def _on_tile_slide(self, sender, **payload) -> None:
        state = get_session_state(self.world)
        if state.ended:
            return
        moves_remaining = state.moves_remaining
        if state.mode is GameMode.MOVECHALLENGE and moves_remaining is not None:
            moves_remaining = max(0, moves_remaining - 1)
        self._transition(replace(state, moves_used=state.moves_used + 1, moves_remaining=moves_remaining))

    def _on_score_awarded(self, sender, **payload) -> None:
        self.evaluate(allow_loss=False)

    def _on_cascade_complete(self, sender, **payload) -> None:
        self.evaluate(allow_loss=True)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def evaluate(self, *, allow_loss: bool = True) -> SessionState:
        state = get_session_state(self.world)
        if state.ended or state.mode is GameMode.ENDLESS:
            return state
        score = get_score_state(self.world).score
        if state.target_score is not None and score >= state.target_score:
            return self._end(state, won=True)
        if not allow_loss:
            return state
        if state.mode is GameMode.TIMEATTACK and (state.time_remaining or 0) <= 0:
            return self._end(state, won=False)
        if (
            state.mode is GameMode.MOVECHALLENGE
            and (state.moves_remaining or 0) <= 0
            and not get_or_create_resolution_state(self.world).busy
        ):
            return self._end(state, won=False)
        return state

    def _end(self, state: SessionState, *, won: bool) -> SessionState:
        final = self._transition(replace(state, is_won=won, is_over=not won))
        logger.info(
            "Session %s in %s mode (score=%d, moves=%d)",
            "won" if won else "lost",
            final.mode.value,
            get_score_state(self.world).score,
            final.moves_used,
        )
        self.event_bus.emit(EVENT_SESSION_ENDED, won=won, state=final)
        return final

    def _transition(self, state: SessionState) -> SessionState:
        set_session_state(self.world, state)
        self.event_bus.emit(EVENT_SESSION_CHANGED, state=state)
        return state
