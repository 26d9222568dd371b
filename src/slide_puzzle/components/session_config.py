from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from slide_puzzle.components.session_state import GameMode, SessionState
from slide_puzzle.constants import (
    DEFAULT_MOVE_LIMIT,
    DEFAULT_MOVECHALLENGE_TARGET,
    DEFAULT_PALETTE,
    DEFAULT_TIME_LIMIT_SECONDS,
    DEFAULT_TIMEATTACK_TARGET,
    GRID_SIZE,
    MIN_PALETTE_SIZE,
    MIN_REGION_SIZE,
)


@dataclass(frozen=True, slots=True)
class SessionConfig:
    """Parameters for a new session.

    ``palette`` overrides the default color ids; otherwise the first
    ``palette_size`` entries of DEFAULT_PALETTE are used. Limits left as None
    are filled from the mode defaults by ``for_mode``.
    """
    palette_size: int = len(DEFAULT_PALETTE)
    grid_size: int = GRID_SIZE
    time_limit_seconds: Optional[int] = None
    move_limit: Optional[int] = None
    target_score: Optional[int] = None
    palette: Optional[Tuple[str, ...]] = None

    def colors(self) -> Tuple[str, ...]:
        if self.palette is not None:
            return tuple(self.palette)
        return DEFAULT_PALETTE[: self.palette_size]

    def for_mode(self, mode: GameMode | str) -> SessionConfig:
        """Return a copy with mode defaults applied, validating the result."""
        mode = GameMode.parse(mode)
        resolved = self
        if mode is GameMode.TIMEATTACK:
            resolved = replace(
                resolved,
                time_limit_seconds=self.time_limit_seconds if self.time_limit_seconds is not None else DEFAULT_TIME_LIMIT_SECONDS,
                target_score=self.target_score if self.target_score is not None else DEFAULT_TIMEATTACK_TARGET,
            )
        elif mode is GameMode.MOVECHALLENGE:
            resolved = replace(
                resolved,
                move_limit=self.move_limit if self.move_limit is not None else DEFAULT_MOVE_LIMIT,
                target_score=self.target_score if self.target_score is not None else DEFAULT_MOVECHALLENGE_TARGET,
            )
        resolved.validate(mode)
        return resolved

    def validate(self, mode: GameMode) -> None:
        if self.grid_size < 1:
            raise ValueError(f"grid_size must be positive, got {self.grid_size}")
        if self.palette is not None:
            if not self.palette:
                raise ValueError("palette must not be empty")
            if len(set(self.palette)) != len(self.palette):
                raise ValueError("palette color ids must be unique")
        elif not 1 <= self.palette_size <= len(DEFAULT_PALETTE):
            raise ValueError(f"palette_size must be between 1 and {len(DEFAULT_PALETTE)}, got {self.palette_size}")
        if self.grid_size * self.grid_size >= MIN_REGION_SIZE and len(self.colors()) < MIN_PALETTE_SIZE:
            raise ValueError(f"a {self.grid_size}x{self.grid_size} board needs at least {MIN_PALETTE_SIZE} colors to settle")
        if mode is GameMode.TIMEATTACK and (self.time_limit_seconds is None or self.time_limit_seconds <= 0):
            raise ValueError("timeattack requires a positive time_limit_seconds")
        if mode is GameMode.MOVECHALLENGE and (self.move_limit is None or self.move_limit <= 0):
            raise ValueError("movechallenge requires a positive move_limit")
        if mode is not GameMode.ENDLESS and (self.target_score is None or self.target_score <= 0):
            raise ValueError(f"{mode.value} requires a positive target_score")

    def initial_state(self, mode: GameMode) -> SessionState:
        if mode is GameMode.TIMEATTACK:
            return SessionState(mode=mode, time_remaining=self.time_limit_seconds, target_score=self.target_score)
        if mode is GameMode.MOVECHALLENGE:
            return SessionState(mode=mode, moves_remaining=self.move_limit, target_score=self.target_score)
        return SessionState(mode=mode)
