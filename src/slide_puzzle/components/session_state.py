"""Session state describing the active mode and its goal progress."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class GameMode(Enum):
    """Goal variants; each is evaluated independently."""
    ENDLESS = "endless"
    TIMEATTACK = "timeattack"
    MOVECHALLENGE = "movechallenge"

    @classmethod
    def parse(cls, value: "GameMode | str") -> "GameMode":
        if isinstance(value, GameMode):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown game mode: {value!r}") from None


@dataclass(frozen=True, slots=True)
class SessionState:
    """Immutable snapshot of session progress, replaced as a whole on each transition."""
    mode: GameMode = GameMode.ENDLESS
    moves_used: int = 0
    time_remaining: Optional[int] = None
    moves_remaining: Optional[int] = None
    target_score: Optional[int] = None
    is_over: bool = False
    is_won: bool = False

    @property
    def ended(self) -> bool:
        return self.is_over or self.is_won
