from dataclasses import dataclass


@dataclass(slots=True)
class ScoreState:
    """Cumulative score; only ScoreSystem mutates it."""
    score: int = 0
