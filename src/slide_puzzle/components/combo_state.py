from dataclasses import dataclass


@dataclass(slots=True)
class ComboState:
    """Consecutive match-producing passes since the last pass without a match."""
    count: int = 0
