from dataclasses import dataclass


@dataclass(slots=True)
class SessionClock:
    """Fractional seconds carried between ticks for time-limited modes."""
    carry: float = 0.0
