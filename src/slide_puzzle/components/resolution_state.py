from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass(slots=True)
class ResolutionState:
    """Tracks the match/clear/gravity cycle shared across systems.

    pending_check: the grid changed and has not been scanned yet.
    marked: positions flagged by the last pass, waiting to be cleared.
    depth: passes with matches in the current cascade chain.
    """

    pending_check: bool = False
    marked: List[Tuple[int, int]] = field(default_factory=list)
    depth: int = 0

    @property
    def busy(self) -> bool:
        return self.pending_check or bool(self.marked)
