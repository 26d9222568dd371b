from dataclasses import dataclass, field
from typing import List, Tuple

Position = Tuple[int, int]


@dataclass(slots=True)
class Selection:
    """Cells currently chosen by the player (at most two)."""
    cells: List[Position] = field(default_factory=list)

    @property
    def first(self) -> Position | None:
        return self.cells[0] if self.cells else None

    def clear(self) -> None:
        self.cells.clear()
