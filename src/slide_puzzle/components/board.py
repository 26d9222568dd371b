from dataclasses import dataclass, field
from typing import Tuple

from slide_puzzle.components.grid import Grid


@dataclass(slots=True)
class Board:
    grid: Grid
    palette: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def size(self) -> int:
        return self.grid.size
