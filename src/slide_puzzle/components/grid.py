from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Tuple

from slide_puzzle.components.tile import Tile, tile_id

Position = Tuple[int, int]
Cell = Optional[Tile]


@dataclass(slots=True)
class Grid:
    """Square grid of cells indexed by (row, col), row 0 at the top.

    Cells are ``None`` only while matched tiles are being removed; between
    player actions every cell holds a tile.
    """
    size: int
    cells: List[List[Cell]] = field(default_factory=list)

    @classmethod
    def from_colors(cls, rows: Sequence[Sequence[str]]) -> Grid:
        """Build a grid from a square matrix of color ids."""
        size = len(rows)
        if size == 0 or any(len(row) != size for row in rows):
            raise ValueError("Grid colors must form a non-empty square matrix")
        cells: List[List[Cell]] = [
            [Tile(id=tile_id(r, c), color=color) for c, color in enumerate(row)]
            for r, row in enumerate(rows)
        ]
        return cls(size=size, cells=cells)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def get(self, row: int, col: int) -> Cell:
        if not self.in_bounds(row, col):
            return None
        return self.cells[row][col]

    def color_at(self, row: int, col: int) -> str | None:
        tile = self.get(row, col)
        return tile.color if tile is not None else None

    def colors(self) -> List[List[str | None]]:
        return [[tile.color if tile is not None else None for tile in row] for row in self.cells]

    def positions(self) -> Iterator[Position]:
        for r in range(self.size):
            for c in range(self.size):
                yield r, c

    def is_full(self) -> bool:
        return all(tile is not None for row in self.cells for tile in row)

    def matched_positions(self) -> List[Position]:
        matched: List[Position] = []
        for r, c in self.positions():
            tile = self.cells[r][c]
            if tile is not None and tile.matched:
                matched.append((r, c))
        return matched


def create_grid(size: int, palette: Sequence[str], rng: random.Random) -> Grid:
    """Fill every cell with a uniformly random color from palette.

    No adjacency constraints are applied; a fresh grid may already contain matches.
    """
    if size < 1:
        raise ValueError("Grid size must be positive")
    if not palette:
        raise ValueError("Palette must not be empty")
    cells: List[List[Cell]] = []
    for r in range(size):
        row: List[Cell] = []
        for c in range(size):
            row.append(Tile(id=tile_id(r, c), color=rng.choice(palette)))
        cells.append(row)
    return Grid(size=size, cells=cells)


def clone_grid(grid: Grid) -> Grid:
    cells: List[List[Cell]] = [
        [Tile(id=tile.id, color=tile.color, matched=tile.matched) if tile is not None else None for tile in row]
        for row in grid.cells
    ]
    return Grid(size=grid.size, cells=cells)
