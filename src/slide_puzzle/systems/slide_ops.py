from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple, TypeVar

from slide_puzzle.components.grid import Grid

Position = Tuple[int, int]
T = TypeVar("T")

DIRECTION_UP = "up"
DIRECTION_DOWN = "down"
DIRECTION_LEFT = "left"
DIRECTION_RIGHT = "right"


@dataclass(slots=True)
class SlideResult:
    direction: str
    path: List[Position]
    before: List[str]
    after: List[str]


def slide_direction(src: Position, dst: Position) -> str:
    """Dominant axis decides the slide; ties (diagonals included) go horizontal."""
    row_delta = dst[0] - src[0]
    col_delta = dst[1] - src[1]
    if abs(row_delta) > abs(col_delta):
        return DIRECTION_DOWN if row_delta > 0 else DIRECTION_UP
    return DIRECTION_RIGHT if col_delta > 0 else DIRECTION_LEFT


def is_aligned(src: Position, dst: Position) -> bool:
    return src != dst and (src[0] == dst[0] or src[1] == dst[1])


def slide_path(src: Position, dst: Position) -> List[Position]:
    """Inclusive straight path between two cells sharing a row or a column.

    Right/down paths run from the lower index to the higher one, left/up paths
    the other way, so a rotation moves colors in the slide direction.
    """
    if src[0] != dst[0] and src[1] != dst[1]:
        raise ValueError(f"Cells {src} and {dst} share neither a row nor a column")
    direction = slide_direction(src, dst)
    if direction in (DIRECTION_LEFT, DIRECTION_RIGHT):
        row = src[0]
        cols = range(min(src[1], dst[1]), max(src[1], dst[1]) + 1)
        if direction == DIRECTION_LEFT:
            cols = reversed(cols)
        return [(row, col) for col in cols]
    col = src[1]
    rows = range(min(src[0], dst[0]), max(src[0], dst[0]) + 1)
    if direction == DIRECTION_UP:
        rows = reversed(rows)
    return [(row, col) for row in rows]


def rotate_colors(colors: Sequence[T]) -> List[T]:
    """Single cyclic rotation: the last entry moves to the front."""
    if len(colors) < 2:
        return list(colors)
    return [colors[-1], *colors[:-1]]


def apply_slide(grid: Grid, src: Position, dst: Position) -> SlideResult:
    """Rotate colors along the path between src and dst in place.

    Only colors move; tile positions stay fixed and every path tile has its
    matched flag reset.
    """
    direction = slide_direction(src, dst)
    path = slide_path(src, dst)
    tiles = [grid.cells[r][c] for r, c in path]
    before = [tile.color for tile in tiles]
    after = rotate_colors(before)
    for tile, color in zip(tiles, after):
        tile.color = color
        tile.matched = False
    return SlideResult(direction=direction, path=path, before=before, after=after)
