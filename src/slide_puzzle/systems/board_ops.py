from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Sequence, Set, Tuple

from esper import World

from slide_puzzle.components.board import Board
from slide_puzzle.components.grid import Grid
from slide_puzzle.components.tile import Tile, tile_id
from slide_puzzle.constants import MIN_REGION_SIZE

Position = Tuple[int, int]

_NEIGHBOURS = ((0, 1), (0, -1), (1, 0), (-1, 0))


@dataclass(slots=True)
class GravityMove:
    source: Position
    target: Position
    color: str


@dataclass(slots=True)
class MatchPass:
    """Regions found by one full scan of the grid."""
    regions: List[List[Position]] = field(default_factory=list)

    @property
    def region_sizes(self) -> List[int]:
        return [len(region) for region in self.regions]

    @property
    def total(self) -> int:
        return sum(self.region_sizes)

    @property
    def positions(self) -> List[Position]:
        return sorted(pos for region in self.regions for pos in region)

    def __bool__(self) -> bool:
        return bool(self.regions)


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board not found")


def find_connected_region(
    grid: Grid,
    row: int,
    col: int,
    target_color: str,
    visited: Set[Position] | None = None,
) -> Set[Position]:
    """Collect the 4-connected cells of target_color reachable from (row, col).

    Cells flagged ``matched`` are excluded, so regions already claimed in the
    current pass are never counted twice.
    """
    if visited is None:
        visited = set()
    region: Set[Position] = set()
    stack = [(row, col)]
    while stack:
        r, c = stack.pop()
        if (r, c) in visited:
            continue
        tile = grid.get(r, c)
        if tile is None or tile.matched or tile.color != target_color:
            continue
        visited.add((r, c))
        region.add((r, c))
        for dr, dc in _NEIGHBOURS:
            stack.append((r + dr, c + dc))
    return region


def find_all_matches(grid: Grid, *, min_size: int = MIN_REGION_SIZE) -> MatchPass:
    """Scan row-major and flag every region of at least min_size tiles as matched."""
    result = MatchPass()
    for r, c in grid.positions():
        tile = grid.cells[r][c]
        if tile is None or tile.matched:
            continue
        region = find_connected_region(grid, r, c, tile.color)
        if len(region) < min_size:
            continue
        for mr, mc in region:
            grid.cells[mr][mc].matched = True
        result.regions.append(sorted(region))
    return result


def clear_matched(grid: Grid) -> List[Position]:
    cleared: List[Position] = []
    for r, c in grid.positions():
        tile = grid.cells[r][c]
        if tile is not None and tile.matched:
            grid.cells[r][c] = None
            cleared.append((r, c))
    return cleared


def compute_gravity_moves(grid: Grid) -> List[GravityMove]:
    moves: List[GravityMove] = []
    for col in range(grid.size):
        write_row = grid.size - 1
        for row in range(grid.size - 1, -1, -1):
            tile = grid.cells[row][col]
            if tile is None:
                continue
            if row != write_row:
                moves.append(GravityMove(source=(row, col), target=(write_row, col), color=tile.color))
            write_row -= 1
    return moves


def apply_gravity(grid: Grid, palette: Sequence[str], rng: random.Random) -> Tuple[List[GravityMove], List[Position]]:
    """Compact each column toward the bottom, then refill the vacated top cells.

    Columns are independent. Only the refill consumes randomness, left to right
    and top down within each column.
    """
    moves = compute_gravity_moves(grid)
    for move in moves:
        src_row, col = move.source
        dst_row, _ = move.target
        tile = grid.cells[src_row][col]
        grid.cells[src_row][col] = None
        tile.id = tile_id(dst_row, col)
        grid.cells[dst_row][col] = tile
    new_tiles: List[Position] = []
    for col in range(grid.size):
        for row in range(grid.size):
            if grid.cells[row][col] is not None:
                break
            grid.cells[row][col] = Tile(id=tile_id(row, col), color=rng.choice(palette))
            new_tiles.append((row, col))
    return moves, new_tiles
