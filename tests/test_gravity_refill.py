import random

from slide_puzzle.components.grid import Grid, create_grid
from slide_puzzle.systems.board_ops import GravityMove, apply_gravity, clear_matched

from tests.helpers import PALETTE, ScriptedRandom

LAYOUT = [
    ['red', 'blue', 'green'],
    ['yellow', 'purple', 'cyan'],
    ['orange', 'pink', 'red'],
]


def _mark(grid, positions):
    for r, c in positions:
        grid.cells[r][c].matched = True


def test_clear_then_gravity_compacts_and_refills_columns():
    grid = Grid.from_colors(LAYOUT)
    _mark(grid, [(1, 0), (2, 0), (2, 1)])
    cleared = clear_matched(grid)
    assert cleared == [(1, 0), (2, 0), (2, 1)]
    assert not grid.is_full()

    moves, new_tiles = apply_gravity(grid, PALETTE, ScriptedRandom(['blue', 'green', 'cyan']))

    assert grid.colors() == [
        ['blue', 'cyan', 'green'],
        ['green', 'blue', 'cyan'],
        ['red', 'purple', 'red'],
    ]
    assert moves == [
        GravityMove(source=(0, 0), target=(2, 0), color='red'),
        GravityMove(source=(1, 1), target=(2, 1), color='purple'),
        GravityMove(source=(0, 1), target=(1, 1), color='blue'),
    ]
    assert new_tiles == [(0, 0), (1, 0), (0, 1)]
    assert grid.is_full()
    for r in range(3):
        for c in range(3):
            assert grid.cells[r][c].id == f"{r}-{c}"
            assert grid.cells[r][c].matched is False


def test_untouched_column_is_not_refilled():
    grid = Grid.from_colors(LAYOUT)
    _mark(grid, [(0, 0)])
    clear_matched(grid)
    moves, new_tiles = apply_gravity(grid, PALETTE, ScriptedRandom(['pink']))
    assert moves == []
    assert new_tiles == [(0, 0)]
    assert [row[1] for row in grid.colors()] == ['blue', 'purple', 'pink']
    assert [row[2] for row in grid.colors()] == ['green', 'cyan', 'red']


def test_gravity_conserves_tiles_and_order_on_random_boards():
    for seed in range(20):
        rng = random.Random(seed)
        grid = create_grid(8, PALETTE, rng)
        before = grid.colors()
        cleared = {(r, c) for r in range(8) for c in range(8) if rng.random() < 0.3}
        _mark(grid, cleared)
        clear_matched(grid)
        apply_gravity(grid, PALETTE, rng)

        assert grid.is_full()
        after = grid.colors()
        for col in range(8):
            survivors = [before[r][col] for r in range(8) if (r, col) not in cleared]
            column = [after[r][col] for r in range(8)]
            assert len(column) == 8
            assert column[8 - len(survivors):] == survivors
