from slide_puzzle.components.session_config import SessionConfig
from slide_puzzle.events.bus import EVENT_INPUT_REJECTED, EVENT_SCORE_AWARDED
from slide_puzzle.session import new_session
from slide_puzzle.systems.board import SelectionResult
from slide_puzzle.systems.board_ops import find_all_matches

from tests.helpers import PALETTE, capture, install_colors


def test_fresh_session_waits_for_first_resolution():
    session = new_session('endless', seed=7)
    rejected = capture(session, EVENT_INPUT_REJECTED)
    assert session.busy
    assert session.select_cell(0, 0).status is SelectionResult.REJECTED
    assert rejected[0]['reason'] == 'resolving'

    session.settle()
    assert not session.busy
    assert session.moves_used == 0
    assert session.combo == 0
    assert session.select_cell(0, 0).status is SelectionResult.RECORDED


def test_preexisting_matches_score_without_consuming_moves():
    session = new_session('movechallenge', SessionConfig(grid_size=3, palette=PALETTE, move_limit=5, target_score=10000), seed=2)
    install_colors(
        session,
        [
            ['red', 'red', 'red'],
            ['blue', 'green', 'blue'],
            ['green', 'blue', 'green'],
        ],
        refill=['yellow', 'purple', 'cyan'],
    )
    awarded = capture(session, EVENT_SCORE_AWARDED)
    assert session.settle() == 1
    assert session.score == 30
    assert [a['points'] for a in awarded] == [30]
    assert session.moves_used == 0
    assert session.moves_remaining == 5
    assert session.colors[0] == ['yellow', 'purple', 'cyan']


def test_settled_random_boards_are_full_and_match_free():
    for seed in range(10):
        session = new_session('endless', seed=seed)
        awarded = capture(session, EVENT_SCORE_AWARDED)
        session.settle()
        grid = session.grid
        assert grid.is_full()
        assert not find_all_matches(grid)
        assert session.score == sum(a['points'] for a in awarded)
