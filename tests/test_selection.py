from slide_puzzle.events.bus import (EVENT_INPUT_REJECTED, EVENT_TILE_CLICK, EVENT_TILE_DESELECTED,
                                     EVENT_TILE_SELECTED, EVENT_TILE_SLIDE)
from slide_puzzle.systems.board import SelectionResult

from tests.helpers import capture, make_session

NO_MATCH_4 = [
    ['red', 'blue', 'green', 'yellow'],
    ['green', 'yellow', 'red', 'blue'],
    ['red', 'blue', 'green', 'yellow'],
    ['green', 'yellow', 'red', 'blue'],
]


def test_first_click_records_selection():
    session = make_session(NO_MATCH_4)
    selected = capture(session, EVENT_TILE_SELECTED)
    outcome = session.select_cell(0, 0)
    assert outcome.status is SelectionResult.RECORDED
    assert session.selection == ((0, 0),)
    assert selected == [{'row': 0, 'col': 0}]


def test_reselecting_same_cell_clears_without_a_move():
    session = make_session(NO_MATCH_4)
    deselected = capture(session, EVENT_TILE_DESELECTED)
    session.select_cell(1, 1)
    outcome = session.select_cell(1, 1)
    assert outcome.status is SelectionResult.CLEARED
    assert session.selection == ()
    assert session.moves_used == 0
    assert deselected[0]['reason'] == 'reselect'


def test_out_of_bounds_is_invalid_and_keeps_selection():
    session = make_session(NO_MATCH_4)
    rejected = capture(session, EVENT_INPUT_REJECTED)
    session.select_cell(0, 0)
    assert session.select_cell(4, 0).status is SelectionResult.INVALID
    assert session.select_cell(-1, 2).status is SelectionResult.INVALID
    assert session.selection == ((0, 0),)
    assert [event['reason'] for event in rejected] == ['out_of_bounds', 'out_of_bounds']


def test_off_axis_click_moves_selection():
    session = make_session(NO_MATCH_4)
    slides = capture(session, EVENT_TILE_SLIDE)
    session.select_cell(0, 0)
    outcome = session.select_cell(1, 1)
    assert outcome.status is SelectionResult.RECORDED
    assert session.selection == ((1, 1),)
    assert slides == []
    assert session.colors == NO_MATCH_4


def test_aligned_pair_executes_slide_and_counts_move():
    session = make_session(NO_MATCH_4)
    slides = capture(session, EVENT_TILE_SLIDE)
    session.select_cell(0, 0)
    outcome = session.select_cell(0, 2)
    assert outcome.status is SelectionResult.MOVED
    assert outcome.direction == 'right'
    assert outcome.path == [(0, 0), (0, 1), (0, 2)]
    assert outcome.grid.colors()[0] == ['green', 'red', 'blue', 'yellow']
    assert session.selection == ()
    assert session.moves_used == 1
    assert slides and slides[0]['src'] == (0, 0) and slides[0]['dst'] == (0, 2)


def test_input_rejected_while_resolving():
    session = make_session(NO_MATCH_4)
    rejected = capture(session, EVENT_INPUT_REJECTED)
    session.select_cell(0, 0)
    session.select_cell(0, 2)
    assert session.busy
    assert session.select_cell(3, 3).status is SelectionResult.REJECTED
    assert rejected[-1]['reason'] == 'resolving'
    session.settle()
    assert not session.busy
    assert session.select_cell(3, 3).status is SelectionResult.RECORDED


def test_clear_selection_and_click_events():
    session = make_session(NO_MATCH_4)
    assert session.clear_selection() is False
    session.event_bus.emit(EVENT_TILE_CLICK, row=2, col=3)
    assert session.selection == ((2, 3),)
    assert session.clear_selection() is True
    assert session.selection == ()
