from __future__ import annotations

import random
from typing import Iterable, Sequence

from slide_puzzle.components.grid import Grid
from slide_puzzle.components.session_config import SessionConfig
from slide_puzzle.session import SessionHandle, new_session
from slide_puzzle.systems.board_ops import get_board
from slide_puzzle.systems.state_utils import get_or_create_resolution_state

PALETTE = ('red', 'blue', 'green', 'yellow', 'purple', 'cyan', 'orange', 'pink')


class ScriptedRandom:
    """Stands in for random.Random: ``choice`` replays a fixed list of colors, then falls back to a seeded draw."""

    def __init__(self, script: Iterable[str] = (), seed: int = 0):
        self.script = list(script)
        self._fallback = random.Random(seed)

    def choice(self, seq):
        if self.script:
            value = self.script.pop(0)
            assert value in seq, f"{value!r} not in palette {seq!r}"
            return value
        return self._fallback.choice(seq)


def install_colors(session: SessionHandle, rows: Sequence[Sequence[str]], *, refill: Iterable[str] = ()) -> None:
    """Replace the board with the given layout and script the next refill colors."""
    board = get_board(session.world)
    board.grid = Grid.from_colors(rows)
    setattr(session.world, "random", ScriptedRandom(refill))
    state = get_or_create_resolution_state(session.world)
    state.marked = []
    state.depth = 0
    state.pending_check = True


def make_session(rows: Sequence[Sequence[str]], mode: str = 'endless', *, refill: Iterable[str] = (), **config) -> SessionHandle:
    """Session on a fixed layout that has already been settled."""
    session = new_session(mode, SessionConfig(grid_size=len(rows), palette=PALETTE, **config), seed=1)
    install_colors(session, rows, refill=refill)
    session.settle()
    return session


def capture(session: SessionHandle, name: str) -> list[dict]:
    received: list[dict] = []
    session.subscribe(name, lambda sender, **payload: received.append(payload))
    return received
