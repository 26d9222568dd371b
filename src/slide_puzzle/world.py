import random

from esper import World
from slide_puzzle.components.board import Board
from slide_puzzle.components.combo_state import ComboState
from slide_puzzle.components.grid import create_grid
from slide_puzzle.components.resolution_state import ResolutionState
from slide_puzzle.components.score_state import ScoreState
from slide_puzzle.components.selection import Selection
from slide_puzzle.components.session_clock import SessionClock
from slide_puzzle.components.session_config import SessionConfig
from slide_puzzle.components.session_state import GameMode


def create_world(
    mode: GameMode | str = GameMode.ENDLESS,
    config: SessionConfig | None = None,
    *,
    rng: random.Random | None = None,
) -> World:
    """Build a world holding one board plus the session singletons.

    The freshly generated grid is not resolved here; the resolution state is
    flagged so the first detection pass handles any pre-existing matches.
    """
    mode = GameMode.parse(mode)
    config = (config or SessionConfig()).for_mode(mode)
    world = World()
    setattr(world, "random", rng or random.Random())
    setattr(world, "config", config)

    palette = config.colors()
    grid = create_grid(config.grid_size, palette, world.random)
    world.create_entity(Board(grid=grid, palette=palette))

    # Session-wide state lives on a single entity.
    world.create_entity(
        config.initial_state(mode),
        ScoreState(),
        ComboState(),
        Selection(),
        SessionClock(),
        ResolutionState(pending_check=True),
    )
    return world
