from typing import Optional, Type, TypeVar

from esper import World

from slide_puzzle.components.combo_state import ComboState
from slide_puzzle.components.resolution_state import ResolutionState
from slide_puzzle.components.score_state import ScoreState
from slide_puzzle.components.selection import Selection
from slide_puzzle.components.session_clock import SessionClock
from slide_puzzle.components.session_state import SessionState

C = TypeVar("C")


def get_or_create(world: World, component_type: Type[C]) -> C:
    """Return the singleton component of component_type, creating it if absent."""
    existing = world.get_component(component_type)
    if existing:
        return existing[0][1]
    world.create_entity(component_type())
    return world.get_component(component_type)[0][1]


def get_or_create_resolution_state(world: World) -> ResolutionState:
    return get_or_create(world, ResolutionState)


def get_score_state(world: World) -> ScoreState:
    return get_or_create(world, ScoreState)


def get_combo_state(world: World) -> ComboState:
    return get_or_create(world, ComboState)


def get_selection(world: World) -> Selection:
    return get_or_create(world, Selection)


def get_clock(world: World) -> SessionClock:
    return get_or_create(world, SessionClock)


def get_session_state(world: World) -> SessionState:
    return get_or_create(world, SessionState)


def set_session_state(world: World, state: SessionState) -> Optional[SessionState]:
    """Replace the session snapshot atomically, returning the previous one if any."""
    entries = world.get_component(SessionState)
    if not entries:
        world.create_entity(state)
        return None
    entity, previous = entries[0]
    world.add_component(entity, state)
    return previous
