from esper import World
from slide_puzzle.events.bus import (EventBus, EVENT_TILES_MATCHED, EVENT_CASCADE_COMPLETE,
                                     EVENT_SCORE_AWARDED, EVENT_COMBO_CHANGED)
from slide_puzzle.constants import COMBO_BONUS_PER_LEVEL, POINTS_PER_TILE
from slide_puzzle.systems.state_utils import get_combo_state, get_score_state


def points_for_pass(total_matched_tiles: int) -> int:
    return total_matched_tiles * POINTS_PER_TILE


def combo_bonus(combo_before: int) -> int:
    return combo_before * COMBO_BONUS_PER_LEVEL if combo_before > 0 else 0


class ScoreSystem:
    """Awards points per matching pass and tracks the combo chain.

    The bonus uses the combo count as it stood before the pass; the counter is
    bumped afterwards. A pass without matches resets the combo to zero.
    """
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TILES_MATCHED, self.on_tiles_matched)
        self.event_bus.subscribe(EVENT_CASCADE_COMPLETE, self.on_cascade_complete)

    def on_tiles_matched(self, sender, **payload):
        total = payload.get('total', 0)
        if total <= 0:
            return
        combo = get_combo_state(self.world)
        score_state = get_score_state(self.world)
        combo_before = combo.count
        base_points = points_for_pass(total)
        bonus = combo_bonus(combo_before)
        combo.count += 1
        score_state.score += base_points + bonus
        self.event_bus.emit(EVENT_COMBO_CHANGED, count=combo.count)
        self.event_bus.emit(
            EVENT_SCORE_AWARDED,
            points=base_points + bonus,
            base_points=base_points,
            bonus=bonus,
            combo_level=combo_before,
            score=score_state.score,
        )

    def on_cascade_complete(self, sender, **payload):
        combo = get_combo_state(self.world)
        if combo.count == 0:
            return
        combo.count = 0
        self.event_bus.emit(EVENT_COMBO_CHANGED, count=0)
