from dataclasses import dataclass


def tile_id(row: int, col: int) -> str:
    return f"{row}-{col}"


@dataclass(slots=True)
class Tile:
    """Single colored tile.

    ``id`` mirrors the tile's current position and is reassigned whenever the
    tile moves; it is a display key, not a stable identity.
    """
    id: str
    color: str
    matched: bool = False
