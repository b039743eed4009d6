from backend.engine.gamerules.rules import (
    is_adjacent,
    is_legal_click,
    neighbors_of,
    tile_for_direction,
)

__all__ = ["is_adjacent", "is_legal_click", "neighbors_of", "tile_for_direction"]
