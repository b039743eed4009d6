from backend.models.grid import Grid, Tile
from backend.models.mode import GameMode, Stage
from backend.models.move import Direction, Move

__all__ = ["Direction", "GameMode", "Grid", "Move", "Stage", "Tile"]
