"""Adjacency and legal-move rules over the grid."""

from __future__ import annotations

from backend.models.grid import Grid
from backend.models.move import Direction

# Offset from the blank to the tile that slides when the player pushes
# in a direction.  UP moves the tile *below* the blank upward, etc.
_DIRECTION_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (1, 0),
    Direction.DOWN: (-1, 0),
    Direction.LEFT: (0, 1),
    Direction.RIGHT: (0, -1),
}


def neighbors_of(index: int, side: int) -> list[int]:
    """Return the up/down/left/right cells of *index* that exist on the board."""
    row, col = divmod(index, side)
    neighbors: list[int] = []
    for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
        nr, nc = row + dr, col + dc
        if 0 <= nr < side and 0 <= nc < side:
            neighbors.append(nr * side + nc)
    return neighbors


def is_adjacent(a: int, b: int, side: int) -> bool:
    count = side * side
    if not (0 <= a < count and 0 <= b < count):
        return False
    return b in neighbors_of(a, side)


def is_legal_click(grid: Grid, clicked_index: int) -> bool:
    """True if the clicked tile can slide into the blank."""
    if not 0 <= clicked_index < grid.size:
        return False
    if grid.tiles[clicked_index].is_blank:
        return False
    return is_adjacent(clicked_index, grid.index_of_blank(), grid.side)


def tile_for_direction(grid: Grid, direction: Direction) -> int | None:
    """Return the cell whose tile would slide in *direction*, or ``None``."""
    br, bc = grid.row_col(grid.index_of_blank())
    dr, dc = _DIRECTION_OFFSETS[direction]
    tr, tc = br + dr, bc + dc
    if not (0 <= tr < grid.side and 0 <= tc < grid.side):
        return None
    return tr * grid.side + tc
