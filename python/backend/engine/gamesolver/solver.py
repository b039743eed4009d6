"""Reversal of recorded walks."""

from __future__ import annotations

from collections.abc import Sequence

from backend.errors import InvariantViolation
from backend.models.grid import Grid
from backend.models.move import Move


class Solver:
    """Stateless helpers; all methods are static."""

    @staticmethod
    def reversal(path: Sequence[Move]) -> list[Move]:
        """Return the moves that undo *path*, in the order to apply them."""
        return [move.reversed() for move in reversed(path)]

    @staticmethod
    def replay(grid: Grid, moves: Sequence[Move]) -> Grid:
        """Apply *moves* to *grid* in order and return the result.

        Each move must start from the current blank cell; a path recorded
        against some other grid raises ``InvariantViolation``.
        """
        for move in moves:
            if not grid.tiles[move.blank_index].is_blank:
                raise InvariantViolation(
                    f"Move {move} does not start at the blank "
                    f"(blank is at {grid.index_of_blank()})."
                )
            grid = grid.swap(move.blank_index, move.neighbor_index)
        return grid
