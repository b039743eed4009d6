"""Generates shuffles as random walks of the blank tile."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterator

from backend.engine.gamerules import neighbors_of
from backend.models.grid import Grid
from backend.models.move import Move

logger = logging.getLogger(__name__)


class WalkGenerator:
    """Scrambles a grid with random legal moves, recording each one.

    Every shuffled grid is reachable from the solved one by construction,
    so no parity check is ever needed.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def walk(
        self, grid: Grid, count: int, previous: int | None = None
    ) -> Iterator[tuple[Grid, Move]]:
        """Yield ``(grid, move)`` after each of *count* steps.

        *previous* is the cell the blank occupied before its last step, so a
        walk continued across calls still avoids stepping straight back.
        """
        blank = grid.index_of_blank()
        for _ in range(count):
            candidates = neighbors_of(blank, grid.side)
            if previous in candidates and len(candidates) > 1:
                candidates.remove(previous)
            target = self._rng.choice(candidates)
            move = Move(blank_index=blank, neighbor_index=target)
            grid = grid.swap(blank, target)
            yield grid, move
            previous, blank = blank, target

    def generate(
        self, grid: Grid, count: int, previous: int | None = None
    ) -> tuple[Grid, list[Move]]:
        """Run a whole walk and return the final grid with its path segment."""
        segment: list[Move] = []
        for grid, move in self.walk(grid, count, previous):
            segment.append(move)
        logger.debug("Generated a %d-step walk on a %dx%d grid", len(segment), grid.side, grid.side)
        return grid, segment
