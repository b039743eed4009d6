"""Tracks the mutable state of a game in progress."""

from __future__ import annotations

import time

from backend.models.grid import Grid
from backend.models.move import Move


class GameState:
    """Holds the current grid, the recorded walk, move counter, and elapsed time."""

    def __init__(self, grid: Grid) -> None:
        self.grid = grid
        self.path: list[Move] = []
        # True while replaying path from the solved grid reproduces grid.
        self.anchored: bool = grid.is_solved()
        self.moves: int = 0
        self._start_time: float = time.time()
        self._elapsed_banked: float = 0.0
        self._running: bool = False

    def reset(self, grid: Grid) -> None:
        self.grid = grid
        self.path.clear()
        self.anchored = grid.is_solved()
        self.moves = 0
        self._elapsed_banked = 0.0
        self._running = False

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        if self._running:
            return self._elapsed_banked + (time.time() - self._start_time)
        return self._elapsed_banked

    def restart_clock(self) -> None:
        self._elapsed_banked = 0.0
        self._start_time = time.time()
        self._running = True

    def pause(self) -> None:
        if self._running:
            self._elapsed_banked += time.time() - self._start_time
            self._running = False

    # -- moves ----------------------------------------------------------------

    def increment_moves(self) -> None:
        self.moves += 1

    @property
    def is_solved(self) -> bool:
        return self.grid.is_solved()
