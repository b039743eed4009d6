"""Core gameplay logic: manual moves plus walk-based shuffle and solve."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import StrEnum

from backend.engine.gamegenerator import WalkGenerator
from backend.engine.gamerules import is_legal_click
from backend.engine.gamesolver import Solver
from backend.engine.gamestate import GameState
from backend.errors import EngineBusy, IllegalMove, InvariantViolation, NoPathError
from backend.models.grid import Grid
from backend.models.move import Move

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolvedEvent:
    grid: Grid
    moves: int


SolvedListener = Callable[[SolvedEvent], None]


class SequenceKind(StrEnum):
    SHUFFLE = "shuffle"
    SOLVE = "solve"


class StepSequence:
    """One in-flight shuffle or solve, advanced a whole move at a time.

    Each ``next()`` commits exactly one move to the grid and the path, so
    the engine is consistent whenever control leaves this object.
    """

    def __init__(
        self,
        kind: SequenceKind,
        steps: Iterator[Move],
        on_finish: Callable[[StepSequence, bool], None],
    ) -> None:
        self.kind = kind
        self.applied = 0
        self.cancelled = False
        self._steps = steps
        self._on_finish = on_finish
        self._done = False

    @property
    def done(self) -> bool:
        return self._done

    def __iter__(self) -> StepSequence:
        return self

    def __next__(self) -> Move:
        if self._done:
            raise StopIteration
        try:
            move = next(self._steps)
        except StopIteration:
            self._finish(completed=True)
            raise
        except BaseException:
            self._finish(completed=False)
            raise
        self.applied += 1
        return move

    def run(self) -> list[Move]:
        """Apply every remaining step and return them."""
        return list(self)

    def cancel(self) -> None:
        """Stop between steps; the moves already applied stay applied."""
        if self._done:
            return
        self.cancelled = True
        self._steps.close()
        self._finish(completed=False)

    def _finish(self, completed: bool) -> None:
        self._done = True
        self._on_finish(self, completed)


class PuzzleEngine:
    """Owns the grid and the recorded walk of a single game session."""

    def __init__(self, side: int = 16, rng: random.Random | None = None) -> None:
        self.side = side
        self.state = GameState(Grid.solved(side))
        self._generator = WalkGenerator(rng)
        self._active: StepSequence | None = None
        self._solved_listeners: list[SolvedListener] = []

    @classmethod
    def from_grid(cls, grid: Grid, rng: random.Random | None = None) -> PuzzleEngine:
        """Create an engine around an existing grid (e.g. a test fixture)."""
        grid.validate()
        engine = cls(grid.side, rng)
        engine.state.grid = grid
        engine.state.anchored = grid.is_solved()
        return engine

    # -- queries --------------------------------------------------------------

    @property
    def grid(self) -> Grid:
        return self.state.grid

    @property
    def path(self) -> tuple[Move, ...]:
        return tuple(self.state.path)

    @property
    def busy(self) -> bool:
        return self._active is not None

    @property
    def active(self) -> StepSequence | None:
        return self._active

    @property
    def anchored(self) -> bool:
        """Whether the recorded walk leads back to the solved grid."""
        return self.state.anchored

    @property
    def is_solved(self) -> bool:
        return self.state.is_solved

    def add_solved_listener(self, listener: SolvedListener) -> None:
        self._solved_listeners.append(listener)

    # -- manual play ----------------------------------------------------------

    def apply_manual_move(self, index: int) -> tuple[Grid, SolvedEvent | None]:
        """Slide the tile at *index* into the adjacent blank.

        Manual moves cannot be undone through the recorded walk, so the
        path is dropped and replay solving stays unavailable until the
        grid is solved again.
        """
        self._ensure_idle()
        grid = self._checked_grid()
        if not is_legal_click(grid, index):
            logger.debug("Rejected click on cell %d", index)
            raise IllegalMove(f"Cell {index} is not next to the blank.")

        self.state.grid = grid.swap(grid.index_of_blank(), index)
        self.state.path.clear()
        self.state.anchored = self.state.grid.is_solved()
        self.state.increment_moves()
        return self.state.grid, self._check_solved()

    # -- shuffle --------------------------------------------------------------

    def begin_shuffle(self, move_count: int) -> StepSequence:
        """Start a stepwise shuffle of *move_count* random moves."""
        grid, previous = self._shuffle_origin(move_count)
        return self._start(
            SequenceKind.SHUFFLE, self._shuffle_steps(grid, move_count, previous)
        )

    def shuffle(self, move_count: int) -> list[Move]:
        """Run a whole shuffle at once and return its path segment."""
        grid, previous = self._shuffle_origin(move_count)
        grid, segment = self._generator.generate(grid, move_count, previous)
        self.state.grid = grid
        self.state.path.extend(segment)
        self._shuffled(len(segment))
        return segment

    def _shuffle_origin(self, move_count: int) -> tuple[Grid, int | None]:
        if move_count < 0:
            raise ValueError(f"Shuffle move count cannot be negative, got {move_count}.")
        self._ensure_idle()
        grid = self._checked_grid()
        if grid.is_solved():
            self.state.path.clear()
            self.state.anchored = True
        previous = self.state.path[-1].blank_index if self.state.path else None
        return grid, previous

    def _shuffle_steps(
        self, grid: Grid, move_count: int, previous: int | None
    ) -> Iterator[Move]:
        for grid, move in self._generator.walk(grid, move_count, previous):
            self.state.grid = grid
            self.state.path.append(move)
            yield move

    # -- solve ----------------------------------------------------------------

    def begin_solve(self) -> StepSequence:
        """Start undoing the recorded walk, last move first."""
        self._ensure_idle()
        self._checked_grid()
        if not self.state.path:
            raise NoPathError("No recorded walk to reverse.")
        if not self.state.anchored:
            raise NoPathError("The recorded walk does not start from the solved grid.")
        return self._start(SequenceKind.SOLVE, self._solve_steps())

    def solve_by_replay(self) -> None:
        self.begin_solve().run()

    def _solve_steps(self) -> Iterator[Move]:
        path = self.state.path
        for undo in Solver.reversal(path):
            try:
                self.state.grid = Solver.replay(self.state.grid, [undo])
            except InvariantViolation:
                logger.error("Recorded walk no longer fits the grid", exc_info=True)
                raise
            path.pop()
            yield undo
        if not self.state.grid.is_solved():
            logger.error("Replaying the recorded walk did not restore the solved grid")
            raise InvariantViolation("Recorded walk does not lead back to the solved grid.")

    def solve_directly(self) -> SolvedEvent:
        """Jump straight to the solved grid without replaying anything."""
        self._ensure_idle()
        self._checked_grid()
        self.state.grid = Grid.solved(self.side)
        self.state.path.clear()
        self.state.anchored = True
        event = self._check_solved()
        assert event is not None
        return event

    # -- session --------------------------------------------------------------

    def reset(self) -> None:
        """Return to the solved grid with an empty walk and cleared counters."""
        self._ensure_idle()
        self.state.reset(Grid.solved(self.side))

    # -- helpers --------------------------------------------------------------

    def _start(self, kind: SequenceKind, steps: Iterator[Move]) -> StepSequence:
        sequence = StepSequence(kind, steps, self._on_sequence_finished)
        self._active = sequence
        logger.debug("Started %s sequence", kind)
        return sequence

    def _on_sequence_finished(self, sequence: StepSequence, completed: bool) -> None:
        if self._active is sequence:
            self._active = None
        logger.debug(
            "%s sequence %s after %d steps",
            sequence.kind,
            "completed" if completed else "stopped",
            sequence.applied,
        )
        if sequence.kind is SequenceKind.SHUFFLE:
            self._shuffled(sequence.applied)
        elif sequence.kind is SequenceKind.SOLVE and completed:
            self._check_solved()

    def _shuffled(self, applied: int) -> None:
        if applied:
            self.state.moves = 0
            self.state.restart_clock()

    def _ensure_idle(self) -> None:
        if self._active is not None:
            raise EngineBusy(f"A {self._active.kind} is already in progress.")

    def _checked_grid(self) -> Grid:
        grid = self.state.grid
        try:
            grid.validate()
        except InvariantViolation:
            logger.error("Grid invariant broken; refusing to continue", exc_info=True)
            raise
        return grid

    def _check_solved(self) -> SolvedEvent | None:
        if not self.state.grid.is_solved():
            return None
        self.state.pause()
        event = SolvedEvent(grid=self.state.grid, moves=self.state.moves)
        for listener in self._solved_listeners:
            listener(event)
        return event
