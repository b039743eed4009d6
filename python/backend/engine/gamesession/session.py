"""Async orchestration of one game session.

Ties the puzzle engine and the stage machine to an asyncio event loop and
exposes the request/notify surface a frontend talks to.  Shuffles and
solves run as tasks that yield back to the loop between frames so the
frontend can paint intermediate grids.
"""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Callable

from backend.config import GameConfig
from backend.engine.gamemode import GameModeMachine, Scheduler
from backend.engine.gameplay import PuzzleEngine, SolvedEvent, StepSequence
from backend.errors import WrongMode
from backend.models.grid import Grid
from backend.models.mode import GameMode
from backend.models.move import Move

logger = logging.getLogger(__name__)

StateListener = Callable[[Grid, GameMode], None]


class GameSession:
    """The single owned ``{grid, path, mode}`` aggregate of a running game."""

    def __init__(
        self,
        config: GameConfig | None = None,
        on_state_changed: StateListener | None = None,
        scheduler: Scheduler | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or GameConfig()
        self.on_state_changed = on_state_changed
        if rng is None:
            rng = random.Random(self.config.seed)
        self.engine = PuzzleEngine(self.config.side, rng)
        self.machine = GameModeMachine(
            scheduler or asyncio.get_running_loop(),
            final_piece_delay=self.config.final_piece_delay,
            completion_delay=self.config.completion_delay,
            on_change=lambda _mode: self._notify(),
        )
        self.engine.add_solved_listener(self._on_solved)
        self._sequence: StepSequence | None = None
        self._task: asyncio.Task[None] | None = None

    # -- snapshot -------------------------------------------------------------

    @property
    def grid(self) -> Grid:
        return self.engine.grid

    @property
    def mode(self) -> GameMode:
        return self.machine.mode

    @property
    def path(self) -> tuple[Move, ...]:
        return self.engine.path

    @property
    def busy(self) -> bool:
        return self.engine.busy

    @property
    def moves(self) -> int:
        return self.engine.state.moves

    @property
    def elapsed_time(self) -> float:
        return self.engine.state.elapsed_time

    @property
    def task(self) -> asyncio.Task[None] | None:
        return self._task

    # -- requests -------------------------------------------------------------

    def start(self) -> asyncio.Task[None]:
        """Begin a fresh game: solved grid, then the default shuffle."""
        task = self.request_reset(shuffle=True)
        assert task is not None
        return task

    def request_move(self, index: int) -> None:
        self._ensure_sliding("move a tile")
        self.engine.apply_manual_move(index)
        self._notify()

    def request_shuffle(self, move_count: int | None = None) -> asyncio.Task[None]:
        self._ensure_sliding("shuffle")
        if move_count is None:
            move_count = self.config.shuffle_moves
        return self._launch(self.engine.begin_shuffle(move_count))

    def request_solve(self, direct: bool = False) -> asyncio.Task[None] | None:
        """Solve by replaying the recorded walk, or jump there if *direct*.

        A direct solve finishes immediately and returns ``None``.
        """
        self._ensure_sliding("solve")
        if direct:
            self.engine.solve_directly()
            self._notify()
            return None
        return self._launch(self.engine.begin_solve())

    def request_place_final_piece(self) -> bool:
        return self.machine.place_final_piece()

    def request_reset(self, shuffle: bool = True) -> asyncio.Task[None] | None:
        """Abort whatever is running and go back to a solved, sliding game."""
        self.cancel()
        self.engine.reset()
        # machine.reset() notifies, so the engine must already be solved.
        self.machine.reset()
        if shuffle:
            return self.request_shuffle()
        return None

    def cancel(self) -> None:
        """Stop the in-flight shuffle or solve between two steps."""
        if self._sequence is not None:
            self._sequence.cancel()
            self._sequence = None
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    def close(self) -> None:
        self.cancel()
        self.machine.cancel_pending()

    # -- helpers --------------------------------------------------------------

    def _ensure_sliding(self, action: str) -> None:
        if not self.machine.accepts_sliding:
            raise WrongMode(f"Cannot {action} in the {self.machine.stage} stage.")

    def _launch(self, sequence: StepSequence) -> asyncio.Task[None]:
        self._sequence = sequence
        self._task = asyncio.get_running_loop().create_task(self._drive(sequence))
        return self._task

    async def _drive(self, sequence: StepSequence) -> None:
        per_frame = self.config.steps_per_frame
        try:
            for step, _move in enumerate(sequence, start=1):
                if step % per_frame == 0:
                    self._notify()
                    await asyncio.sleep(self.config.step_delay)
            self._notify()
        except asyncio.CancelledError:
            sequence.cancel()
            self._notify()
            raise
        finally:
            if self._sequence is sequence:
                self._sequence = None
                self._task = None

    def _on_solved(self, event: SolvedEvent) -> None:
        logger.info("Puzzle solved after %d manual moves", event.moves)
        self.machine.handle_solved()

    def _notify(self) -> None:
        if self.on_state_changed is not None:
            self.on_state_changed(self.engine.grid, self.machine.mode)
