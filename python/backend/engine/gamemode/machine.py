"""Stage transitions: sliding → final piece → completed."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Protocol

from backend.models.mode import GameMode, Stage

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything with ``call_later``; a running asyncio loop qualifies."""

    def call_later(self, delay: float, callback: Callable[[], object]) -> TimerHandle: ...


class GameModeMachine:
    """Owns the game stage and its delayed transitions.

    At most one transition is scheduled at a time.  ``reset`` revokes it,
    and every callback also checks the epoch it was scheduled in, so a
    timer that slips past cancellation cannot act on a newer game.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        final_piece_delay: float = 1.0,
        completion_delay: float = 1.0,
        on_change: Callable[[GameMode], None] | None = None,
    ) -> None:
        self._scheduler = scheduler
        self.final_piece_delay = final_piece_delay
        self.completion_delay = completion_delay
        self._on_change = on_change
        self._stage = Stage.SLIDING
        self._placed = False
        self._epoch = 0
        self._pending: TimerHandle | None = None

    # -- queries --------------------------------------------------------------

    @property
    def mode(self) -> GameMode:
        return GameMode(stage=self._stage, placed=self._placed)

    @property
    def stage(self) -> Stage:
        return self._stage

    @property
    def placed(self) -> bool:
        return self._placed

    @property
    def transition_pending(self) -> bool:
        return self._pending is not None

    @property
    def accepts_sliding(self) -> bool:
        """True while moves, shuffles and solves may be requested."""
        return self._stage is Stage.SLIDING and self._pending is None

    # -- events ---------------------------------------------------------------

    def handle_solved(self) -> None:
        """The grid just became solved; move on to the final piece later."""
        if self._stage is not Stage.SLIDING or self._pending is not None:
            return
        logger.debug("Grid solved; final piece stage in %.2fs", self.final_piece_delay)
        self._schedule(self.final_piece_delay, Stage.SLIDING, Stage.FINAL_PIECE)

    def place_final_piece(self) -> bool:
        """Accept the missing piece.  Returns False when there is nothing to place."""
        if self._stage is not Stage.FINAL_PIECE or self._placed:
            logger.debug("Ignored final piece placement in %s", self._stage)
            return False
        self._placed = True
        self._notify()
        self._schedule(self.completion_delay, Stage.FINAL_PIECE, Stage.COMPLETED)
        return True

    def reset(self) -> None:
        """Go back to sliding, revoking any scheduled transition."""
        self.cancel_pending()
        self._epoch += 1
        self._stage = Stage.SLIDING
        self._placed = False
        self._notify()

    def cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    # -- helpers --------------------------------------------------------------

    def _schedule(self, delay: float, source: Stage, target: Stage) -> None:
        epoch = self._epoch

        def fire() -> None:
            if epoch != self._epoch or self._stage is not source:
                logger.debug("Dropped stale transition to %s", target)
                return
            self._pending = None
            self._stage = target
            logger.info("Entered %s stage", target)
            self._notify()

        self.cancel_pending()
        self._pending = self._scheduler.call_later(delay, fire)

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self.mode)
