"""Stage machine: delayed transitions, placement, and reset races."""

from __future__ import annotations

from backend.engine.gamemode import GameModeMachine
from backend.models.mode import GameMode, Stage


def _machine(scheduler, changes: list[GameMode] | None = None) -> GameModeMachine:
    return GameModeMachine(
        scheduler,
        final_piece_delay=1.0,
        completion_delay=2.0,
        on_change=changes.append if changes is not None else None,
    )


def test_starts_sliding(scheduler) -> None:
    machine = _machine(scheduler)

    assert machine.mode == GameMode(Stage.SLIDING, placed=False)
    assert machine.accepts_sliding


def test_solved_moves_to_final_piece_after_delay(scheduler) -> None:
    changes: list[GameMode] = []
    machine = _machine(scheduler, changes)

    machine.handle_solved()
    assert machine.transition_pending
    assert not machine.accepts_sliding

    scheduler.advance(0.75)
    assert machine.stage is Stage.SLIDING

    scheduler.advance(0.25)
    assert machine.stage is Stage.FINAL_PIECE
    assert not machine.transition_pending
    assert changes == [GameMode(Stage.FINAL_PIECE)]


def test_repeated_solved_events_schedule_once(scheduler) -> None:
    machine = _machine(scheduler)

    machine.handle_solved()
    machine.handle_solved()

    assert len(scheduler.pending) == 1


def test_placement_only_counts_once(scheduler) -> None:
    machine = _machine(scheduler)
    machine.handle_solved()
    scheduler.advance(1.0)

    assert machine.place_final_piece() is True
    assert machine.placed
    assert machine.place_final_piece() is False

    scheduler.advance(1.5)
    assert machine.stage is Stage.FINAL_PIECE
    scheduler.advance(0.5)
    assert machine.mode == GameMode(Stage.COMPLETED, placed=True)


def test_early_placement_is_a_no_op(scheduler) -> None:
    machine = _machine(scheduler)

    assert machine.place_final_piece() is False
    machine.handle_solved()
    assert machine.place_final_piece() is False
    assert machine.stage is Stage.SLIDING


def test_completed_ignores_solved_and_placement(scheduler) -> None:
    machine = _machine(scheduler)
    machine.handle_solved()
    scheduler.advance(1.0)
    machine.place_final_piece()
    scheduler.advance(2.0)

    machine.handle_solved()
    assert machine.place_final_piece() is False
    assert scheduler.pending == []
    assert machine.stage is Stage.COMPLETED


def test_reset_cancels_pending_transition(scheduler) -> None:
    machine = _machine(scheduler)
    machine.handle_solved()

    machine.reset()
    scheduler.advance(5.0)

    assert machine.stage is Stage.SLIDING
    assert not machine.transition_pending


def test_stale_timer_is_ignored_after_reset(scheduler) -> None:
    machine = _machine(scheduler)
    machine.handle_solved()
    stale = scheduler.pending[0]

    machine.reset()
    stale.callback()

    assert machine.stage is Stage.SLIDING


def test_reset_from_completed(scheduler) -> None:
    changes: list[GameMode] = []
    machine = _machine(scheduler, changes)
    machine.handle_solved()
    scheduler.advance(1.0)
    machine.place_final_piece()
    scheduler.advance(2.0)

    machine.reset()

    assert machine.mode == GameMode()
    assert changes[-1] == GameMode()
