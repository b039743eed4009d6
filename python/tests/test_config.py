"""Configuration validation and session bookkeeping."""

from __future__ import annotations

import random

import pytest

from backend.config import GameConfig
from backend.engine.gameplay import PuzzleEngine


def test_defaults() -> None:
    config = GameConfig()

    assert config.side == 16
    assert config.shuffle_moves == 500
    assert config.tile_count == 256


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"side": 1}, "at least 2"),
        ({"shuffle_moves": -1}, "cannot be negative"),
        ({"steps_per_frame": 0}, "at least 1"),
        ({"step_delay": -0.1}, "step_delay"),
        ({"final_piece_delay": -1}, "final_piece_delay"),
        ({"completion_delay": -1}, "completion_delay"),
    ],
)
def test_invalid_values_are_rejected(overrides: dict, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        GameConfig(**overrides)


def test_shuffle_resets_move_counter_and_starts_clock() -> None:
    engine = PuzzleEngine(4, random.Random(1))
    engine.apply_manual_move(14)
    assert engine.state.moves == 1

    engine.shuffle(20)

    assert engine.state.moves == 0
    assert engine.state.elapsed_time >= 0.0


def test_clock_stops_when_solved() -> None:
    engine = PuzzleEngine(4, random.Random(1))
    engine.shuffle(20)

    engine.solve_by_replay()
    frozen = engine.state.elapsed_time

    assert engine.state.elapsed_time == frozen
