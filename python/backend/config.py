"""Game configuration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GameConfig:
    """Tunable constants of one game session.

    Only ``side`` and ``shuffle_moves`` affect the puzzle itself; the delays
    and ``steps_per_frame`` only control how fast sequences are painted.
    """

    side: int = 16
    shuffle_moves: int = 500
    step_delay: float = 0.01
    steps_per_frame: int = 20
    final_piece_delay: float = 1.0
    completion_delay: float = 1.0
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.side < 2:
            raise ValueError(f"Grid side must be at least 2, got {self.side}.")
        if self.shuffle_moves < 0:
            raise ValueError(
                f"Shuffle move count cannot be negative, got {self.shuffle_moves}."
            )
        if self.steps_per_frame < 1:
            raise ValueError(
                f"steps_per_frame must be at least 1, got {self.steps_per_frame}."
            )
        for name in ("step_delay", "final_piece_delay", "completion_delay"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} cannot be negative.")

    @property
    def tile_count(self) -> int:
        return self.side * self.side
