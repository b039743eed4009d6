"""Game stages shown to the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Stage(StrEnum):
    SLIDING = "sliding"
    FINAL_PIECE = "final_piece"
    COMPLETED = "completed"


@dataclass(frozen=True)
class GameMode:
    stage: Stage = Stage.SLIDING
    placed: bool = False
