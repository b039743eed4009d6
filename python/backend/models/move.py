"""Move and direction types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Direction(StrEnum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class Move:
    """The tile at ``neighbor_index`` slides into ``blank_index``.

    Afterwards the blank sits at ``neighbor_index``.
    """

    blank_index: int
    neighbor_index: int

    def reversed(self) -> Move:
        return Move(blank_index=self.neighbor_index, neighbor_index=self.blank_index)
