"""Typed failures raised by the puzzle engine and session."""

from __future__ import annotations


class PuzzleError(Exception):
    """Base class for every recoverable puzzle failure."""


class IllegalMove(PuzzleError):
    """The clicked tile is the blank, off the board, or not next to the blank."""


class EngineBusy(PuzzleError):
    """A shuffle or solve sequence is already in flight."""


class NoPathError(PuzzleError):
    """Replay-solve was requested but no walk has been recorded."""


class InvariantViolation(PuzzleError):
    """The grid is no longer a valid tile permutation."""


class WrongMode(PuzzleError):
    """The request is not accepted in the current game stage."""
