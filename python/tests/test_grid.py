"""Grid model: construction, queries, and invariant checks."""

from __future__ import annotations

import pytest

from backend.errors import InvariantViolation
from backend.models.grid import Grid, Tile


@pytest.mark.parametrize("side", [2, 3, 4, 7, 16])
def test_solved_grid_is_solved(side: int) -> None:
    grid = Grid.solved(side)

    assert grid.is_solved()
    assert grid.size == side * side
    assert grid.index_of_blank() == side * side - 1
    assert all(t.home_position == i for i, t in enumerate(grid.tiles))
    grid.validate()


def test_solved_rejects_tiny_side() -> None:
    with pytest.raises(ValueError, match="at least 2"):
        Grid.solved(1)


def test_from_ids_marks_last_id_as_blank() -> None:
    grid = Grid.from_ids(2, [3, 0, 1, 2])

    assert grid.index_of_blank() == 0
    assert grid.tiles[0] == Tile(id=3, home_position=3, is_blank=True)
    assert not grid.is_solved()
    assert grid.is_tile_correct(0) is False
    assert grid.row_col(3) == (1, 1)


def test_from_ids_rejects_wrong_length() -> None:
    with pytest.raises(ValueError, match="Expected 4 tiles"):
        Grid.from_ids(2, [0, 1, 2])


def test_swap_returns_new_grid_and_leaves_input_alone() -> None:
    grid = Grid.solved(3)

    swapped = grid.swap(8, 7)

    assert grid.is_solved()
    assert swapped.ids() == (0, 1, 2, 3, 4, 5, 6, 8, 7)
    assert swapped.index_of_blank() == 7
    assert swapped.swap(7, 8) == grid


def test_index_of_blank_without_blank() -> None:
    tiles = tuple(Tile(id=i, home_position=i) for i in range(4))
    grid = Grid(side=2, tiles=tiles)

    with pytest.raises(InvariantViolation, match="found 0"):
        grid.index_of_blank()


def test_index_of_blank_with_two_blanks() -> None:
    tiles = tuple(Tile(id=i, home_position=i, is_blank=i >= 2) for i in range(4))
    grid = Grid(side=2, tiles=tiles)

    with pytest.raises(InvariantViolation, match="found 2"):
        grid.index_of_blank()


def test_validate_catches_duplicate_ids() -> None:
    grid = Grid.from_ids(2, [0, 0, 2, 3])

    with pytest.raises(InvariantViolation, match="permutation"):
        grid.validate()


def test_validate_catches_misplaced_blank_flag() -> None:
    tiles = (
        Tile(0, 0, is_blank=True),
        Tile(1, 1),
        Tile(2, 2),
        Tile(3, 3),
    )

    with pytest.raises(InvariantViolation, match="blank flag"):
        Grid(side=2, tiles=tiles).validate()
