"""Adjacency and click legality."""

from __future__ import annotations

import itertools

import pytest

from backend.engine.gamerules import (
    is_adjacent,
    is_legal_click,
    neighbors_of,
    tile_for_direction,
)
from backend.models.grid import Grid
from backend.models.move import Direction


@pytest.mark.parametrize(
    ("index", "expected"),
    [
        (0, {4, 1}),          # top-left corner
        (3, {7, 2}),          # top-right corner
        (15, {11, 14}),       # bottom-right corner
        (1, {5, 0, 2}),       # top edge
        (4, {0, 8, 5}),       # left edge, no wrap to 3
        (7, {3, 11, 6}),      # right edge, no wrap to 8
        (5, {1, 9, 4, 6}),    # interior
    ],
)
def test_neighbors_of_4x4(index: int, expected: set[int]) -> None:
    assert set(neighbors_of(index, 4)) == expected


def test_neighbors_are_listed_up_down_left_right() -> None:
    assert neighbors_of(5, 4) == [1, 9, 4, 6]


@pytest.mark.parametrize("side", [2, 3, 4, 5])
def test_adjacency_is_symmetric(side: int) -> None:
    cells = range(side * side)
    for a, b in itertools.product(cells, cells):
        assert is_adjacent(a, b, side) == is_adjacent(b, a, side)


def test_adjacency_never_diagonal_or_wrapping() -> None:
    assert is_adjacent(0, 1, 4)
    assert is_adjacent(0, 4, 4)
    assert not is_adjacent(0, 5, 4)
    assert not is_adjacent(3, 4, 4)
    assert not is_adjacent(0, 0, 4)
    assert not is_adjacent(15, 16, 4)
    assert not is_adjacent(-1, 0, 4)


def test_legal_click_on_solved_grid() -> None:
    grid = Grid.solved(4)

    assert is_legal_click(grid, 14)
    assert is_legal_click(grid, 11)
    assert not is_legal_click(grid, 0)
    assert not is_legal_click(grid, 10)
    assert not is_legal_click(grid, 15)  # the blank itself
    assert not is_legal_click(grid, 16)


@pytest.mark.parametrize(
    ("direction", "expected"),
    [
        (Direction.UP, None),
        (Direction.LEFT, None),
        (Direction.DOWN, 11),
        (Direction.RIGHT, 14),
    ],
)
def test_tile_for_direction_from_corner(direction: Direction, expected: int | None) -> None:
    assert tile_for_direction(Grid.solved(4), direction) == expected
