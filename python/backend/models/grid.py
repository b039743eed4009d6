"""Grid model for the sliding puzzle."""

from __future__ import annotations

from dataclasses import dataclass

from backend.errors import InvariantViolation


@dataclass(frozen=True)
class Tile:
    """One image piece.  ``id`` never changes while the tile moves around."""

    id: int
    home_position: int
    is_blank: bool = False


@dataclass(frozen=True)
class Grid:
    """An immutable ``side``×``side`` arrangement of tiles, stored row-major.

    ``tiles[i]`` is the tile currently sitting in cell ``i``.  The blank tile
    always carries the last id (``side * side - 1``).
    """

    side: int
    tiles: tuple[Tile, ...]

    # -- construction helpers -------------------------------------------------

    @classmethod
    def solved(cls, side: int) -> Grid:
        """Return the goal arrangement (every tile at home, blank bottom-right)."""
        if side < 2:
            raise ValueError(f"Grid side must be at least 2, got {side}.")
        count = side * side
        tiles = tuple(Tile(id=i, home_position=i, is_blank=i == count - 1) for i in range(count))
        return cls(side=side, tiles=tiles)

    @classmethod
    def from_ids(cls, side: int, ids: list[int]) -> Grid:
        """Create a grid from a flat row-major list of tile ids.

        Example::

            Grid.from_ids(2, [0, 3, 2, 1])
        """
        count = side * side
        if len(ids) != count:
            raise ValueError(
                f"Expected {count} tiles for a {side}×{side} grid, got {len(ids)}."
            )
        tiles = tuple(Tile(id=i, home_position=i, is_blank=i == count - 1) for i in ids)
        return cls(side=side, tiles=tiles)

    # -- queries --------------------------------------------------------------

    @property
    def size(self) -> int:
        return len(self.tiles)

    @property
    def blank_id(self) -> int:
        return self.side * self.side - 1

    def ids(self) -> tuple[int, ...]:
        return tuple(t.id for t in self.tiles)

    def row_col(self, index: int) -> tuple[int, int]:
        return divmod(index, self.side)

    def index_of_blank(self) -> int:
        """Return the cell holding the blank tile."""
        found = [i for i, t in enumerate(self.tiles) if t.is_blank]
        if len(found) != 1:
            raise InvariantViolation(
                f"Expected exactly one blank tile, found {len(found)}."
            )
        return found[0]

    def is_solved(self) -> bool:
        """Check if every tile sits in the cell matching its id."""
        return all(t.id == i for i, t in enumerate(self.tiles))

    def is_tile_correct(self, index: int) -> bool:
        return self.tiles[index].home_position == index

    def validate(self) -> None:
        """Raise ``InvariantViolation`` unless the grid is a full permutation."""
        count = self.side * self.side
        if len(self.tiles) != count:
            raise InvariantViolation(
                f"Grid holds {len(self.tiles)} tiles, expected {count}."
            )
        if sorted(self.ids()) != list(range(count)):
            raise InvariantViolation("Tile ids are not a permutation of 0..N-1.")
        for t in self.tiles:
            if t.is_blank != (t.id == count - 1):
                raise InvariantViolation(f"Tile {t.id} has a wrong blank flag.")
        self.index_of_blank()

    # -- transformation -------------------------------------------------------

    def swap(self, i: int, j: int) -> Grid:
        """Return a new grid with cells *i* and *j* exchanged.

        No legality check: that belongs to the move rules.
        """
        tiles = list(self.tiles)
        tiles[i], tiles[j] = tiles[j], tiles[i]
        return Grid(side=self.side, tiles=tuple(tiles))
