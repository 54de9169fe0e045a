"""Board model for the sliding puzzle game."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum

from backend.errors import InvalidBoardError, InvalidSizeError


class Direction(StrEnum):
    """Direction the *tile* slides into the empty slot."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True, order=True)
class Position:
    """Zero-based grid cell."""

    row: int
    col: int

    def offset(self, dr: int, dc: int) -> Position:
        return Position(self.row + dr, self.col + dc)

    def in_bounds(self, size: int) -> bool:
        return 0 <= self.row < size and 0 <= self.col < size

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"


@dataclass
class Tile:
    """A single tile; ``id`` is stable for the lifetime of a game."""

    id: int
    current_position: Position
    correct_position: Position

    @property
    def is_correct(self) -> bool:
        return self.current_position == self.correct_position

    def copy(self) -> Tile:
        return replace(self)


@dataclass
class Board:
    """Tile layout plus the separately tracked empty slot.

    Tile ``i`` belongs at ``(i // size, i % size)``; the solved board keeps
    the empty slot in the bottom-right corner.
    """

    size: int
    tiles: list[Tile]
    empty_position: Position

    # -- construction helpers -------------------------------------------------

    @classmethod
    def solved(cls, size: int) -> Board:
        if size < 2:
            raise InvalidSizeError(size)
        tiles = [
            Tile(
                id=i,
                current_position=Position(i // size, i % size),
                correct_position=Position(i // size, i % size),
            )
            for i in range(size * size - 1)
        ]
        return cls(size=size, tiles=tiles, empty_position=Position(size - 1, size - 1))

    @classmethod
    def from_flat(cls, size: int, flat: list[int]) -> Board:
        """Create a board from a flat row-major list of tile labels.

        Labels are 1-based (label ``k`` is tile id ``k - 1``) and ``0`` marks
        the empty slot::

            Board.from_flat(3, [1, 2, 3, 4, 5, 6, 7, 0, 8])
        """
        if size < 2:
            raise InvalidSizeError(size)
        if len(flat) != size * size:
            raise InvalidBoardError(
                f"Expected {size * size} tiles for a {size}×{size} board, "
                f"got {len(flat)}."
            )
        tiles: list[Tile] = []
        empty: Position | None = None
        for index, label in enumerate(flat):
            pos = Position(index // size, index % size)
            if label == 0:
                empty = pos
                continue
            tile_id = label - 1
            tiles.append(
                Tile(
                    id=tile_id,
                    current_position=pos,
                    correct_position=Position(tile_id // size, tile_id % size),
                )
            )
        if empty is None:
            raise InvalidBoardError("Board has no empty slot.")
        board = cls(size=size, tiles=sorted(tiles, key=lambda t: t.id), empty_position=empty)
        board.validate()
        return board

    # -- queries --------------------------------------------------------------

    def tile_by_id(self, tile_id: int) -> Tile | None:
        if 0 <= tile_id < len(self.tiles) and self.tiles[tile_id].id == tile_id:
            return self.tiles[tile_id]
        for tile in self.tiles:
            if tile.id == tile_id:
                return tile
        return None

    def tile_at(self, position: Position) -> Tile | None:
        for tile in self.tiles:
            if tile.current_position == position:
                return tile
        return None

    def grid(self) -> list[list[int | None]]:
        """Row-major tile ids, ``None`` for the empty slot."""
        rows: list[list[int | None]] = [
            [None] * self.size for _ in range(self.size)
        ]
        for tile in self.tiles:
            rows[tile.current_position.row][tile.current_position.col] = tile.id
        return rows

    def is_solved(self) -> bool:
        return all(tile.is_correct for tile in self.tiles)

    def validate(self) -> None:
        """Raise ``InvalidBoardError`` unless tiles + empty slot cover the grid once."""
        expected_ids = set(range(self.size * self.size - 1))
        ids = [t.id for t in self.tiles]
        if len(ids) != len(expected_ids) or set(ids) != expected_ids:
            raise InvalidBoardError(f"Tile ids {sorted(ids)} do not match 0..{self.size * self.size - 2}.")

        cells = [t.current_position for t in self.tiles] + [self.empty_position]
        if any(not p.in_bounds(self.size) for p in cells):
            raise InvalidBoardError("A tile or the empty slot lies outside the grid.")
        if len(set(cells)) != self.size * self.size:
            raise InvalidBoardError("Two cells are occupied by the same tile or the empty slot.")

    def copy(self) -> Board:
        return Board(
            size=self.size,
            tiles=[t.copy() for t in self.tiles],
            empty_position=self.empty_position,
        )
