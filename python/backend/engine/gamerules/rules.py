"""Grid rules: adjacency, movability and the win condition.

All functions here are pure: they never mutate their arguments and are safe
to call from any frontend.
"""

from __future__ import annotations

from collections.abc import Iterable

from backend.errors import InvalidPositionError
from backend.models.board import Position, Tile

# up, down, left, right
_OFFSETS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


def get_adjacent_positions(position: Position, size: int) -> list[Position]:
    """Return the orthogonal neighbours of *position* inside a *size*×*size* grid.

    Raises ``InvalidPositionError`` if *position* itself is off the grid.
    """
    if not position.in_bounds(size):
        raise InvalidPositionError(position.row, position.col, size)

    neighbors: list[Position] = []
    for dr, dc in _OFFSETS:
        candidate = position.offset(dr, dc)
        if candidate.in_bounds(size):
            neighbors.append(candidate)
    return neighbors


def are_adjacent(a: Position, b: Position) -> bool:
    return abs(a.row - b.row) + abs(a.col - b.col) == 1


def movable_tile_ids(
    tiles: Iterable[Tile], empty_position: Position, size: int
) -> frozenset[int]:
    """Ids of the tiles that can slide into *empty_position*."""
    adjacent = set(get_adjacent_positions(empty_position, size))
    return frozenset(t.id for t in tiles if t.current_position in adjacent)


def is_puzzle_complete(tiles: Iterable[Tile]) -> bool:
    """True iff every tile sits on its correct position."""
    return all(t.current_position == t.correct_position for t in tiles)
