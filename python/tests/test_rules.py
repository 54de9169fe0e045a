"""Adjacency, movability and completion rules."""

from __future__ import annotations

import pytest

from backend.engine.gamerules import (
    are_adjacent,
    get_adjacent_positions,
    is_puzzle_complete,
    movable_tile_ids,
)
from backend.errors import InvalidPositionError
from backend.models.board import Board, Position

# -- adjacency ----------------------------------------------------------------


@pytest.mark.parametrize(
    "position, expected",
    [
        (Position(0, 0), 2),
        (Position(0, 3), 2),
        (Position(3, 3), 2),
        (Position(0, 1), 3),
        (Position(2, 0), 3),
        (Position(3, 2), 3),
        (Position(1, 1), 4),
        (Position(2, 2), 4),
    ],
    ids=str,
)
def test_neighbor_counts_on_4x4(position: Position, expected: int) -> None:
    assert len(get_adjacent_positions(position, 4)) == expected


def test_corner_neighbors_are_exact() -> None:
    assert set(get_adjacent_positions(Position(0, 0), 4)) == {
        Position(1, 0),
        Position(0, 1),
    }


@pytest.mark.parametrize("size", [2, 3, 5])
def test_adjacency_is_symmetric(size: int) -> None:
    cells = [Position(r, c) for r in range(size) for c in range(size)]
    for a in cells:
        for b in get_adjacent_positions(a, size):
            assert a in get_adjacent_positions(b, size)
            assert are_adjacent(a, b)


def test_neighbors_differ_by_one_step_on_one_axis() -> None:
    for n in get_adjacent_positions(Position(2, 2), 5):
        assert abs(n.row - 2) + abs(n.col - 2) == 1


@pytest.mark.parametrize(
    "position",
    [Position(-1, 0), Position(0, -1), Position(3, 0), Position(0, 3)],
    ids=str,
)
def test_out_of_bounds_position_is_rejected(position: Position) -> None:
    with pytest.raises(InvalidPositionError):
        get_adjacent_positions(position, 3)


def test_invalid_position_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        get_adjacent_positions(Position(9, 9), 3)


def test_are_adjacent_rejects_diagonals_and_self() -> None:
    assert not are_adjacent(Position(0, 0), Position(1, 1))
    assert not are_adjacent(Position(1, 1), Position(1, 1))
    assert not are_adjacent(Position(0, 0), Position(0, 2))


# -- movable set --------------------------------------------------------------


def test_movable_tiles_on_solved_board() -> None:
    board = Board.solved(3)
    # Empty slot at (2, 2): tiles 5 at (1, 2) and 7 at (2, 1) can move.
    assert movable_tile_ids(board.tiles, board.empty_position, 3) == {5, 7}


def test_movable_tiles_follow_empty_slot() -> None:
    board = Board.from_flat(3, [1, 2, 3, 4, 0, 5, 6, 7, 8])
    # Labels are 1-based; ids adjacent to the centre are 1, 3, 4, 6.
    assert movable_tile_ids(board.tiles, board.empty_position, 3) == {1, 3, 4, 6}


# -- completion ---------------------------------------------------------------


@pytest.mark.parametrize("size", [2, 3, 4, 6])
def test_solved_board_is_complete(size: int) -> None:
    assert is_puzzle_complete(Board.solved(size).tiles)


def test_empty_collection_is_complete() -> None:
    assert is_puzzle_complete([])


def test_single_misplaced_tile_is_not_complete() -> None:
    board = Board.from_flat(3, [1, 2, 3, 4, 5, 6, 7, 0, 8])
    assert not is_puzzle_complete(board.tiles)


def test_completion_check_does_not_mutate() -> None:
    board = Board.from_flat(3, [1, 2, 3, 4, 5, 6, 0, 7, 8])
    before = board.copy()
    is_puzzle_complete(board.tiles)
    assert board == before
