"""Drag and slide bookkeeping, including cancellation on reset."""

from __future__ import annotations

import random

from backend.engine.gameplay import GamePlay, SlideToken
from backend.models.board import Board


def _game() -> GamePlay:
    # Empty slot in the centre; ids 1, 3, 4 and 6 are movable.
    return GamePlay.from_board(Board.from_flat(3, [1, 2, 3, 4, 0, 5, 6, 7, 8]))


# -- drag ---------------------------------------------------------------------


def test_drag_only_movable_tiles() -> None:
    game = _game()
    assert not game.interaction.begin_drag(0)
    assert not game.interaction.is_dragging
    assert game.interaction.begin_drag(1)
    assert game.interaction.dragged_tile_id == 1


def test_drop_over_empty_slot_moves_tile() -> None:
    game = _game()
    game.interaction.begin_drag(3)
    assert game.interaction.release_drag(over_empty=True)
    assert game.moves == 1
    assert not game.interaction.is_dragging


def test_drop_elsewhere_is_a_no_op() -> None:
    game = _game()
    before = game.snapshot()
    game.interaction.begin_drag(3)
    assert not game.interaction.release_drag(over_empty=False)
    assert not game.interaction.is_dragging
    assert game.snapshot() == before


def test_release_without_drag() -> None:
    game = _game()
    assert not game.interaction.release_drag(over_empty=True)
    assert game.moves == 0


def test_no_drag_before_shuffle() -> None:
    game = GamePlay(3)
    assert not game.interaction.begin_drag(5)


def test_reset_discards_drag_in_flight() -> None:
    game = GamePlay(3, rng=random.Random(3))
    game.shuffle()
    tile_id = min(game.movable_tile_ids)
    game.interaction.begin_drag(tile_id)

    game.initialize()

    assert not game.interaction.is_dragging
    assert not game.interaction.release_drag(over_empty=True)
    assert game.moves == 0


# -- slides -------------------------------------------------------------------


def test_legal_move_starts_a_slide() -> None:
    game = _game()
    game.attempt_move(4)
    assert game.interaction.sliding_tile_ids == {4}
    (token,) = game.interaction.pending_slides()
    assert token == SlideToken(tile_id=4, generation=game.generation)
    assert game.interaction.finish_slide(token)
    assert game.interaction.sliding_tile_ids == frozenset()


def test_illegal_move_starts_no_slide() -> None:
    game = _game()
    game.attempt_move(0)
    assert game.interaction.pending_slides() == []


def test_stale_slide_callback_is_ignored() -> None:
    game = GamePlay(3, rng=random.Random(11))
    game.shuffle()
    game.attempt_move(min(game.movable_tile_ids))
    (stale,) = game.interaction.pending_slides()

    game.shuffle()
    assert game.interaction.pending_slides() == []
    assert not game.interaction.finish_slide(stale)

    # A new slide for the same tile in the new game is not cleared by the old token.
    new_token = game.interaction.start_slide(stale.tile_id)
    assert not game.interaction.finish_slide(stale)
    assert game.interaction.finish_slide(new_token)


def test_finishing_twice() -> None:
    game = _game()
    game.attempt_move(6)
    (token,) = game.interaction.pending_slides()
    assert game.interaction.finish_slide(token)
    assert not game.interaction.finish_slide(token)
