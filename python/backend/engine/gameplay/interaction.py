"""Drag and slide-animation bookkeeping for a ``GamePlay`` session.

Frontends record in-flight gestures here instead of holding them
themselves. Everything is keyed to the controller's ``generation`` so a
reset or reshuffle drops pending drags and slides in one step, and a late
animation callback from a superseded game is ignored.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from backend.engine.gameplay.game import GamePlay

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlideToken:
    tile_id: int
    generation: int


class Interaction:
    def __init__(self, game: GamePlay) -> None:
        self._game = game
        self.dragged_tile_id: int | None = None
        self._sliding: dict[int, SlideToken] = {}

    @property
    def is_dragging(self) -> bool:
        return self.dragged_tile_id is not None

    @property
    def sliding_tile_ids(self) -> frozenset[int]:
        return frozenset(self._sliding)

    # -- drag -----------------------------------------------------------------

    def begin_drag(self, tile_id: int) -> bool:
        """Pick up *tile_id*; only movable tiles can be dragged."""
        if tile_id not in self._game.movable_tile_ids:
            return False
        self.dragged_tile_id = tile_id
        return True

    def release_drag(self, over_empty: bool) -> bool:
        """Drop the dragged tile; it moves only if dropped over the empty slot."""
        tile_id = self.dragged_tile_id
        self.dragged_tile_id = None
        if tile_id is None or not over_empty:
            return False
        return self._game.attempt_move(tile_id)

    def cancel_drag(self) -> None:
        self.dragged_tile_id = None

    # -- slide animations -----------------------------------------------------

    def start_slide(self, tile_id: int) -> SlideToken:
        token = SlideToken(tile_id=tile_id, generation=self._game.generation)
        self._sliding[tile_id] = token
        return token

    def finish_slide(self, token: SlideToken) -> bool:
        """Clear a finished animation; stale or unknown tokens are ignored."""
        if self._sliding.get(token.tile_id) != token:
            logger.debug("Ignoring stale slide token %s", token)
            return False
        del self._sliding[token.tile_id]
        return True

    def pending_slides(self) -> list[SlideToken]:
        return list(self._sliding.values())

    def reset(self) -> None:
        self.dragged_tile_id = None
        self._sliding.clear()
