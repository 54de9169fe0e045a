from backend.engine.gamerules.rules import (
    are_adjacent,
    get_adjacent_positions,
    is_puzzle_complete,
    movable_tile_ids,
)

__all__ = [
    "are_adjacent",
    "get_adjacent_positions",
    "is_puzzle_complete",
    "movable_tile_ids",
]
