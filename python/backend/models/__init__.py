from backend.models.board import Board, Direction, Position, Tile

__all__ = ["Board", "Direction", "Position", "Tile"]
