from backend.engine.gamegenerator.generator import (
    DEFAULT_SHUFFLE_MOVES,
    GameGenerator,
    ShuffleResult,
)

__all__ = ["DEFAULT_SHUFFLE_MOVES", "GameGenerator", "ShuffleResult"]
