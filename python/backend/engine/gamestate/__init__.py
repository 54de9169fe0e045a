from backend.engine.gamestate.state import (
    GameSnapshot,
    GameState,
    GameStatus,
    GameTimer,
)

__all__ = ["GameSnapshot", "GameState", "GameStatus", "GameTimer"]
