from backend.engine.gameplay.game import GamePlay
from backend.engine.gameplay.interaction import Interaction, SlideToken

__all__ = ["GamePlay", "Interaction", "SlideToken"]
