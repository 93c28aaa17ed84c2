from .game_base import Game
from .config import EngineConfig
from .ports import CommandPort

__all__ = ["Game", "EngineConfig", "CommandPort"]
