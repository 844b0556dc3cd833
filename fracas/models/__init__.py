"""Data models for Fracas."""

from .cell import Cell
from .game_state import GameState
from .player import Player
from .settings import GameSettings

__all__ = [
    "Cell",
    "GameSettings",
    "GameState",
    "Player",
]
