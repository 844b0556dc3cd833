"""Engine lifecycle states."""

from enum import Enum


class GameState(Enum):
    """Lifecycle of a game.

    LOADING is set at construction and while a game is being initialized.
    RUNNING accepts player operations. GAME_OVER is terminal until the game
    is initialized again. PAUSED is reserved and has no transitions.
    """

    LOADING = "loading"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"
