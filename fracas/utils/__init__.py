"""Utility functions and constants for Fracas."""

from .constants import (
    MIN_GRID_SIZE,
    PLAYER_COLORS,
    UNOWNED,
)
from .distance import (
    chebyshev_distance,
    is_adjacent,
    manhattan_distance,
    neighbor_positions,
)
from .rng import GameRNG

__all__ = [
    "MIN_GRID_SIZE",
    "PLAYER_COLORS",
    "UNOWNED",
    "chebyshev_distance",
    "is_adjacent",
    "manhattan_distance",
    "neighbor_positions",
    "GameRNG",
]
