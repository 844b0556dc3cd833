"""Game configuration."""

from dataclasses import dataclass, fields
from typing import Optional

from ..utils.constants import (
    DEFAULT_AI_PLAYERS,
    DEFAULT_CAPITAL_COST,
    DEFAULT_GRID_HEIGHT,
    DEFAULT_GRID_WIDTH,
    DEFAULT_HUMAN_PLAYERS,
    DEFAULT_INITIAL_MONEY,
    DEFAULT_INITIAL_TROOPS_PER_CAPITAL,
    DEFAULT_MONEY_PER_CAPITAL,
    DEFAULT_TROOP_COST,
    DEFAULT_TROOPS_PER_TURN,
    MIN_GRID_SIZE,
)

# Fields that must be strictly positive
_POSITIVE_FIELDS = (
    "grid_width",
    "grid_height",
    "initial_troops_per_capital",
    "troops_per_turn",
    "money_per_capital",
    "capital_cost",
    "troop_cost",
)


@dataclass(frozen=True)
class GameSettings:
    """Settings consumed once by GameEngine.initialize_game.

    Settings are immutable for the duration of a game; changing them means
    starting a new game.
    """

    grid_width: int = DEFAULT_GRID_WIDTH
    grid_height: int = DEFAULT_GRID_HEIGHT
    human_players: int = DEFAULT_HUMAN_PLAYERS
    ai_players: int = DEFAULT_AI_PLAYERS
    initial_money: int = DEFAULT_INITIAL_MONEY
    initial_troops_per_capital: int = DEFAULT_INITIAL_TROOPS_PER_CAPITAL
    troops_per_turn: int = DEFAULT_TROOPS_PER_TURN  # Move budget
    money_per_capital: int = DEFAULT_MONEY_PER_CAPITAL  # Income rate
    capital_cost: int = DEFAULT_CAPITAL_COST
    troop_cost: int = DEFAULT_TROOP_COST
    seed: Optional[int] = None  # RNG seed, None for a random game

    def __post_init__(self):
        """Validate settings after initialization."""
        for name in _POSITIVE_FIELDS:
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"Invalid {name}: {value} (must be > 0)")
        if self.human_players < 0 or self.ai_players < 0:
            raise ValueError("Player counts cannot be negative")
        if self.total_players == 0:
            raise ValueError("A game needs at least one player")
        if self.initial_money < 0:
            raise ValueError(f"Invalid initial_money: {self.initial_money} (must be >= 0)")

    @property
    def total_players(self) -> int:
        return self.human_players + self.ai_players

    @property
    def effective_width(self) -> int:
        """Grid width after the minimum size is enforced."""
        return max(MIN_GRID_SIZE, self.grid_width)

    @property
    def effective_height(self) -> int:
        """Grid height after the minimum size is enforced."""
        return max(MIN_GRID_SIZE, self.grid_height)

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}
