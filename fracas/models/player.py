"""Player data model."""

from dataclasses import dataclass


@dataclass
class Player:
    """A human or AI participant.

    The id doubles as the player's position in the engine's player list.
    capitals, total_cells and total_troops are derived from the grid and are
    recomputed by the engine after every mutation; nothing else writes them.
    Elimination flips is_active to False, the player is never removed.
    """

    id: int  # Index into the player list
    name: str  # "Player 1", "AI 2", ...
    color: str  # Display colour as "#RRGGBB"
    is_ai: bool = False
    is_active: bool = True
    money: int = 0
    capitals: int = 0  # Derived
    total_cells: int = 0  # Derived
    total_troops: int = 0  # Derived

    def __post_init__(self):
        """Validate player data after initialization."""
        if self.id < 0:
            raise ValueError(f"Invalid player id: {self.id} (must be >= 0)")
        if not self.name:
            raise ValueError("name cannot be empty")
        if self.money < 0:
            raise ValueError(f"Invalid money: {self.money} (must be >= 0)")
