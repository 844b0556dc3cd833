"""Grid cell data model."""

from dataclasses import dataclass

from ..utils.constants import UNOWNED


@dataclass
class Cell:
    """A single territory on the game grid.

    Cells are created unowned when the grid is built and are mutated in place
    by capital placement, attacks, purchases and upgrades. A capital cell
    generates income for its owner at the end of each of their turns.
    """

    x: int  # Column index
    y: int  # Row index
    owner: int = UNOWNED  # Player index, or UNOWNED (-1)
    troops: int = 0  # Garrison size
    is_capital: bool = False

    def __post_init__(self):
        """Validate cell data after initialization."""
        if self.x < 0 or self.y < 0:
            raise ValueError(f"Invalid position: ({self.x}, {self.y}) (must be >= 0)")
        if self.owner < UNOWNED:
            raise ValueError(f"Invalid owner: {self.owner} (must be >= {UNOWNED})")
        if self.troops < 0:
            raise ValueError(f"Invalid troops: {self.troops} (must be >= 0)")
        if self.is_capital and self.owner == UNOWNED:
            raise ValueError("An unowned cell cannot be a capital")

    @property
    def position(self) -> tuple[int, int]:
        return (self.x, self.y)

    def is_empty(self) -> bool:
        """True if no player controls this cell."""
        return self.owner == UNOWNED

    def is_owned_by(self, player_id: int) -> bool:
        return self.owner == player_id
