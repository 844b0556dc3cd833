"""Pydantic request schemas for API endpoints."""

from pydantic import BaseModel, Field

from ...models.settings import GameSettings
from ...utils import constants


class CreateGameRequest(BaseModel):
    """Request to create a new game."""

    gridWidth: int = Field(  # noqa: N815
        default=constants.DEFAULT_GRID_WIDTH,
        gt=0,
        le=constants.MAX_GRID_SIZE,
        description="Grid width (raised to 5 if smaller)",
    )
    gridHeight: int = Field(  # noqa: N815
        default=constants.DEFAULT_GRID_HEIGHT,
        gt=0,
        le=constants.MAX_GRID_SIZE,
        description="Grid height (raised to 5 if smaller)",
    )
    humanPlayers: int = Field(  # noqa: N815
        default=constants.DEFAULT_HUMAN_PLAYERS,
        ge=0,
        le=constants.MAX_PLAYERS,
        description="Number of human seats, played hot-seat",
    )
    aiPlayers: int = Field(  # noqa: N815
        default=constants.DEFAULT_AI_PLAYERS,
        ge=0,
        le=constants.MAX_PLAYERS,
        description="Number of AI seats",
    )
    initialMoney: int = Field(default=constants.DEFAULT_INITIAL_MONEY, ge=0)  # noqa: N815
    initialTroopsPerCapital: int = Field(  # noqa: N815
        default=constants.DEFAULT_INITIAL_TROOPS_PER_CAPITAL, gt=0
    )
    troopsPerTurn: int = Field(  # noqa: N815
        default=constants.DEFAULT_TROOPS_PER_TURN, gt=0, description="Attacks per turn"
    )
    moneyPerCapital: int = Field(  # noqa: N815
        default=constants.DEFAULT_MONEY_PER_CAPITAL, gt=0, description="Income per capital"
    )
    capitalCost: int = Field(default=constants.DEFAULT_CAPITAL_COST, gt=0)  # noqa: N815
    troopCost: int = Field(default=constants.DEFAULT_TROOP_COST, gt=0)  # noqa: N815
    seed: int | None = Field(default=None, description="Optional RNG seed for determinism")

    def to_settings(self) -> GameSettings:
        """Convert to engine settings.

        Raises:
            ValueError: If the combination is invalid (e.g. no players at all)
        """
        return GameSettings(
            grid_width=self.gridWidth,
            grid_height=self.gridHeight,
            human_players=self.humanPlayers,
            ai_players=self.aiPlayers,
            initial_money=self.initialMoney,
            initial_troops_per_capital=self.initialTroopsPerCapital,
            troops_per_turn=self.troopsPerTurn,
            money_per_capital=self.moneyPerCapital,
            capital_cost=self.capitalCost,
            troop_cost=self.troopCost,
            seed=self.seed,
        )


class CellRequest(BaseModel):
    """A cell on the grid."""

    x: int = Field(ge=0, description="Column")
    y: int = Field(ge=0, description="Row")


class PurchaseRequest(CellRequest):
    """Request to buy troops for a cell."""

    count: int = Field(description="Number of troops to buy")
