"""Player statistics, income, and purchases.

This module handles:
1. Recomputing derived player stats from the grid
2. Turn-end income from capitals
3. Buying troops and upgrading cells to capitals

Stats are always recomputed from scratch by rescanning the grid, never
maintained incrementally.
"""

from ..models.cell import Cell
from ..models.player import Player


class TransactionError(Exception):
    """Raised when a purchase or upgrade is rejected.

    The message is meant for the player; callers report it and leave the
    game state unchanged.
    """


INVALID_TRANSACTION_MESSAGE = "Not enough money or invalid cell selection."


def update_player_stats(grid: list[list[Cell]], players: list[Player]) -> None:
    """Recompute capitals, total_cells and total_troops for every player.

    Args:
        grid: Current grid
        players: Players to update in place
    """
    for player in players:
        player.capitals = 0
        player.total_cells = 0
        player.total_troops = 0

    for row in grid:
        for cell in row:
            if cell.is_empty():
                continue
            assert 0 <= cell.owner < len(players), f"Cell owned by unknown player {cell.owner}"
            player = players[cell.owner]
            player.total_cells += 1
            player.total_troops += cell.troops
            if cell.is_capital:
                player.capitals += 1


def apply_turn_income(player: Player, money_per_capital: int) -> int:
    """Credit income for a player whose turn just ended.

    Args:
        player: Player to credit (mutated)
        money_per_capital: Income per owned capital

    Returns:
        Amount credited
    """
    income = player.capitals * money_per_capital
    player.money += income
    return income


def purchase_troops(player: Player, cell: Cell, count: int, troop_cost: int) -> int:
    """Buy troops for a cell the player owns.

    Args:
        player: Buyer (money is deducted)
        cell: Cell receiving the troops
        count: Number of troops to buy
        troop_cost: Price per troop

    Returns:
        Total cost paid

    Raises:
        TransactionError: If count is not positive, the player does not own
            the cell, or cannot afford the troops. Nothing is changed.
    """
    if count <= 0:
        raise TransactionError("Troop count must be positive.")

    cost = count * troop_cost
    if player.money < cost or not cell.is_owned_by(player.id):
        raise TransactionError(INVALID_TRANSACTION_MESSAGE)

    player.money -= cost
    cell.troops += count
    return cost


def upgrade_to_capital(player: Player, cell: Cell, capital_cost: int) -> int:
    """Turn one of the player's cells into a capital.

    Args:
        player: Buyer (money is deducted)
        cell: Cell to upgrade
        capital_cost: Price of the upgrade

    Returns:
        Total cost paid

    Raises:
        TransactionError: If the player does not own the cell, it is already
            a capital, or the player cannot afford it. Nothing is changed.
    """
    if player.money < capital_cost or not cell.is_owned_by(player.id) or cell.is_capital:
        raise TransactionError(INVALID_TRANSACTION_MESSAGE)

    player.money -= capital_cost
    cell.is_capital = True
    return capital_cost
