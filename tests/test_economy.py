"""Tests for player stats, income, and purchases."""

import pytest

from fracas.engine.economy import (
    INVALID_TRANSACTION_MESSAGE,
    TransactionError,
    apply_turn_income,
    purchase_troops,
    update_player_stats,
    upgrade_to_capital,
)
from fracas.models import Cell, Player


def _player(player_id: int = 0, money: int = 10) -> Player:
    return Player(id=player_id, name=f"Player {player_id + 1}", color="#EF5350", money=money)


class TestUpdatePlayerStats:
    """Test derived stat recomputation."""

    def test_stats_from_grid(self):
        players = [_player(0), _player(1)]
        grid = [
            [Cell(0, 0, owner=0, troops=5, is_capital=True), Cell(1, 0, owner=0, troops=2)],
            [Cell(0, 1, owner=1, troops=3, is_capital=True), Cell(1, 1)],
        ]

        update_player_stats(grid, players)

        assert (players[0].capitals, players[0].total_cells, players[0].total_troops) == (1, 2, 7)
        assert (players[1].capitals, players[1].total_cells, players[1].total_troops) == (1, 1, 3)

    def test_stats_recomputed_not_accumulated(self):
        """Test running the update twice gives the same result."""
        players = [_player(0)]
        grid = [[Cell(0, 0, owner=0, troops=5, is_capital=True)]]

        update_player_stats(grid, players)
        update_player_stats(grid, players)

        assert players[0].total_troops == 5
        assert players[0].capitals == 1

    def test_total_troops_match_owned_cells(self):
        players = [_player(0), _player(1), _player(2)]
        grid = [
            [Cell(x, y, owner=(x + y) % 3, troops=x + y + 1) for x in range(4)] for y in range(4)
        ]

        update_player_stats(grid, players)

        owned_troops = sum(cell.troops for row in grid for cell in row if not cell.is_empty())
        assert sum(p.total_troops for p in players) == owned_troops


class TestIncome:
    def test_income_per_capital(self):
        """Test income is capitals x money_per_capital."""
        player = _player(money=3)
        player.capitals = 2

        income = apply_turn_income(player, money_per_capital=2)

        assert income == 4
        assert player.money == 7

    def test_no_capitals_no_income(self):
        player = _player(money=3)
        assert apply_turn_income(player, money_per_capital=2) == 0
        assert player.money == 3


class TestPurchaseTroops:
    """Test buying troops."""

    def test_purchase_success(self):
        player = _player(money=10)
        cell = Cell(0, 0, owner=0, troops=2)

        cost = purchase_troops(player, cell, count=3, troop_cost=2)

        assert cost == 6
        assert player.money == 4
        assert cell.troops == 5

    def test_insufficient_funds(self):
        """Test a purchase the player cannot afford changes nothing."""
        player = _player(money=2)
        cell = Cell(0, 0, owner=0, troops=2)

        with pytest.raises(TransactionError, match=INVALID_TRANSACTION_MESSAGE):
            purchase_troops(player, cell, count=3, troop_cost=1)

        assert player.money == 2
        assert cell.troops == 2

    def test_wrong_owner(self):
        player = _player(money=10)
        cell = Cell(0, 0, owner=1, troops=2)

        with pytest.raises(TransactionError):
            purchase_troops(player, cell, count=1, troop_cost=1)

        assert cell.troops == 2
        assert player.money == 10

    @pytest.mark.parametrize("count", [0, -3])
    def test_non_positive_count(self, count):
        player = _player(money=10)
        cell = Cell(0, 0, owner=0, troops=2)

        with pytest.raises(TransactionError, match="must be positive"):
            purchase_troops(player, cell, count=count, troop_cost=1)

        assert player.money == 10


class TestUpgradeToCapital:
    """Test capital upgrades."""

    def test_upgrade_success(self):
        player = _player(money=20)
        cell = Cell(0, 0, owner=0, troops=2)

        cost = upgrade_to_capital(player, cell, capital_cost=15)

        assert cost == 15
        assert player.money == 5
        assert cell.is_capital is True

    def test_already_capital(self):
        player = _player(money=20)
        cell = Cell(0, 0, owner=0, troops=2, is_capital=True)

        with pytest.raises(TransactionError):
            upgrade_to_capital(player, cell, capital_cost=15)

        assert player.money == 20

    def test_not_enough_money(self):
        player = _player(money=14)
        cell = Cell(0, 0, owner=0, troops=2)

        with pytest.raises(TransactionError):
            upgrade_to_capital(player, cell, capital_cost=15)

        assert cell.is_capital is False
        assert player.money == 14

    def test_unowned_cell(self):
        player = _player(money=20)
        cell = Cell(0, 0)

        with pytest.raises(TransactionError):
            upgrade_to_capital(player, cell, capital_cost=15)
