"""Tests for elimination and game-over checks."""

import pytest

from fracas.engine.victory import (
    active_players,
    check_game_over,
    check_player_defeat,
    count_capitals,
    game_over_message,
)
from fracas.models import Cell, Player


def _players(count: int) -> list[Player]:
    return [Player(id=i, name=f"Player {i + 1}", color="#EF5350") for i in range(count)]


def _grid(*cells: Cell) -> list[list[Cell]]:
    """3x3 grid with the given cells placed at their positions."""
    grid = [[Cell(x, y) for x in range(3)] for y in range(3)]
    for cell in cells:
        grid[cell.y][cell.x] = cell
    return grid


def test_count_capitals():
    grid = _grid(
        Cell(0, 0, owner=0, troops=1, is_capital=True),
        Cell(1, 0, owner=0, troops=1, is_capital=True),
        Cell(2, 0, owner=1, troops=1, is_capital=True),
        Cell(2, 2, owner=0, troops=3),
    )
    assert count_capitals(grid, 0) == 2
    assert count_capitals(grid, 1) == 1


def test_player_without_capitals_is_eliminated():
    """Test a player with no capitals left becomes inactive."""
    players = _players(2)
    grid = _grid(
        Cell(0, 0, owner=0, troops=4, is_capital=True),
        Cell(1, 0, owner=0, troops=3),  # Former capital of player 1
        Cell(2, 0, owner=1, troops=2),
    )

    event = check_player_defeat(grid, players, 1)

    assert event is not None
    assert event.player_id == 1
    assert event.name == "Player 2"
    assert players[1].is_active is False
    assert event.to_dict()["type"] == "elimination"


def test_player_with_remaining_capital_survives():
    players = _players(2)
    grid = _grid(
        Cell(0, 0, owner=0, troops=4, is_capital=True),
        Cell(2, 2, owner=1, troops=2, is_capital=True),
    )

    assert check_player_defeat(grid, players, 1) is None
    assert players[1].is_active is True


def test_already_eliminated_player_not_reported_twice():
    players = _players(2)
    players[1].is_active = False
    grid = _grid(Cell(0, 0, owner=0, troops=4, is_capital=True))

    assert check_player_defeat(grid, players, 1) is None


def test_unknown_player_is_a_programming_error():
    """Test indexing a nonexistent player fails loudly."""
    with pytest.raises(AssertionError):
        check_player_defeat(_grid(), _players(2), 5)


def test_game_continues_with_two_active():
    players = _players(3)
    players[2].is_active = False

    over, winner = check_game_over(players)

    assert over is False
    assert winner is None
    assert len(active_players(players)) == 2


def test_game_over_with_sole_survivor():
    """Test the game ends when one player remains."""
    players = _players(4)
    for player in players[1:]:
        player.is_active = False

    over, winner = check_game_over(players)

    assert over is True
    assert winner is players[0]
    assert game_over_message(winner) == "Game Over! Player 1 wins!"


def test_game_over_with_nobody_left():
    """Test the 'Nobody' fallback when no player is active."""
    players = _players(2)
    for player in players:
        player.is_active = False

    over, winner = check_game_over(players)

    assert over is True
    assert winner is None
    assert game_over_message(winner) == "Game Over! Nobody wins!"
