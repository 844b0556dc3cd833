"""Tests for board setup."""

import pytest

from fracas.engine.grid import (
    adjacent_cells,
    build_board,
    build_fallback_board,
    create_grid,
    create_players,
    get_cell,
    place_capital,
)
from fracas.models import Cell, GameSettings, Player
from fracas.utils import PLAYER_COLORS, UNOWNED, GameRNG


class TestCreatePlayers:
    def test_humans_first_then_ai(self):
        """Test seat order, names, and AI flags."""
        players = create_players(GameSettings(human_players=2, ai_players=2, initial_money=7))

        assert [p.name for p in players] == ["Player 1", "Player 2", "AI 1", "AI 2"]
        assert [p.is_ai for p in players] == [False, False, True, True]
        assert [p.id for p in players] == [0, 1, 2, 3]
        assert all(p.money == 7 for p in players)
        assert all(p.is_active for p in players)

    def test_colors_cycle(self):
        players = create_players(GameSettings(human_players=1, ai_players=7))

        assert players[0].color == PLAYER_COLORS[0]
        assert players[6].color == PLAYER_COLORS[0]
        assert players[7].color == PLAYER_COLORS[1]


class TestBuildBoard:
    """Test random board generation."""

    def test_default_board(self):
        """Test one capital per player with the starting troops."""
        grid, players = build_board(GameSettings(), GameRNG(42))

        capitals = [cell for row in grid for cell in row if cell.is_capital]
        assert len(grid) == 10
        assert all(len(row) == 10 for row in grid)
        assert len(capitals) == 4
        assert sorted(cell.owner for cell in capitals) == [0, 1, 2, 3]
        assert all(cell.troops == 5 for cell in capitals)
        assert len(players) == 4

    def test_only_capitals_owned(self):
        grid, _ = build_board(GameSettings(), GameRNG(1))

        owned = [cell for row in grid for cell in row if cell.owner != UNOWNED]
        assert all(cell.is_capital for cell in owned)

    def test_small_dimensions_raised_to_minimum(self):
        grid, _ = build_board(GameSettings(grid_width=2, grid_height=3), GameRNG(1))

        assert len(grid) == 5
        assert len(grid[0]) == 5

    def test_same_seed_same_board(self):
        """Test capital placement is reproducible."""
        first, _ = build_board(GameSettings(), GameRNG(123))
        second, _ = build_board(GameSettings(), GameRNG(123))

        assert first == second

    def test_too_many_players(self):
        """Test setup fails when capitals cannot all be placed."""
        settings = GameSettings(grid_width=5, grid_height=5, human_players=1, ai_players=25)

        with pytest.raises(ValueError, match="No free cell"):
            build_board(settings, GameRNG(0))


def test_place_capital_on_full_grid():
    grid = [[Cell(0, 0, owner=0, troops=1)]]
    player = Player(id=1, name="AI 1", color=PLAYER_COLORS[1], is_ai=True)

    with pytest.raises(ValueError):
        place_capital(grid, player, troops=5, rng=GameRNG(0))


def test_fallback_board():
    """Test the fixed board used when setup fails."""
    grid, players = build_fallback_board()

    assert len(grid) == 10
    assert [p.name for p in players] == ["Player 1", "AI 1", "AI 2", "AI 3"]
    assert [p.is_ai for p in players] == [False, True, True, True]
    assert all(p.money == 10 for p in players)
    for player_id, position in enumerate([1, 3, 5, 7]):
        cell = grid[position][position]
        assert cell.owner == player_id
        assert cell.troops == 5
        assert cell.is_capital


class TestGridLookup:
    def test_get_cell(self):
        grid = create_grid(5, 6)
        assert get_cell(grid, 4, 5).position == (4, 5)

    @pytest.mark.parametrize("x, y", [(-1, 0), (5, 0), (0, 6), (0, -1)])
    def test_get_cell_outside(self, x, y):
        with pytest.raises(ValueError, match="outside"):
            get_cell(create_grid(5, 6), x, y)

    def test_adjacent_cells_corner_and_middle(self):
        grid = create_grid(5, 5)

        assert len(adjacent_cells(grid, grid[0][0])) == 3
        assert len(adjacent_cells(grid, grid[2][2])) == 8
