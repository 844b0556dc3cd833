"""Board setup: players, grid, and starting capitals.

Algorithm:
1. Create one player per configured seat (humans first, then AI)
2. Build a max(5, width) x max(5, height) grid of unowned cells
3. Place one capital per player on a uniformly random unowned cell
"""

from typing import Iterator

from ..models.cell import Cell
from ..models.player import Player
from ..models.settings import GameSettings
from ..utils.constants import (
    FALLBACK_GRID_SIZE,
    FALLBACK_MONEY,
    FALLBACK_PLAYER_COUNT,
    FALLBACK_TROOPS,
    PLAYER_COLORS,
)
from ..utils.distance import neighbor_positions
from ..utils.rng import GameRNG


def player_color(player_id: int) -> str:
    return PLAYER_COLORS[player_id % len(PLAYER_COLORS)]


def create_players(settings: GameSettings) -> list[Player]:
    """Create players for every configured seat.

    Ids 0..human_players-1 are human ("Player N"), the rest are AI ("AI N").
    Every player starts with settings.initial_money.
    """
    players = []
    for i in range(settings.human_players):
        players.append(
            Player(
                id=i,
                name=f"Player {i + 1}",
                color=player_color(i),
                is_ai=False,
                money=settings.initial_money,
            )
        )
    for i in range(settings.human_players, settings.total_players):
        players.append(
            Player(
                id=i,
                name=f"AI {i - settings.human_players + 1}",
                color=player_color(i),
                is_ai=True,
                money=settings.initial_money,
            )
        )
    return players


def create_grid(width: int, height: int) -> list[list[Cell]]:
    """Create a grid of unowned cells, indexed grid[y][x]."""
    return [[Cell(x, y) for x in range(width)] for y in range(height)]


def iter_cells(grid: list[list[Cell]]) -> Iterator[Cell]:
    for row in grid:
        yield from row


def grid_size(grid: list[list[Cell]]) -> tuple[int, int]:
    """Return (width, height) of a grid."""
    return (len(grid[0]) if grid else 0, len(grid))


def get_cell(grid: list[list[Cell]], x: int, y: int) -> Cell:
    """Look up a cell by position.

    Raises:
        ValueError: If (x, y) lies outside the grid
    """
    width, height = grid_size(grid)
    if not (0 <= x < width and 0 <= y < height):
        raise ValueError(f"Position ({x}, {y}) is outside the {width}x{height} grid")
    return grid[y][x]


def adjacent_cells(grid: list[list[Cell]], cell: Cell) -> list[Cell]:
    """Return the (up to 8) in-bounds neighbours of a cell."""
    width, height = grid_size(grid)
    return [grid[ny][nx] for nx, ny in neighbor_positions(cell.x, cell.y, width, height)]


def place_capital(
    grid: list[list[Cell]], player: Player, troops: int, rng: GameRNG
) -> Cell:
    """Place a capital for a player on a random unowned cell.

    Raises:
        ValueError: If the grid has no unowned cell left
    """
    available = [cell for cell in iter_cells(grid) if cell.is_empty()]
    if not available:
        raise ValueError(f"No free cell left for {player.name}'s capital")

    cell = rng.choice(available)
    cell.owner = player.id
    cell.troops = troops
    cell.is_capital = True
    return cell


def build_board(
    settings: GameSettings, rng: GameRNG
) -> tuple[list[list[Cell]], list[Player]]:
    """Build the starting grid and players for a new game.

    Args:
        settings: Game configuration
        rng: Source of capital placement

    Returns:
        Tuple of (grid, players)

    Raises:
        ValueError: If the board cannot hold a capital for every player
    """
    players = create_players(settings)
    grid = create_grid(settings.effective_width, settings.effective_height)
    for player in players:
        place_capital(grid, player, settings.initial_troops_per_capital, rng)
    return grid, players


def build_fallback_board() -> tuple[list[list[Cell]], list[Player]]:
    """Build the fixed default board used when setup fails.

    A 10x10 grid with one human and three AI players. Each player gets a
    capital on the diagonal at (1, 1), (3, 3), (5, 5) and (7, 7).
    """
    players = [
        Player(
            id=i,
            name="Player 1" if i == 0 else f"AI {i}",
            color=player_color(i),
            is_ai=i > 0,
            money=FALLBACK_MONEY,
        )
        for i in range(FALLBACK_PLAYER_COUNT)
    ]
    grid = create_grid(FALLBACK_GRID_SIZE, FALLBACK_GRID_SIZE)
    for player in players:
        position = player.id * 2 + 1
        cell = grid[position][position]
        cell.owner = player.id
        cell.troops = FALLBACK_TROOPS
        cell.is_capital = True
    return grid, players
