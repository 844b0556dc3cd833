"""Elimination and game-over checks.

This module handles:
1. Eliminating a player whose last capital was captured
2. Detecting the end of the game (one or zero active players)
3. Announcing the winner
"""

from dataclasses import asdict, dataclass
from typing import Optional

from ..models.cell import Cell
from ..models.player import Player


@dataclass
class EliminationEvent:
    """Record of a player losing their last capital."""

    player_id: int
    name: str

    def to_dict(self) -> dict:
        data = asdict(self)
        data["type"] = "elimination"
        return data


def count_capitals(grid: list[list[Cell]], player_id: int) -> int:
    return sum(1 for row in grid for cell in row if cell.owner == player_id and cell.is_capital)


def check_player_defeat(
    grid: list[list[Cell]], players: list[Player], player_id: int
) -> Optional[EliminationEvent]:
    """Eliminate a player if they own no capitals.

    Called immediately after a capital capture, so elimination happens within
    the same operation that caused it.

    Args:
        grid: Current grid
        players: All players (the defeated one is mutated)
        player_id: Player to check

    Returns:
        EliminationEvent if the player was eliminated by this check, None otherwise
    """
    assert 0 <= player_id < len(players), f"No player with id {player_id}"

    player = players[player_id]
    if count_capitals(grid, player_id) > 0:
        return None
    if not player.is_active:
        return None

    player.is_active = False
    return EliminationEvent(player_id=player.id, name=player.name)


def active_players(players: list[Player]) -> list[Player]:
    return [p for p in players if p.is_active]


def check_game_over(players: list[Player]) -> tuple[bool, Optional[Player]]:
    """Check whether the game has ended.

    The game ends when at most one player remains active.

    Args:
        players: All players

    Returns:
        Tuple of (game over, winner). Winner is the sole active player, or
        None if nobody is left or the game continues.
    """
    remaining = active_players(players)
    if len(remaining) > 1:
        return False, None
    return True, remaining[0] if remaining else None


def game_over_message(winner: Optional[Player]) -> str:
    name = winner.name if winner else "Nobody"
    return f"Game Over! {name} wins!"
