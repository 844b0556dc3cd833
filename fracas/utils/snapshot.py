"""Read-only snapshots of engine state.

Presentation layers (CLI, HTTP API, WebSocket clients) never receive the
engine's own objects. They receive plain dictionaries built here, which can
be mutated or JSON-encoded freely without affecting the game.
"""

import copy
from typing import Any, Optional

from ..models.cell import Cell
from ..models.player import Player
from ..models.settings import GameSettings


def serialize_cell(cell: Cell) -> dict[str, Any]:
    """Convert Cell to dict."""
    return {
        "x": cell.x,
        "y": cell.y,
        "owner": cell.owner,
        "troops": cell.troops,
        "isCapital": cell.is_capital,
    }


def serialize_player(player: Player) -> dict[str, Any]:
    """Convert Player to dict."""
    return {
        "id": player.id,
        "name": player.name,
        "color": player.color,
        "isAI": player.is_ai,
        "isActive": player.is_active,
        "money": player.money,
        "capitals": player.capitals,
        "totalCells": player.total_cells,
        "totalTroops": player.total_troops,
    }


def serialize_grid(grid: list[list[Cell]]) -> list[list[dict[str, Any]]]:
    """Convert grid rows to nested lists of cell dicts (row-major, grid[y][x])."""
    return [[serialize_cell(cell) for cell in row] for row in grid]


def serialize_settings(settings: GameSettings) -> dict[str, Any]:
    return settings.to_dict()


def build_snapshot(
    *,
    game_state: str,
    grid: list[list[Cell]],
    players: list[Player],
    current_player_index: int,
    selected_cell: Optional[Cell],
    moves_available: int,
    message: str,
    turn: int,
    winner: Optional[Player],
    events: list[dict[str, Any]],
    settings: GameSettings,
) -> dict[str, Any]:
    """Assemble a full, self-contained game snapshot.

    Returns:
        Dictionary safe to hand to any observer
    """
    return {
        "gameState": game_state,
        "turn": turn,
        "width": len(grid[0]) if grid else 0,
        "height": len(grid),
        "grid": serialize_grid(grid),
        "players": [serialize_player(p) for p in players],
        "currentPlayer": current_player_index,
        "selectedCell": serialize_cell(selected_cell) if selected_cell else None,
        "movesAvailable": moves_available,
        "message": message,
        "winner": winner.id if winner else None,
        "events": copy.deepcopy(events),
        "settings": serialize_settings(settings),
    }
