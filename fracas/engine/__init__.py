"""Game engine components."""

from .ai import ScriptedAI
from .combat import AttackEvent, AttackResult, can_attack, execute_attack, resolve_attack
from .economy import TransactionError
from .game_engine import GameEngine
from .grid import build_board, build_fallback_board
from .victory import EliminationEvent, check_game_over

__all__ = [
    "AttackEvent",
    "AttackResult",
    "EliminationEvent",
    "GameEngine",
    "ScriptedAI",
    "TransactionError",
    "build_board",
    "build_fallback_board",
    "can_attack",
    "check_game_over",
    "execute_attack",
    "resolve_attack",
]
