"""Scripted AI opponent.

The AI is not adaptive. On its turn it repeatedly scans its cells with more
than one troop and, from each, attacks the weakest adjacent cell it does not
own, until the move budget runs out or no cell has a target left.
"""

import logging
from typing import TYPE_CHECKING, Optional

from ..models.cell import Cell
from ..utils.rng import GameRNG
from .grid import adjacent_cells, iter_cells

if TYPE_CHECKING:
    from .game_engine import GameEngine

logger = logging.getLogger(__name__)


class ScriptedAI:
    """Greedy weakest-neighbour attacker.

    The AI only uses the engine's public API: it reads grid snapshots and
    issues attacks by position, exactly as any other client would.
    """

    def choose_target(
        self, grid: list[list[Cell]], source: Cell, rng: GameRNG
    ) -> Optional[Cell]:
        """Pick the adjacent cell with the fewest troops that source's owner does not hold.

        Ties are broken randomly among the weakest candidates.

        Args:
            grid: Grid snapshot
            source: Attacking cell
            rng: Tie-break source

        Returns:
            Target cell, or None if every neighbour is already owned
        """
        candidates = [c for c in adjacent_cells(grid, source) if c.owner != source.owner]
        if not candidates:
            return None
        fewest = min(c.troops for c in candidates)
        weakest = [c for c in candidates if c.troops == fewest]
        return weakest[0] if len(weakest) == 1 else rng.choice(weakest)

    def take_turn(self, engine: "GameEngine") -> int:
        """Play the current AI player's attacks.

        Stops as soon as the turn passes to someone else (budget exhausted),
        the game ends, or a full scan finds no legal attack.

        Args:
            engine: Engine whose current player is this AI

        Returns:
            Number of attacks made
        """
        player_id = engine.current_player_index
        attacks = 0

        while self._still_playing(engine, player_id):
            made_attack = False
            grid = engine.grid
            sources = [c for c in iter_cells(grid) if c.owner == player_id and c.troops > 1]

            for source in sources:
                if not self._still_playing(engine, player_id):
                    break
                # Earlier attacks this scan may have changed this cell
                current = engine.cell_at(source.x, source.y)
                if current.owner != player_id or current.troops <= 1:
                    continue
                target = self.choose_target(engine.grid, current, engine.rng)
                if target is None or not engine.can_attack(current, target):
                    continue
                logger.debug(f"AI {player_id} attacks {current.position} -> {target.position}")
                engine.attack(current, target)
                attacks += 1
                made_attack = True

            if not made_attack:
                break

        return attacks

    @staticmethod
    def _still_playing(engine: "GameEngine", player_id: int) -> bool:
        return (
            engine.is_running
            and engine.current_player_index == player_id
            and engine.moves_available > 0
        )
