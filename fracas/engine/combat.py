"""Attack legality and combat resolution.

This module handles:
1. Deciding whether one cell may attack another
2. Rolling attack and defense power
3. Applying the outcome (capture or repelled attack) to both cells
"""

import math
from dataclasses import asdict, dataclass
from typing import Optional

from ..models.cell import Cell
from ..utils.constants import (
    ATTACK_MULTIPLIER_RANGE,
    DEFENSE_MULTIPLIER_RANGE,
    FAILED_ATTACK_LOSS_RATE,
    FAILED_DEFENSE_LOSS_RATE,
    UNOWNED,
)
from ..utils.distance import is_adjacent
from ..utils.rng import GameRNG


@dataclass
class AttackResult:
    """Outcome of a single combat roll.

    Attributes:
        captured: True if the attacker takes the target cell
        attacking_troops: Troops committed (source troops minus the garrison of 1)
        defending_troops: Troops on the target before combat
        attack_power: Rolled attack strength, None for an unowned target
        defense_power: Rolled defense strength, None for an unowned target
        attacker_losses: Troops the attacker loses (0 on capture)
        defender_losses: Troops the defender loses on a repelled attack
    """

    captured: bool
    attacking_troops: int
    defending_troops: int
    attack_power: Optional[float]
    defense_power: Optional[float]
    attacker_losses: int
    defender_losses: int


@dataclass
class AttackEvent:
    """Record of an attack that occurred.

    Attributes:
        attacker: Player id of the attacker
        defender: Player id of the defender, or UNOWNED
        source: (x, y) of the attacking cell
        target: (x, y) of the attacked cell
        attacking_troops: Troops committed to the attack
        defending_troops: Troops on the target before combat
        captured: Whether the target changed hands
        attacker_losses: Attacker casualties
        defender_losses: Defender casualties
        capital_captured: True if the target was a capital before capture
    """

    attacker: int
    defender: int
    source: tuple[int, int]
    target: tuple[int, int]
    attacking_troops: int
    defending_troops: int
    captured: bool
    attacker_losses: int
    defender_losses: int
    capital_captured: bool = False

    def to_dict(self) -> dict:
        data = asdict(self)
        data["type"] = "attack"
        data["source"] = list(self.source)
        data["target"] = list(self.target)
        return data


def can_attack(source: Cell, target: Cell, moves_available: int) -> bool:
    """Check if an attack from source to target is legal.

    Rules (all must hold):
    - cells are adjacent: Chebyshev distance <= 1 and Manhattan distance <= 2
    - source keeps a garrison: troops > 1
    - the move budget is not exhausted
    - source and target have different owners

    Args:
        source: Attacking cell
        target: Attacked cell
        moves_available: Remaining move budget this turn

    Returns:
        True if the attack is legal
    """
    return (
        is_adjacent(source.x, source.y, target.x, target.y)
        and source.troops > 1
        and moves_available > 0
        and source.owner != target.owner
    )


def resolve_attack(
    attacking_troops: int,
    defending_troops: int,
    defender_owned: bool,
    rng: GameRNG,
) -> AttackResult:
    """Resolve combat between an attacking force and a cell's garrison.

    Combat rules:
    - Unowned target: captured automatically, no roll
    - Owned target: attack = attacking x U(0.8, 1.2),
      defense = defending x U(1.0, 1.5); capture iff attack > defense
    - Repelled attack: attacker loses max(1, floor(attacking x 0.7)),
      defender loses floor(defending x 0.3)

    Args:
        attacking_troops: Troops committed by the attacker
        defending_troops: Troops on the target
        defender_owned: False if the target is unowned
        rng: Source of the two combat rolls

    Returns:
        AttackResult with the outcome and casualties
    """
    if not defender_owned:
        return AttackResult(
            captured=True,
            attacking_troops=attacking_troops,
            defending_troops=defending_troops,
            attack_power=None,
            defense_power=None,
            attacker_losses=0,
            defender_losses=0,
        )

    attack_power = attacking_troops * rng.uniform(*ATTACK_MULTIPLIER_RANGE)
    defense_power = defending_troops * rng.uniform(*DEFENSE_MULTIPLIER_RANGE)

    if attack_power > defense_power:
        return AttackResult(
            captured=True,
            attacking_troops=attacking_troops,
            defending_troops=defending_troops,
            attack_power=attack_power,
            defense_power=defense_power,
            attacker_losses=0,
            defender_losses=defending_troops,
        )

    return AttackResult(
        captured=False,
        attacking_troops=attacking_troops,
        defending_troops=defending_troops,
        attack_power=attack_power,
        defense_power=defense_power,
        attacker_losses=max(1, math.floor(attacking_troops * FAILED_ATTACK_LOSS_RATE)),
        defender_losses=math.floor(defending_troops * FAILED_DEFENSE_LOSS_RATE),
    )


def execute_attack(source: Cell, target: Cell, rng: GameRNG) -> AttackEvent:
    """Resolve an attack and apply the outcome to both cells in place.

    On capture the source keeps a single troop, the target passes to the
    attacker with all committed troops and always loses capital status.
    On a repelled attack both garrisons are floored at 1; an unowned target
    never loses troops.

    Legality is the caller's responsibility (see can_attack).

    Args:
        source: Attacking cell (mutated)
        target: Attacked cell (mutated)
        rng: Source of combat rolls

    Returns:
        AttackEvent describing what happened
    """
    attacking_troops = source.troops - 1  # One troop always stays behind
    defender = target.owner
    was_capital = target.is_capital

    result = resolve_attack(
        attacking_troops,
        target.troops,
        defender_owned=defender != UNOWNED,
        rng=rng,
    )

    if result.captured:
        source.troops = 1
        target.owner = source.owner
        target.troops = attacking_troops
        target.is_capital = False
    else:
        source.troops = max(1, source.troops - result.attacker_losses)
        if result.defender_losses > 0 and defender != UNOWNED:
            target.troops = max(1, target.troops - result.defender_losses)

    return AttackEvent(
        attacker=source.owner,
        defender=defender,
        source=source.position,
        target=target.position,
        attacking_troops=attacking_troops,
        defending_troops=result.defending_troops,
        captured=result.captured,
        attacker_losses=result.attacker_losses,
        defender_losses=result.defender_losses,
        capital_captured=result.captured and was_capital,
    )
