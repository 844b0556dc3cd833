"""Seedable RNG wrapper for deterministic gameplay."""

import random
from typing import Optional


class GameRNG:
    """Wrapper around Python's random.Random for deterministic game behavior.

    All randomness in the engine (capital placement, combat rolls, AI tie
    breaks) goes through this class so a seeded game replays identically.
    """

    def __init__(self, seed: Optional[int] = None):
        """Initialize RNG with given seed.

        Args:
            seed: Integer seed for deterministic randomness, or None to seed
                from system entropy
        """
        self.seed = seed
        self.rng = random.Random(seed)

    def uniform(self, a: float, b: float) -> float:
        """Return random float N such that a <= N <= b.

        Args:
            a: Lower bound
            b: Upper bound

        Returns:
            Random float between a and b
        """
        return self.rng.uniform(a, b)

    def choice(self, seq):
        """Choose random element from non-empty sequence.

        Args:
            seq: Sequence to choose from

        Returns:
            Random element from sequence
        """
        return self.rng.choice(seq)
