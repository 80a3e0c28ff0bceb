"""
Deterministic random number generator.

A 32-bit linear congruential generator (Numerical Recipes constants).
Every shuffle and every CPU decision in a match draws from one instance,
so fixing the seed and the order of calls reproduces a match exactly.
"""

from __future__ import annotations


LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MODULUS = 2 ** 32


class LCG:
    """
    Seeded pseudo-random stream producing floats in [0, 1).

    Usage:
        rng = LCG(12345)
        value = rng()          # same as rng.next_float()
        index = rng.randint_below(52)
    """

    __slots__ = ("_seed", "_state", "_draws")

    def __init__(self, seed: int = 0):
        self._seed = int(seed) % LCG_MODULUS
        self._state = self._seed
        self._draws = 0

    def next_float(self) -> float:
        """Advance the stream and return the next value in [0, 1)."""
        self._state = (self._state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        self._draws += 1
        return self._state / LCG_MODULUS

    def __call__(self) -> float:
        return self.next_float()

    def randint_below(self, n: int) -> int:
        """Return an integer in [0, n) using a single draw."""
        if n <= 0:
            raise ValueError(f"n must be positive, got {n}")
        return int(self.next_float() * n)

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def state(self) -> int:
        """Raw 32-bit internal state (the last value produced, unscaled)."""
        return self._state

    @property
    def draws(self) -> int:
        """Number of values consumed since construction."""
        return self._draws

    def __repr__(self) -> str:
        return f"LCG(seed={self._seed}, draws={self._draws})"
