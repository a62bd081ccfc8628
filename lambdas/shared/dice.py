"""Randomness seam for dice rolling.

Every random draw in the engine goes through a DiceRng, which produces a
uniform integer in [1, sides]. Tests inject a seeded or scripted source to
make rolls reproducible.
"""

import random
from typing import Protocol


class DiceRng(Protocol):
    """Source of uniform die results."""

    def roll(self, sides: int) -> int:
        """Return a uniform integer in [1, sides]."""
        ...


class RandomDiceRng:
    """DiceRng backed by random.Random."""

    def __init__(self, seed: int | None = None) -> None:
        """Initialize the generator.

        Args:
            seed: Optional seed for reproducible sequences
        """
        self._random = random.Random(seed)

    def roll(self, sides: int) -> int:
        """Roll one die.

        Args:
            sides: Number of faces (at least 1)

        Returns:
            Random integer between 1 and sides inclusive

        Raises:
            ValueError: If sides is less than 1
        """
        if sides < 1:
            raise ValueError("Die must have at least 1 side")
        return self._random.randint(1, sides)


def roll_dice(rng: DiceRng, count: int, sides: int) -> list[int]:
    """Roll several identical dice.

    Args:
        rng: Randomness source
        count: Number of dice to roll
        sides: Number of sides on each die

    Returns:
        List of individual roll results
    """
    return [rng.roll(sides) for _ in range(count)]
