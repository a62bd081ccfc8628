"""Scripted dice source for deterministic tests."""

from collections.abc import Iterable


class SequenceDiceRng:
    """DiceRng that replays a fixed sequence of results.

    Raises IndexError once the sequence is exhausted and ValueError when a
    scripted value does not fit the die being rolled.
    """

    def __init__(self, values: Iterable[int]) -> None:
        self._values = list(values)
        self._position = 0

    @property
    def remaining(self) -> int:
        """Number of scripted values not yet consumed."""
        return len(self._values) - self._position

    def roll(self, sides: int) -> int:
        if self._position >= len(self._values):
            raise IndexError("SequenceDiceRng exhausted")
        value = self._values[self._position]
        if not 1 <= value <= sides:
            raise ValueError(f"Scripted value {value} does not fit a d{sides}")
        self._position += 1
        return value
