"""Tests for the randomness seam."""

import pytest

from scripted_dice import SequenceDiceRng
from shared.dice import RandomDiceRng, roll_dice


class TestRandomDiceRng:
    """Tests for the random.Random backed source."""

    def test_roll_basic_d20(self):
        """A d20 should land between 1 and 20."""
        rng = RandomDiceRng(seed=42)
        for _ in range(100):
            assert 1 <= rng.roll(20) <= 20

    def test_roll_distribution_covers_all_faces(self):
        """Rolling many times should hit every face."""
        rng = RandomDiceRng(seed=42)
        seen = {rng.roll(20) for _ in range(1000)}

        assert seen == set(range(1, 21))

    def test_same_seed_same_sequence(self):
        """Seeded sources must be reproducible."""
        first = RandomDiceRng(seed=7)
        second = RandomDiceRng(seed=7)

        assert [first.roll(6) for _ in range(20)] == [second.roll(6) for _ in range(20)]

    def test_one_sided_die(self):
        """A d1 always rolls 1."""
        rng = RandomDiceRng(seed=1)
        assert all(rng.roll(1) == 1 for _ in range(10))

    def test_large_die(self):
        """Non-standard large dice are supported."""
        rng = RandomDiceRng(seed=42)
        for _ in range(100):
            assert 1 <= rng.roll(10_000) <= 10_000

    def test_zero_sides_raises(self):
        """A die needs at least one side."""
        with pytest.raises(ValueError):
            RandomDiceRng().roll(0)


class TestSequenceDiceRng:
    """Tests for the scripted source used by other tests."""

    def test_replays_values_in_order(self):
        """Values come back in the scripted order."""
        rng = SequenceDiceRng([3, 1, 4])

        assert [rng.roll(6), rng.roll(6), rng.roll(6)] == [3, 1, 4]
        assert rng.remaining == 0

    def test_exhausted_raises(self):
        """Rolling past the script is an error."""
        rng = SequenceDiceRng([2])
        rng.roll(4)

        with pytest.raises(IndexError):
            rng.roll(4)

    def test_value_must_fit_die(self):
        """A scripted 7 cannot come from a d6."""
        rng = SequenceDiceRng([7])

        with pytest.raises(ValueError):
            rng.roll(6)
        assert rng.remaining == 1


class TestRollDice:
    """Tests for roll_dice helper."""

    def test_roll_dice_count(self):
        """roll_dice returns one value per die."""
        rolls = roll_dice(RandomDiceRng(seed=42), 3, 6)

        assert len(rolls) == 3
        assert all(1 <= r <= 6 for r in rolls)

    def test_roll_dice_uses_rng(self):
        """roll_dice draws from the given source."""
        assert roll_dice(SequenceDiceRng([5, 2]), 2, 8) == [5, 2]
