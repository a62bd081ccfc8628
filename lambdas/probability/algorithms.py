"""Distribution algorithms: uniform dice, convolution, keep/drop enumeration.

Distributions are dicts mapping a total to its probability. Exact
calculations keep probabilities as Fractions so sums, medians and mode ties
are not disturbed by float rounding; conversion to float happens only when
the public ProbabilityPoint list is built.
"""

from collections import Counter
from collections.abc import Iterable, Mapping
from fractions import Fraction
from itertools import product

from shared.keep_drop import kept_values
from shared.models import DiceGroup, KeepDropConfig, ProbabilityPoint

Distribution = dict[int, Fraction]


def point_distribution(value: int = 0) -> Distribution:
    """Distribution of a constant (identity element for convolution)."""
    return {value: Fraction(1)}


def die_distribution(sides: int) -> Distribution:
    """Uniform distribution of one die with the given number of sides."""
    probability = Fraction(1, sides)
    return {face: probability for face in range(1, sides + 1)}


def convolve(first: Mapping[int, Fraction], second: Mapping[int, Fraction]) -> Distribution:
    """Distribution of the sum of two independent variables.

    Args:
        first: First distribution
        second: Second distribution

    Returns:
        Combined distribution
    """
    result: Distribution = {}
    for value1, prob1 in first.items():
        for value2, prob2 in second.items():
            total = value1 + value2
            result[total] = result.get(total, 0) + prob1 * prob2
    return result


def sum_of_dice_distribution(count: int, sides: int) -> Distribution:
    """Distribution of the sum of `count` identical dice."""
    single = die_distribution(sides)
    result = point_distribution()
    for _ in range(count):
        result = convolve(result, single)
    return result


def keep_drop_distribution(count: int, sides: int, rule: KeepDropConfig) -> Distribution:
    """Exact distribution of a dice group with a keep/drop rule.

    Enumerates every ordered tuple of `count` dice (sides**count of them),
    applies the rule to each, and tallies the kept sums.

    Args:
        count: Number of dice rolled
        sides: Faces per die
        rule: Keep/drop rule

    Returns:
        Distribution of the kept sum
    """
    faces = range(1, sides + 1)
    tally = Counter(sum(kept_values(roll, rule)) for roll in product(faces, repeat=count))
    total_combinations = sides**count
    return {value: Fraction(hits, total_combinations) for value, hits in tally.items()}


def group_distribution(group: DiceGroup) -> Distribution:
    """Distribution of one dice group's sum."""
    if group.keep_drop is not None:
        return keep_drop_distribution(group.count, group.sides, group.keep_drop)
    return sum_of_dice_distribution(group.count, group.sides)


def shift(distribution: Mapping[int, Fraction], offset: int) -> Distribution:
    """Add a constant to every value of a distribution."""
    return {value + offset: probability for value, probability in distribution.items()}


def outcome_space_exceeds(groups: Iterable[DiceGroup], threshold: int) -> bool:
    """Check whether enumerating the groups would exceed a threshold.

    The outcome space is the product of sides**count over all groups; keep/drop
    rules do not change it. Stops as soon as the running product passes the
    threshold.
    """
    outcomes = 1
    for group in groups:
        outcomes *= group.sides**group.count
        if outcomes > threshold:
            return True
    return False


def normalize(weights: Mapping[int, Fraction | int]) -> list[tuple[int, Fraction]]:
    """Turn raw weights (probabilities or counts) into sorted exact probabilities.

    Args:
        weights: Value -> weight

    Returns:
        (value, probability) pairs sorted by value; empty for zero total weight
    """
    total = sum(weights.values())
    if total == 0:
        return []
    return [
        (value, Fraction(weight) / total)
        for value, weight in sorted(weights.items())
        if weight
    ]


def to_points(normalized: list[tuple[int, Fraction]]) -> list[ProbabilityPoint]:
    """Build public distribution points with cumulative percentages."""
    points: list[ProbabilityPoint] = []
    cumulative = Fraction(0)
    for value, probability in normalized:
        cumulative += probability
        points.append(
            ProbabilityPoint(
                value=value,
                probability=float(probability),
                percentage=float(probability * 100),
                cumulative=float(cumulative * 100),
            )
        )
    return points


def expected_value(normalized: list[tuple[int, Fraction]]) -> float:
    """Mean of the distribution."""
    return float(sum(value * probability for value, probability in normalized))


def median(normalized: list[tuple[int, Fraction]]) -> int:
    """First value whose cumulative probability reaches one half."""
    cumulative = Fraction(0)
    for value, probability in normalized:
        cumulative += probability
        if cumulative >= Fraction(1, 2):
            return value
    return normalized[-1][0] if normalized else 0


def mode(normalized: list[tuple[int, Fraction]]) -> list[int]:
    """All values sharing the highest probability, ascending."""
    if not normalized:
        return []
    highest = max(probability for _, probability in normalized)
    return [value for value, probability in normalized if probability == highest]
