"""Probability engine - exact or simulated outcome distributions for dice expressions.

Expressions whose outcome space (product of sides**count) stays within the
simulation threshold are solved exactly by convolution, with keep/drop groups
enumerated tuple by tuple. Larger expressions are approximated by rolling
them repeatedly. Results are cached per engine instance, keyed by notation.
"""

from collections import Counter
from fractions import Fraction

from aws_lambda_powertools import Logger

from probability import algorithms
from probability.cache import LRUCache
from roller.resolver import resolve_modifier
from roller.service import DiceRoller
from shared.config import get_config
from shared.expression import effective_groups, validate_expression
from shared.models import (
    AdvantageType,
    CalculationMethod,
    CriticalProbabilities,
    DiceExpression,
    ProbabilityResult,
    SuccessProbability,
)
from shared.notation import generate_notation
from shared.utils import utc_now

logger = Logger(child=True)

D20_SINGLE_FACE = Fraction(1, 20)
D20_MISS_FACE = Fraction(19, 20)


class ProbabilityCalculator:
    """Calculates probability distributions for dice expressions."""

    def __init__(
        self,
        roller: DiceRoller | None = None,
        cache_max_size: int | None = None,
        simulation_threshold: int | None = None,
        simulation_runs: int | None = None,
    ) -> None:
        """Initialize the calculator.

        Args:
            roller: Roll executor used for simulation; its resolver is also
                used for character modifiers on the exact path
            cache_max_size: Cache capacity (default from config)
            simulation_threshold: Largest outcome space solved exactly
                (default from config)
            simulation_runs: Rolls per simulation (default from config)

        Raises:
            ValueError: If simulation_runs is less than 1
        """
        config = get_config()
        if cache_max_size is None:
            cache_max_size = config.cache_max_size
        if simulation_threshold is None:
            simulation_threshold = config.simulation_threshold
        if simulation_runs is None:
            simulation_runs = config.simulation_runs
        if simulation_runs < 1:
            raise ValueError("simulation_runs must be at least 1")

        self.roller = roller or DiceRoller()
        self.simulation_threshold = simulation_threshold
        self.simulation_runs = simulation_runs
        self.cache: LRUCache[ProbabilityResult] = LRUCache(cache_max_size)

    def calculate_probabilities(self, expression: DiceExpression) -> ProbabilityResult:
        """Calculate the full distribution of an expression's total.

        Args:
            expression: Expression to analyze

        Returns:
            ProbabilityResult (possibly a cached instance)

        Raises:
            ValidationError: If the expression is empty or out of range
            ResolutionError: If a character modifier cannot be resolved
        """
        validate_expression(expression)

        notation = generate_notation(expression)
        cached = self.cache.get(notation)
        if cached is not None:
            logger.debug("Probability cache hit", extra={"notation": notation})
            return cached

        use_simulation = self.should_simulate(expression)
        logger.debug(
            "Probability cache miss",
            extra={"notation": notation, "simulate": use_simulation},
        )

        if use_simulation:
            weights = self.calculate_simulation(expression, self.simulation_runs)
        else:
            weights = self.calculate_exact(expression)

        normalized = algorithms.normalize(weights)
        result = ProbabilityResult(
            expression=expression,
            notation=notation,
            distribution=algorithms.to_points(normalized),
            min_value=normalized[0][0],
            max_value=normalized[-1][0],
            expected_value=algorithms.expected_value(normalized),
            median=algorithms.median(normalized),
            mode=algorithms.mode(normalized),
            calculation_method=(
                CalculationMethod.SIMULATION if use_simulation else CalculationMethod.EXACT
            ),
            simulation_runs=self.simulation_runs if use_simulation else None,
            timestamp=utc_now(),
        )
        result.attach_exact_distribution(normalized)

        evicted = self.cache.put(notation, result)
        if evicted is not None:
            logger.debug("Probability cache eviction", extra={"evicted": evicted})

        return result

    def get_success_probability(
        self, expression: DiceExpression, target_dc: int
    ) -> SuccessProbability:
        """Chance that the total meets or beats a DC.

        Args:
            expression: Expression to analyze
            target_dc: Difficulty class

        Returns:
            SuccessProbability for P(total >= target_dc)
        """
        result = self.calculate_probabilities(expression)
        probability = result.probability_at_least(target_dc)
        return SuccessProbability(
            target_dc=target_dc,
            probability=probability,
            percentage=probability * 100,
        )

    def get_critical_probabilities(
        self, expression: DiceExpression
    ) -> CriticalProbabilities | None:
        """Natural 20 and natural 1 chances for a d20-rooted expression.

        Advantage and disadvantage on a single d20 use closed forms. Every
        other d20-rooted configuration (several d20s, keep/drop rules) reports
        the plain single-die odds, which is an approximation for those cases.

        Args:
            expression: Expression to analyze

        Returns:
            Percentages, or None if the first group is not a d20
        """
        if not expression.groups or expression.groups[0].sides != 20:
            return None

        single_d20 = expression.first_group_is_single_d20
        if single_d20 and expression.advantage == AdvantageType.ADVANTAGE:
            nat20 = 1 - D20_MISS_FACE**2
            nat1 = D20_SINGLE_FACE**2
        elif single_d20 and expression.advantage == AdvantageType.DISADVANTAGE:
            nat20 = D20_SINGLE_FACE**2
            nat1 = 1 - D20_MISS_FACE**2
        else:
            nat20 = D20_SINGLE_FACE
            nat1 = D20_SINGLE_FACE

        return CriticalProbabilities(
            nat20_probability=float(nat20 * 100),
            nat1_probability=float(nat1 * 100),
        )

    def clear_cache(self) -> None:
        """Drop all cached results."""
        self.cache.clear()

    def should_simulate(self, expression: DiceExpression) -> bool:
        """Whether the outcome space is too large for exact calculation."""
        return algorithms.outcome_space_exceeds(expression.groups, self.simulation_threshold)

    def calculate_exact(self, expression: DiceExpression) -> algorithms.Distribution:
        """Exact distribution by convolution and keep/drop enumeration.

        Raises:
            ResolutionError: If a character modifier cannot be resolved
        """
        modifier = resolve_modifier(expression.modifier, self.roller.resolver)

        combined = algorithms.point_distribution()
        for group in effective_groups(expression):
            combined = algorithms.convolve(combined, algorithms.group_distribution(group))

        return algorithms.shift(combined, modifier)

    def calculate_simulation(self, expression: DiceExpression, runs: int) -> Counter[int]:
        """Approximate distribution from repeated rolls.

        Returns:
            Counter of totals over `runs` rolls

        Raises:
            ResolutionError: If a character modifier cannot be resolved
        """
        return Counter(
            self.roller.roll_expression(expression).total for _ in range(runs)
        )
