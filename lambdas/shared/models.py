"""Pydantic models for dice expressions, roll results and probability results."""

import math
from datetime import UTC, datetime
from enum import Enum
from fractions import Fraction
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

# Supported ranges, enforced by shared.expression rather than by the models so
# that callers get a domain ValidationError instead of a pydantic one.
MIN_DICE_COUNT = 1
MAX_DICE_COUNT = 20
MIN_DIE_SIDES = 1
MAX_DIE_SIDES = 10_000

MIN_ABILITY_SCORE = 1
MAX_ABILITY_SCORE = 30
MIN_CHARACTER_LEVEL = 1
MAX_CHARACTER_LEVEL = 20


def _utc_now() -> datetime:
    return datetime.now(UTC)


class KeepDropType(str, Enum):
    """Keep/drop rules applied to a dice group."""

    KEEP_HIGHEST = "keep_highest"
    KEEP_LOWEST = "keep_lowest"
    DROP_HIGHEST = "drop_highest"
    DROP_LOWEST = "drop_lowest"


class AdvantageType(str, Enum):
    """D20 advantage state."""

    NONE = "none"
    ADVANTAGE = "advantage"
    DISADVANTAGE = "disadvantage"


class Ability(str, Enum):
    """The six D&D 5e abilities."""

    STR = "STR"
    DEX = "DEX"
    CON = "CON"
    INT = "INT"
    WIS = "WIS"
    CHA = "CHA"


class CalculationMethod(str, Enum):
    """How a probability distribution was obtained."""

    EXACT = "exact"
    SIMULATION = "simulation"


class KeepDropConfig(BaseModel):
    """Keep/drop rule, e.g. keep highest 3."""

    model_config = ConfigDict(frozen=True)

    type: KeepDropType
    count: int = Field(..., ge=1)


class DiceGroup(BaseModel):
    """N identical dice, optionally pruned by a keep/drop rule."""

    model_config = ConfigDict(frozen=True)

    count: int
    """Number of dice (1-20)."""

    sides: int
    """Faces per die (1-10000). Not limited to the standard polyhedrals."""

    keep_drop: KeepDropConfig | None = None

    @property
    def is_single_d20(self) -> bool:
        """True for exactly one twenty-sided die."""
        return self.count == 1 and self.sides == 20


class FixedModifier(BaseModel):
    """Fixed numeric modifier."""

    model_config = ConfigDict(frozen=True)

    type: Literal["fixed"] = "fixed"
    value: int = 0


class CharacterModifier(BaseModel):
    """Modifier derived from the active character sheet at roll time."""

    model_config = ConfigDict(frozen=True)

    type: Literal["character"] = "character"

    ability: Ability | None = None
    """Ability whose modifier is added. None means proficiency/bonus only."""

    include_proficiency: bool = False
    """Add the proficiency bonus for the character's level."""

    additional_bonus: int = 0
    """Extra fixed bonus, e.g. +2 for a magic weapon."""


Modifier = Annotated[FixedModifier | CharacterModifier, Field(discriminator="type")]


class DiceExpression(BaseModel):
    """Declarative description of a roll: dice groups, modifier and advantage."""

    model_config = ConfigDict(frozen=True)

    groups: list[DiceGroup] = Field(default_factory=list)
    modifier: Modifier = Field(default_factory=FixedModifier)
    advantage: AdvantageType = AdvantageType.NONE

    @property
    def has_advantage_state(self) -> bool:
        """True when advantage or disadvantage is requested."""
        return self.advantage != AdvantageType.NONE

    @property
    def first_group_is_single_d20(self) -> bool:
        """True when the expression starts with exactly one d20."""
        return bool(self.groups) and self.groups[0].is_single_d20


class IndividualRoll(BaseModel):
    """One physical die result."""

    model_config = ConfigDict(frozen=True)

    value: int
    is_dropped: bool = False


class DiceGroupResult(BaseModel):
    """Rolled dice for one group."""

    model_config = ConfigDict(frozen=True)

    rolls: list[IndividualRoll]
    group_sum: int
    """Sum of the rolls that were not dropped."""


class RollResult(BaseModel):
    """Auditable result of executing a dice expression once."""

    model_config = ConfigDict(frozen=True)

    group_results: list[DiceGroupResult]
    modifier: int
    """Resolved numeric modifier."""

    total: int
    timestamp: datetime = Field(default_factory=_utc_now)
    notation: str
    expression: DiceExpression


class ProbabilityPoint(BaseModel):
    """A single point in a probability distribution."""

    model_config = ConfigDict(frozen=True)

    value: int
    probability: float
    """Probability as decimal (0-1)."""

    percentage: float
    """Probability as percentage (0-100)."""

    cumulative: float
    """P(result <= value) as percentage."""


class ProbabilityResult(BaseModel):
    """Complete probability analysis for a dice expression.

    Frozen: the calculator cache hands the same instance to every caller.
    """

    model_config = ConfigDict(frozen=True)

    expression: DiceExpression
    notation: str
    distribution: tuple[ProbabilityPoint, ...]
    """Sorted by value ascending."""

    min_value: int
    max_value: int
    expected_value: float
    median: int
    mode: tuple[int, ...]
    """Most likely value(s); ties are all returned."""

    calculation_method: CalculationMethod
    simulation_runs: int | None = None
    timestamp: datetime = Field(default_factory=_utc_now)

    _exact_distribution: tuple[tuple[int, Fraction], ...] = PrivateAttr(default=())

    def attach_exact_distribution(self, normalized: list[tuple[int, Fraction]]) -> None:
        """Keep the unrounded probabilities alongside the float distribution."""
        self._exact_distribution = tuple(normalized)

    def probability_at_least(self, threshold: int) -> float:
        """P(total >= threshold).

        Uses the exact probabilities when this result was computed in-process,
        otherwise sums the float distribution.
        """
        if self._exact_distribution:
            return float(
                sum(p for value, p in self._exact_distribution if value >= threshold)
            )
        return math.fsum(
            point.probability for point in self.distribution if point.value >= threshold
        )


class SuccessProbability(BaseModel):
    """Chance that a roll meets or beats a target DC."""

    target_dc: int
    probability: float
    percentage: float


class CriticalProbabilities(BaseModel):
    """Natural 20 / natural 1 chances as percentages."""

    nat20_probability: float
    nat1_probability: float


class AbilityScores(BaseModel):
    """Ability scores as supplied by the character sheet.

    Ranges are checked when a modifier is resolved, not here.
    """

    STR: int = 10
    DEX: int = 10
    CON: int = 10
    INT: int = 10
    WIS: int = 10
    CHA: int = 10

    def score(self, ability: Ability) -> int:
        """Return the score for an ability."""
        return getattr(self, ability.value)


class CharacterSheet(BaseModel):
    """Character data needed to resolve character-derived modifiers."""

    name: str = ""
    level: int = 1
    ability_scores: AbilityScores = Field(default_factory=AbilityScores)
