"""Resolution of modifiers to plain integers.

Fixed modifiers resolve to their value. Character-derived modifiers are
delegated to a CharacterModifierResolver, which returns None when it cannot
produce a value. An unresolved character modifier is never treated as zero:
resolve_modifier raises ResolutionError instead.
"""

from typing import Protocol

from aws_lambda_powertools import Logger

from shared.exceptions import ResolutionError
from shared.models import (
    MAX_ABILITY_SCORE,
    MAX_CHARACTER_LEVEL,
    MIN_ABILITY_SCORE,
    MIN_CHARACTER_LEVEL,
    CharacterModifier,
    CharacterSheet,
    DiceExpression,
    FixedModifier,
)
from shared.utils import calculate_ability_modifier, calculate_proficiency_bonus

logger = Logger(child=True)

UNRESOLVABLE_MESSAGE = (
    "Character modifier cannot be calculated. "
    "Please check your character sheet."
)


class CharacterModifierResolver(Protocol):
    """Turns a character-derived modifier into a number."""

    def resolve(self, modifier: CharacterModifier) -> int | None:
        """Return the modifier value, or None if it cannot be resolved."""
        ...


class NullResolver:
    """Resolver used when no character sheet is available."""

    def resolve(self, modifier: CharacterModifier) -> int | None:
        return None


class CharacterSheetResolver:
    """Resolves character modifiers against a single character sheet."""

    def __init__(self, sheet: CharacterSheet | None) -> None:
        """Initialize resolver.

        Args:
            sheet: Active character sheet, or None if none is configured
        """
        self.sheet = sheet

    def resolve(self, modifier: CharacterModifier) -> int | None:
        """Compute ability modifier + proficiency + additional bonus.

        Args:
            modifier: Character modifier to resolve

        Returns:
            Resolved value, or None if there is no sheet, the ability score is
            outside 1-30, or proficiency is requested with a level outside 1-20
        """
        if self.sheet is None:
            return None

        total = modifier.additional_bonus

        if modifier.ability is not None:
            score = self.sheet.ability_scores.score(modifier.ability)
            if not MIN_ABILITY_SCORE <= score <= MAX_ABILITY_SCORE:
                logger.warning(
                    "Invalid ability score",
                    extra={"ability": modifier.ability.value, "score": score},
                )
                return None
            total += calculate_ability_modifier(score)

        if modifier.include_proficiency:
            level = self.sheet.level
            if not MIN_CHARACTER_LEVEL <= level <= MAX_CHARACTER_LEVEL:
                logger.warning("Invalid character level", extra={"level": level})
                return None
            total += calculate_proficiency_bonus(level)

        return total


def resolve_modifier(
    modifier: FixedModifier | CharacterModifier,
    resolver: CharacterModifierResolver,
) -> int:
    """Resolve any modifier to an integer.

    Args:
        modifier: Fixed or character-derived modifier
        resolver: Resolver for character-derived modifiers

    Returns:
        Numeric modifier

    Raises:
        ResolutionError: If a character modifier cannot be resolved
    """
    if isinstance(modifier, FixedModifier):
        return modifier.value

    resolved = resolver.resolve(modifier)
    if resolved is None:
        logger.warning(
            "Character modifier could not be resolved",
            extra={"modifier": modifier.model_dump(mode="json")},
        )
        raise ResolutionError(UNRESOLVABLE_MESSAGE, reason="unresolvable")
    return resolved


def with_resolved_modifier(
    expression: DiceExpression, resolver: CharacterModifierResolver
) -> DiceExpression:
    """Return a copy of the expression whose modifier is a FixedModifier.

    Used where results are shared across characters, so that the notation
    (and any cache key built from it) carries the resolved number rather
    than the character formula.

    Raises:
        ResolutionError: If a character modifier cannot be resolved
    """
    if isinstance(expression.modifier, FixedModifier):
        return expression
    value = resolve_modifier(expression.modifier, resolver)
    return expression.model_copy(update={"modifier": FixedModifier(value=value)})
