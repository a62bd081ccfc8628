"""Expression-level checks and rewrites shared by rolling and probability."""

from shared.exceptions import ValidationError
from shared.models import (
    MAX_DICE_COUNT,
    MAX_DIE_SIDES,
    MIN_DICE_COUNT,
    MIN_DIE_SIDES,
    AdvantageType,
    DiceExpression,
    DiceGroup,
    KeepDropConfig,
    KeepDropType,
)


def validate_expression(expression: DiceExpression) -> None:
    """Check that an expression can be rolled.

    Args:
        expression: Expression to check

    Raises:
        ValidationError: If the group list is empty or a group is out of range
    """
    if not expression.groups:
        raise ValidationError(
            "DiceExpression must contain at least one group", field="groups"
        )

    for index, group in enumerate(expression.groups):
        if not MIN_DICE_COUNT <= group.count <= MAX_DICE_COUNT:
            raise ValidationError(
                f"Dice count must be between {MIN_DICE_COUNT} and {MAX_DICE_COUNT}, "
                f"got {group.count}",
                field=f"groups[{index}].count",
            )
        if not MIN_DIE_SIDES <= group.sides <= MAX_DIE_SIDES:
            raise ValidationError(
                f"Die sides must be between {MIN_DIE_SIDES} and {MAX_DIE_SIDES}, "
                f"got {group.sides}",
                field=f"groups[{index}].sides",
            )


def advantage_group(advantage: AdvantageType) -> DiceGroup:
    """Build the 2d20 keep-one group that stands in for an advantage roll."""
    keep_type = (
        KeepDropType.KEEP_HIGHEST
        if advantage == AdvantageType.ADVANTAGE
        else KeepDropType.KEEP_LOWEST
    )
    return DiceGroup(count=2, sides=20, keep_drop=KeepDropConfig(type=keep_type, count=1))


def effective_groups(expression: DiceExpression) -> list[DiceGroup]:
    """Return the groups actually rolled for an expression.

    Advantage and disadvantage only apply when the first group is a single
    d20; it is then replaced by 2d20 keeping the highest or lowest die.
    Otherwise the groups are returned unchanged.
    """
    groups = list(expression.groups)
    if expression.has_advantage_state and expression.first_group_is_single_d20:
        groups[0] = advantage_group(expression.advantage)
    return groups
