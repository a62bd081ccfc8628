"""Dice notation rendering.

Turns a DiceExpression into the compact string shown to players and used as
the probability cache key, e.g. "2d20kh1 + 2d6 +3" or "1d20 +STR+Prof".
"""

from shared.models import (
    AdvantageType,
    CharacterModifier,
    DiceExpression,
    DiceGroup,
    FixedModifier,
    KeepDropType,
)

KEEP_DROP_SUFFIXES: dict[KeepDropType, str] = {
    KeepDropType.KEEP_HIGHEST: "kh",
    KeepDropType.KEEP_LOWEST: "kl",
    KeepDropType.DROP_HIGHEST: "dh",
    KeepDropType.DROP_LOWEST: "dl",
}

ADVANTAGE_NOTATION: dict[AdvantageType, str] = {
    AdvantageType.ADVANTAGE: "2d20kh1",
    AdvantageType.DISADVANTAGE: "2d20kl1",
}


def _signed(value: int) -> str:
    return f"+{value}" if value >= 0 else str(value)


def group_notation(group: DiceGroup) -> str:
    """Render one dice group.

    Examples: "2d6", "4d6kh3", "1d8dl1"
    """
    notation = f"{group.count}d{group.sides}"
    if group.keep_drop is not None:
        notation += f"{KEEP_DROP_SUFFIXES[group.keep_drop.type]}{group.keep_drop.count}"
    return notation


def modifier_notation(modifier: FixedModifier | CharacterModifier) -> str:
    """Render a modifier, or "" when there is nothing to show.

    Fixed modifiers render as a signed integer ("+5", "-3"). Character
    modifiers render their formula ("+STR+Prof+2", "+Prof", "-1").
    """
    if isinstance(modifier, FixedModifier):
        return "" if modifier.value == 0 else _signed(modifier.value)

    parts: list[str] = []
    if modifier.ability is not None:
        parts.append(modifier.ability.value)
    if modifier.include_proficiency:
        parts.append("Prof")

    notation = "+" + "+".join(parts) if parts else ""
    if modifier.additional_bonus != 0:
        notation += _signed(modifier.additional_bonus)
    return notation


def generate_notation(expression: DiceExpression) -> str:
    """Render a full expression.

    Under advantage or disadvantage a leading single d20 renders as
    "2d20kh1"/"2d20kl1". The rewrite only applies when the first group really
    is one d20, mirroring the substitution done when rolling.

    Args:
        expression: Expression to render

    Returns:
        Notation string such as "1d20 +5" or "2d20kh1 + 3d6"
    """
    parts = [group_notation(group) for group in expression.groups]

    if expression.has_advantage_state and expression.first_group_is_single_d20:
        parts[0] = ADVANTAGE_NOTATION[expression.advantage]

    notation = " + ".join(parts)

    modifier_text = modifier_notation(expression.modifier)
    if modifier_text:
        notation += f" {modifier_text}"

    return notation
