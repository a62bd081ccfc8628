"""Tests for dice notation rendering."""

import pytest

from shared.models import (
    Ability,
    AdvantageType,
    CharacterModifier,
    DiceExpression,
    DiceGroup,
    FixedModifier,
    KeepDropConfig,
    KeepDropType,
)
from shared.notation import generate_notation, group_notation, modifier_notation


def expression(*groups, modifier=None, advantage=AdvantageType.NONE):
    """Build an expression from (count, sides) tuples or DiceGroups."""
    built = [g if isinstance(g, DiceGroup) else DiceGroup(count=g[0], sides=g[1]) for g in groups]
    return DiceExpression(
        groups=built,
        modifier=modifier or FixedModifier(value=0),
        advantage=advantage,
    )


class TestGenerateNotation:
    """Tests for generate_notation."""

    def test_simple(self):
        """A single die without modifier."""
        assert generate_notation(expression((1, 20))) == "1d20"

    def test_positive_modifier(self):
        """Positive modifiers render with a plus sign after a space."""
        assert generate_notation(expression((1, 20), modifier=FixedModifier(value=5))) == "1d20 +5"

    def test_negative_modifier(self):
        """Negative modifiers render with a minus sign."""
        assert generate_notation(expression((1, 20), modifier=FixedModifier(value=-3))) == "1d20 -3"

    def test_multiple_groups(self):
        """Groups join with ' + '."""
        result = generate_notation(expression((1, 20), (2, 6), modifier=FixedModifier(value=4)))
        assert result == "1d20 + 2d6 +4"

    def test_non_standard_die(self):
        """Any side count renders as-is."""
        assert generate_notation(expression((2, 37))) == "2d37"

    @pytest.mark.parametrize(
        "kind,count,expected",
        [
            (KeepDropType.KEEP_HIGHEST, 3, "4d6kh3"),
            (KeepDropType.KEEP_LOWEST, 1, "4d6kl1"),
            (KeepDropType.DROP_HIGHEST, 1, "4d6dh1"),
            (KeepDropType.DROP_LOWEST, 2, "4d6dl2"),
        ],
    )
    def test_keep_drop_suffix(self, kind, count, expected):
        """Keep/drop rules append their suffix and count."""
        group = DiceGroup(count=4, sides=6, keep_drop=KeepDropConfig(type=kind, count=count))
        assert generate_notation(expression(group)) == expected

    def test_advantage(self):
        """Advantage on 1d20 renders as 2d20kh1."""
        assert generate_notation(expression((1, 20), advantage=AdvantageType.ADVANTAGE)) == "2d20kh1"

    def test_disadvantage(self):
        """Disadvantage on 1d20 renders as 2d20kl1."""
        result = generate_notation(expression((1, 20), advantage=AdvantageType.DISADVANTAGE))
        assert result == "2d20kl1"

    def test_advantage_with_modifier_and_groups(self):
        """Only the first group is rewritten."""
        result = generate_notation(
            expression(
                (1, 20), (2, 6), modifier=FixedModifier(value=3), advantage=AdvantageType.ADVANTAGE
            )
        )
        assert result == "2d20kh1 + 2d6 +3"

    def test_advantage_none_renders_plainly(self):
        """An explicit NONE advantage is a plain roll."""
        assert generate_notation(expression((1, 20), advantage=AdvantageType.NONE)) == "1d20"

    def test_advantage_on_non_d20_is_not_rewritten(self):
        """Advantage only rewrites a leading single d20."""
        assert generate_notation(expression((2, 6), advantage=AdvantageType.ADVANTAGE)) == "2d6"
        assert generate_notation(expression((2, 20), advantage=AdvantageType.ADVANTAGE)) == "2d20"

    def test_character_modifier(self):
        """Character modifiers render as their formula."""
        modifier = CharacterModifier(ability=Ability.STR, include_proficiency=True)
        assert generate_notation(expression((1, 20), modifier=modifier)) == "1d20 +STR+Prof"

    def test_empty_character_modifier_omitted(self):
        """A character modifier with nothing in it renders nothing."""
        assert generate_notation(expression((1, 20), modifier=CharacterModifier())) == "1d20"


class TestModifierNotation:
    """Tests for modifier_notation."""

    def test_fixed_zero(self):
        """Zero renders as empty."""
        assert modifier_notation(FixedModifier(value=0)) == ""

    def test_fixed_values(self):
        """Fixed values are signed."""
        assert modifier_notation(FixedModifier(value=5)) == "+5"
        assert modifier_notation(FixedModifier(value=-3)) == "-3"

    def test_ability_only(self):
        """Ability alone."""
        assert modifier_notation(CharacterModifier(ability=Ability.DEX)) == "+DEX"

    def test_proficiency_only(self):
        """Proficiency alone."""
        assert modifier_notation(CharacterModifier(include_proficiency=True)) == "+Prof"

    def test_full_formula(self):
        """Ability, proficiency and a bonus."""
        modifier = CharacterModifier(
            ability=Ability.DEX, include_proficiency=True, additional_bonus=2
        )
        assert modifier_notation(modifier) == "+DEX+Prof+2"

    def test_negative_bonus(self):
        """Negative bonuses keep a single sign."""
        modifier = CharacterModifier(ability=Ability.STR, additional_bonus=-1)
        assert modifier_notation(modifier) == "+STR-1"

    def test_bonus_only(self):
        """A bare bonus renders as a signed number."""
        assert modifier_notation(CharacterModifier(additional_bonus=2)) == "+2"
        assert modifier_notation(CharacterModifier(additional_bonus=-2)) == "-2"


class TestGroupNotation:
    """Tests for group_notation."""

    def test_plain(self):
        """NdS."""
        assert group_notation(DiceGroup(count=3, sides=8)) == "3d8"
