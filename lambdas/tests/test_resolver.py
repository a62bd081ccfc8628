"""Tests for modifier resolution."""

import pytest

from roller.resolver import (
    CharacterSheetResolver,
    NullResolver,
    resolve_modifier,
    with_resolved_modifier,
)
from shared.exceptions import ResolutionError
from shared.models import (
    Ability,
    AbilityScores,
    CharacterModifier,
    CharacterSheet,
    DiceExpression,
    DiceGroup,
    FixedModifier,
)


@pytest.fixture
def fighter():
    """Level 5 fighter: STR 16 (+3), DEX 14 (+2), proficiency +3."""
    return CharacterSheet(
        name="Grimjaw",
        level=5,
        ability_scores=AbilityScores(STR=16, DEX=14, CON=15, INT=8, WIS=12, CHA=10),
    )


class TestCharacterSheetResolver:
    """Tests for resolving against a character sheet."""

    def test_ability_only(self, fighter):
        """Ability modifier alone."""
        resolver = CharacterSheetResolver(fighter)

        assert resolver.resolve(CharacterModifier(ability=Ability.STR)) == 3

    def test_ability_and_proficiency(self, fighter):
        """Ability modifier plus proficiency bonus."""
        resolver = CharacterSheetResolver(fighter)
        modifier = CharacterModifier(ability=Ability.DEX, include_proficiency=True)

        assert resolver.resolve(modifier) == 5

    def test_additional_bonus(self, fighter):
        """Additional bonus is added on top."""
        resolver = CharacterSheetResolver(fighter)
        modifier = CharacterModifier(
            ability=Ability.INT, include_proficiency=True, additional_bonus=2
        )

        assert resolver.resolve(modifier) == -1 + 3 + 2

    def test_no_sheet(self):
        """No character means no value."""
        assert CharacterSheetResolver(None).resolve(CharacterModifier()) is None

    def test_ability_score_out_of_range(self, fighter):
        """Scores outside 1-30 cannot be resolved."""
        sheet = fighter.model_copy(
            update={"ability_scores": AbilityScores(STR=31)}
        )

        assert CharacterSheetResolver(sheet).resolve(CharacterModifier(ability=Ability.STR)) is None

    def test_level_out_of_range_with_proficiency(self, fighter):
        """Levels outside 1-20 cannot give a proficiency bonus."""
        sheet = fighter.model_copy(update={"level": 21})

        resolver = CharacterSheetResolver(sheet)
        assert resolver.resolve(CharacterModifier(include_proficiency=True)) is None
        # Level is irrelevant when proficiency is not requested
        assert resolver.resolve(CharacterModifier(ability=Ability.STR)) == 3


class TestResolveModifier:
    """Tests for resolve_modifier."""

    def test_fixed(self):
        """Fixed modifiers never touch the resolver."""
        assert resolve_modifier(FixedModifier(value=-2), NullResolver()) == -2

    def test_unresolved_character_modifier_raises(self):
        """An unresolved character modifier is an error, never zero."""
        with pytest.raises(ResolutionError) as exc_info:
            resolve_modifier(CharacterModifier(ability=Ability.STR), NullResolver())
        assert "character sheet" in exc_info.value.message

    def test_with_resolved_modifier(self, fighter):
        """Character modifiers are replaced by their fixed value."""
        expression = DiceExpression(
            groups=[DiceGroup(count=1, sides=20)],
            modifier=CharacterModifier(ability=Ability.STR, include_proficiency=True),
        )

        resolved = with_resolved_modifier(expression, CharacterSheetResolver(fighter))

        assert resolved.modifier == FixedModifier(value=6)
        assert resolved.groups == expression.groups

    def test_with_resolved_modifier_fixed_unchanged(self):
        """Fixed expressions are returned as-is."""
        expression = DiceExpression(groups=[DiceGroup(count=1, sides=20)])

        assert with_resolved_modifier(expression, NullResolver()) is expression
