"""Roll execution: resolving modifiers, rolling expressions, roll statistics."""

from .resolver import (
    CharacterModifierResolver,
    CharacterSheetResolver,
    NullResolver,
    resolve_modifier,
)
from .service import DiceRoller
from .statistics import StatisticsData, TimeFilter, calculate_statistics

__all__ = [
    "CharacterModifierResolver",
    "CharacterSheetResolver",
    "DiceRoller",
    "NullResolver",
    "StatisticsData",
    "TimeFilter",
    "calculate_statistics",
    "resolve_modifier",
]
