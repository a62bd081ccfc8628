"""Shared building blocks for the dice engine Lambda functions."""

from .config import Config
from .exceptions import (
    ConfigurationError,
    DiceEngineError,
    ResolutionError,
    ValidationError,
)
from .models import (
    AdvantageType,
    CharacterModifier,
    CharacterSheet,
    DiceExpression,
    DiceGroup,
    FixedModifier,
    KeepDropConfig,
    KeepDropType,
    ProbabilityResult,
    RollResult,
)
from .notation import generate_notation

__all__ = [
    # Config
    "Config",
    # Exceptions
    "ConfigurationError",
    "DiceEngineError",
    "ResolutionError",
    "ValidationError",
    # Models
    "AdvantageType",
    "CharacterModifier",
    "CharacterSheet",
    "DiceExpression",
    "DiceGroup",
    "FixedModifier",
    "KeepDropConfig",
    "KeepDropType",
    "ProbabilityResult",
    "RollResult",
    # Notation
    "generate_notation",
]
