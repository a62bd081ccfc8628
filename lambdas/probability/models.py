"""Pydantic models for probability API requests."""
from pydantic import BaseModel

from shared.models import CharacterSheet, DiceExpression


class ProbabilityRequest(BaseModel):
    """Request body for POST /probabilities."""

    expression: DiceExpression
    character: CharacterSheet | None = None
    """Character sheet used to resolve character-derived modifiers."""


class SuccessRequest(ProbabilityRequest):
    """Request body for POST /probabilities/success."""

    target_dc: int


class CriticalRequest(BaseModel):
    """Request body for POST /probabilities/critical."""

    expression: DiceExpression
