"""Pydantic models for roll API requests."""
from datetime import datetime

from pydantic import BaseModel, Field

from roller.statistics import TimeFilter
from shared.models import CharacterSheet, DiceExpression, RollResult


class RollRequest(BaseModel):
    """Request body for POST /rolls."""

    expression: DiceExpression
    character: CharacterSheet | None = None
    """Character sheet used to resolve character-derived modifiers."""

    seed: int | None = None
    """Optional seed for a reproducible roll."""


class StatisticsRequest(BaseModel):
    """Request body for POST /rolls/statistics."""

    rolls: list[RollResult] = Field(default_factory=list)
    time_filter: TimeFilter = TimeFilter.ALL
    session_start: datetime | None = None


class NotationRequest(BaseModel):
    """Request body for POST /notation."""

    expression: DiceExpression
