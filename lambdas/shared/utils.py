"""Utility functions for the dice engine."""
import json
from datetime import UTC, datetime
from typing import Any, TypeVar

from aws_lambda_powertools.event_handler import Response
from aws_lambda_powertools.event_handler.exceptions import BadRequestError
from pydantic import BaseModel, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def utc_now() -> datetime:
    """Get the current UTC time.

    Returns:
        Timezone-aware datetime
    """
    return datetime.now(UTC)


def calculate_ability_modifier(score: int) -> int:
    """Calculate the D&D 5e ability modifier.

    Formula: floor((score - 10) / 2), so 10-11 gives +0, 14-15 gives +2,
    20 gives +5 and 8 gives -1.

    Args:
        score: Ability score (1-30)

    Returns:
        Modifier value
    """
    return (score - 10) // 2


def calculate_proficiency_bonus(level: int) -> int:
    """Calculate the proficiency bonus for a character level.

    Levels 1-4: +2, 5-8: +3, 9-12: +4, 13-16: +5, 17-20: +6

    Args:
        level: Character level (1-20)

    Returns:
        Proficiency bonus
    """
    return (level - 1) // 4 + 2


def round_percentage(count: int, total: int) -> float:
    """Express count/total as a percentage rounded to two decimals."""
    if total == 0:
        return 0.0
    return round(count / total * 100, 2)


def json_response(status_code: int, body: str) -> Response:
    """Build a JSON API Gateway response from a serialized body.

    Args:
        status_code: HTTP status code
        body: JSON string (e.g. from model_dump_json())

    Returns:
        Powertools Response
    """
    return Response(
        status_code=status_code,
        content_type="application/json",
        body=body,
    )


def error_response(
    status_code: int,
    error: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> Response:
    """Format an error response.

    Args:
        status_code: HTTP status code
        error: Error type/code
        message: Human-readable error message
        details: Optional additional error details

    Returns:
        Powertools Response with an error body
    """
    body: dict[str, Any] = {
        "error": error,
        "message": message,
    }
    if details:
        body["details"] = details

    return json_response(status_code, json.dumps(body))


def parse_request(body: Any, model: type[ModelT]) -> ModelT:
    """Validate a JSON request body against a pydantic model.

    Args:
        body: Decoded JSON body (None for an empty body)
        model: Request model class

    Returns:
        Validated request model

    Raises:
        BadRequestError: If the body does not match the model
    """
    try:
        return model.model_validate(body or {})
    except ValidationError as e:
        error_msg = e.errors()[0].get("msg", "Invalid request")
        raise BadRequestError(error_msg) from None
