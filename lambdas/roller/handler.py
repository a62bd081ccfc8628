"""Roll Lambda handler: executes dice expressions and summarizes roll history."""
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.event_handler import (
    APIGatewayRestResolver,
    CORSConfig,
    Response,
)
from aws_lambda_powertools.event_handler.exceptions import BadRequestError
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from roller.models import NotationRequest, RollRequest, StatisticsRequest
from roller.resolver import CharacterSheetResolver
from roller.service import DiceRoller
from roller.statistics import calculate_statistics
from shared.config import get_config
from shared.dice import RandomDiceRng
from shared.exceptions import ResolutionError
from shared.exceptions import ValidationError as ExpressionValidationError
from shared.notation import generate_notation
from shared.utils import error_response, json_response, parse_request

logger = Logger()
tracer = Tracer()
metrics = Metrics(namespace="DiceEngine")

config = get_config()
metrics.set_default_dimensions(environment=config.environment)
cors_config = CORSConfig(
    allow_origin=config.allowed_origin,
    allow_headers=["Content-Type"],
    max_age=300,
)
app = APIGatewayRestResolver(cors=cors_config)


@app.post("/rolls")
@tracer.capture_method
def post_roll() -> Response:
    """Roll a dice expression.

    Returns:
        200 response with the RollResult
    """
    request = parse_request(app.current_event.json_body, RollRequest)
    roller = DiceRoller(
        rng=RandomDiceRng(request.seed),
        resolver=CharacterSheetResolver(request.character),
    )

    try:
        result = roller.roll_expression(request.expression)
    except ExpressionValidationError as e:
        raise BadRequestError(e.message) from None
    except ResolutionError as e:
        return error_response(422, "unresolvable_modifier", e.message)

    metrics.add_metric(name="Rolls", unit=MetricUnit.Count, value=1)
    return json_response(200, result.model_dump_json())


@app.post("/rolls/statistics")
@tracer.capture_method
def post_statistics() -> Response:
    """Summarize a roll history supplied by the caller.

    Returns:
        200 response with statistics, or {"statistics": null} for no matches
    """
    request = parse_request(app.current_event.json_body, StatisticsRequest)
    stats = calculate_statistics(
        request.rolls,
        time_filter=request.time_filter,
        session_start=request.session_start,
    )
    if stats is None:
        return json_response(200, '{"statistics": null}')
    return json_response(200, stats.model_dump_json())


@app.post("/notation")
@tracer.capture_method
def post_notation() -> dict[str, Any]:
    """Render an expression as dice notation.

    Returns:
        200 response with the notation string
    """
    request = parse_request(app.current_event.json_body, NotationRequest)
    return {"notation": generate_notation(request.expression)}


@logger.inject_lambda_context
@tracer.capture_lambda_handler
@metrics.log_metrics
def lambda_handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """Main Lambda entry point."""
    return app.resolve(event, context)
