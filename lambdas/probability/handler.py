"""Probability Lambda handler: distributions, success chances and crit odds."""
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

from probability.models import CriticalRequest, ProbabilityRequest, SuccessRequest
from probability.service import ProbabilityCalculator
from roller.resolver import CharacterSheetResolver, with_resolved_modifier
from shared.config import get_config
from shared.exceptions import ResolutionError
from shared.exceptions import ValidationError as ExpressionValidationError
from shared.models import DiceExpression
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

# One calculator per warm container so the LRU cache survives between requests
_service: ProbabilityCalculator | None = None


def get_service() -> ProbabilityCalculator:
    """Get or create the probability calculator singleton."""
    global _service
    if _service is None:
        _service = ProbabilityCalculator()
    return _service


def reset_service() -> None:
    """Reset the service instance (for testing)."""
    global _service
    _service = None


def prepare_expression(request: ProbabilityRequest) -> DiceExpression:
    """Resolve any character modifier against the request's character sheet.

    The shared calculator caches by notation, so character formulas are
    replaced by their value for this character before the lookup.

    Raises:
        ResolutionError: If the character modifier cannot be resolved
    """
    return with_resolved_modifier(
        request.expression, CharacterSheetResolver(request.character)
    )


@app.post("/probabilities")
@tracer.capture_method
def post_probabilities() -> Response:
    """Calculate the full distribution of an expression.

    Returns:
        200 response with the ProbabilityResult
    """
    request = parse_request(app.current_event.json_body, ProbabilityRequest)

    try:
        result = get_service().calculate_probabilities(prepare_expression(request))
    except ExpressionValidationError as e:
        raise BadRequestError(e.message) from None
    except ResolutionError as e:
        return error_response(422, "unresolvable_modifier", e.message)

    metrics.add_metric(name="Calculations", unit=MetricUnit.Count, value=1)
    metrics.add_dimension(name="Method", value=result.calculation_method.value)
    return json_response(200, result.model_dump_json())


@app.post("/probabilities/success")
@tracer.capture_method
def post_success_probability() -> Response:
    """Chance of meeting or beating a DC.

    Returns:
        200 response with the SuccessProbability
    """
    request = parse_request(app.current_event.json_body, SuccessRequest)

    try:
        success = get_service().get_success_probability(
            prepare_expression(request), request.target_dc
        )
    except ExpressionValidationError as e:
        raise BadRequestError(e.message) from None
    except ResolutionError as e:
        return error_response(422, "unresolvable_modifier", e.message)

    return json_response(200, success.model_dump_json())


@app.post("/probabilities/critical")
@tracer.capture_method
def post_critical_probabilities() -> Response:
    """Natural 20 / natural 1 odds.

    Returns:
        200 response with CriticalProbabilities, or {"critical": null} when the
        expression does not start with a d20
    """
    request = parse_request(app.current_event.json_body, CriticalRequest)
    critical = get_service().get_critical_probabilities(request.expression)
    if critical is None:
        return json_response(200, '{"critical": null}')
    return json_response(200, critical.model_dump_json())


@logger.inject_lambda_context
@tracer.capture_lambda_handler
@metrics.log_metrics
def lambda_handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """Main Lambda entry point."""
    return app.resolve(event, context)
