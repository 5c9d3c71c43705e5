"""
Lambda handler for daily recommendation requests.

Accepts an API Gateway REST (v1) or HTTP API (v2) proxy event. GET requests
carry the profile in the query string (list fields comma-separated), POST
requests in a JSON body.
"""
from typing import Any, Dict, Optional
import json

from aws_lambda_powertools import Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from cyclefit.models.user import UserProfile
from cyclefit.services.recommendation import generate_recommendation
from cyclefit.utils.logging import logger

tracer = Tracer()

LIST_FIELDS = ("health_goals", "health_conditions")

def build_response(status_code: int, body: Any) -> Dict[str, Any]:
    """Build an API Gateway proxy response with a JSON body."""
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": body if isinstance(body, str) else json.dumps(body),
        "isBase64Encoded": False
    }

def get_principal(event: Dict[str, Any]) -> Optional[str]:
    """
    Extract the authenticated principal set by the API Gateway authorizer.

    Returns:
        Principal id or subject claim, None if the request is unauthenticated
    """
    authorizer = (event.get("requestContext") or {}).get("authorizer") or {}
    if authorizer.get("principalId"):
        return str(authorizer["principalId"])

    claims = authorizer.get("claims") or (authorizer.get("jwt") or {}).get("claims") or {}
    subject = claims.get("sub")
    return str(subject) if subject else None

def get_method(event: Dict[str, Any]) -> str:
    """Read the HTTP method from a REST API (v1) or HTTP API (v2) event."""
    method = event.get("httpMethod") or ((event.get("requestContext") or {}).get("http") or {}).get("method")
    return (method or "GET").upper()

def parse_query_profile(params: Optional[Dict[str, str]]) -> Dict[str, Any]:
    """Convert query string parameters into profile fields."""
    profile: Dict[str, Any] = dict(params or {})
    for field in LIST_FIELDS:
        if field in profile:
            profile[field] = [item.strip() for item in profile[field].split(",") if item.strip()]
    return profile

def parse_profile(event: Dict[str, Any]) -> UserProfile:
    """
    Build the user profile from a GET or POST event.

    Raises:
        ValueError: If the POST body is not a JSON object
        ValidationError: If profile fields have invalid values
    """
    if get_method(event) == "GET":
        return UserProfile.model_validate(parse_query_profile(event.get("queryStringParameters")))

    body = json.loads(event.get("body") or "{}")
    if not isinstance(body, dict):
        raise ValueError("Request body must be a JSON object")
    return UserProfile.model_validate(body)

@logger.inject_lambda_context
@tracer.capture_lambda_handler
def handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Handle daily recommendation requests.

    Args:
        event: API Gateway Lambda proxy event
        context: Lambda context

    Returns:
        API Gateway Lambda proxy response: 200 with the recommendation (or
        null when no period date is known), 400 on invalid input, 401 when
        unauthenticated, 405 on unsupported methods
    """
    method = get_method(event)
    if method not in ("GET", "POST"):
        return build_response(405, {"error": f"Method {method} not allowed"})

    principal = get_principal(event)
    if principal is None:
        logger.warning("Unauthenticated recommendation request", extra={"method": method})
        return build_response(401, {"error": "Unauthorized"})

    try:
        profile = parse_profile(event)
    except ValidationError as e:
        details = json.loads(e.json(include_url=False))
        logger.warning("Invalid profile", extra={"user_id": principal, "errors": details})
        return build_response(400, {"error": "Invalid profile", "details": details})
    except ValueError as e:
        logger.warning("Malformed request body", extra={"user_id": principal, "error": str(e)})
        return build_response(400, {"error": str(e)})

    try:
        recommendation = generate_recommendation(profile)
    except Exception as e:
        logger.exception("Failed to generate recommendation", extra={
            "user_id": principal,
            "error_type": e.__class__.__name__
        })
        return build_response(500, {"error": "Internal error"})

    if recommendation is None:
        logger.info("No recommendation available", extra={"user_id": principal})
        return build_response(200, "null")

    logger.info("Recommendation served", extra={
        "user_id": principal,
        "phase": recommendation.phase,
        "day": recommendation.day
    })
    return build_response(200, recommendation.model_dump_json())
