"""
Common utility functions for Lambda handlers.
"""
import functools
import json
from decimal import Decimal
from typing import Any, Callable, Dict, Optional

from .errors import ApiError, InvalidInput
from .logging import logger, log_event


class DecimalEncoder(json.JSONEncoder):
    """JSON encoder that handles Decimal types from DynamoDB."""

    def default(self, o):
        if isinstance(o, Decimal):
            # Convert to int if it's a whole number, otherwise float
            if o % 1 == 0:
                return int(o)
            return float(o)
        if isinstance(o, set):
            return sorted(o)
        return super().default(o)


def format_response(
    status_code: int,
    body: Any,
    headers: Dict[str, str] = None
) -> Dict[str, Any]:
    """
    Format a standard API Gateway response with CORS headers.

    Args:
        status_code: HTTP status code
        body: Response body (will be JSON serialized)
        headers: Additional headers to include

    Returns:
        API Gateway response dict
    """
    default_headers = {
        'Access-Control-Allow-Origin': '*',
        'Access-Control-Allow-Credentials': 'true',
        'Access-Control-Allow-Headers': 'Content-Type,Authorization',
        'Content-Type': 'application/json'
    }

    if headers:
        default_headers.update(headers)

    return {
        'statusCode': status_code,
        'headers': default_headers,
        'body': json.dumps(body, cls=DecimalEncoder)
    }


def parse_body(event: dict) -> dict:
    """
    Safely parse JSON body from API Gateway event.

    Args:
        event: API Gateway Lambda proxy event

    Returns:
        Parsed body dict (floats as Decimal) or empty dict if invalid
    """
    try:
        body = event.get('body') or '{}'
        if isinstance(body, str):
            body = json.loads(body, parse_float=Decimal)
        return body if isinstance(body, dict) else {}
    except (json.JSONDecodeError, TypeError):
        return {}


def get_path_param(event: dict, param_name: str) -> Optional[str]:
    """Extract path parameter from event."""
    try:
        return event['pathParameters'][param_name]
    except (KeyError, TypeError):
        return None


def get_query_param(event: dict, param_name: str, default: str = None) -> Optional[str]:
    """Extract query string parameter from event."""
    params = event.get('queryStringParameters') or {}
    return params.get(param_name, default)


def get_header(event: dict, name: str) -> Optional[str]:
    """Case-insensitive header lookup."""
    headers = event.get('headers') or {}
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def to_int(value: Any, field: str) -> int:
    """
    Coerce a JSON or DynamoDB number to int.

    Raises:
        InvalidInput: if the value is missing, fractional or not numeric
    """
    if value is None or value == '' or isinstance(value, bool):
        raise InvalidInput(f'Missing {field}')
    try:
        number = Decimal(str(value))
    except ArithmeticError:
        raise InvalidInput(f'Invalid {field}')
    if not number.is_finite() or number % 1 != 0:
        raise InvalidInput(f'Invalid {field}')
    return int(number)


def api_handler(func: Callable) -> Callable:
    """
    Wrap a Lambda handler: log the event, turn ApiErrors into
    JSON error responses and anything else into a 500.
    """
    @functools.wraps(func)
    def wrapper(event, context):
        log_event(event)
        try:
            return func(event, context)
        except ApiError as e:
            logger.warning(f"{func.__module__}: {e.status_code} {e.message}")
            return format_response(e.status_code, {'message': e.message})
        except Exception:
            logger.exception(f"Unhandled error in {func.__module__}")
            return format_response(500, {'message': 'Internal Server Error'})

    return wrapper
