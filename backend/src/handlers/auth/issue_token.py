"""
Issue Token Handler.
POST /jwt
"""
from shared.auth import issue_token
from shared.errors import InvalidInput
from shared.utils import api_handler, format_response, parse_body


@api_handler
def handler(event, context):
    """
    Body: { "email": "user@example.com", ... }

    The whole body is signed into the token; only `email` is required
    since every protected route identifies the caller by it.
    """
    user = parse_body(event)
    if not user.get('email'):
        raise InvalidInput('Missing email')

    return format_response(200, {'token': issue_token(user)})
