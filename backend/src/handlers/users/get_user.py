"""
Get User Handler.
GET /users/{email}
"""
from shared.auth import get_user
from shared.errors import NotFound
from shared.utils import api_handler, format_response, get_path_param


@api_handler
def handler(event, context):
    user = get_user(get_path_param(event, 'email'))
    if not user:
        raise NotFound('User not found')
    return format_response(200, user)
