"""
Role Check Handlers.
GET /users/admin/{email}  -> { "admin": bool }
GET /users/buyer/{email}  -> { "buyer": bool }

A caller may only ask about their own email.
"""
from shared.auth import get_caller_email, get_user, is_admin, is_buyer
from shared.errors import Forbidden
from shared.utils import api_handler, format_response, get_path_param


def _own_user(event):
    email = get_path_param(event, 'email')
    if email != get_caller_email(event):
        raise Forbidden()
    return get_user(email)


@api_handler
def admin_handler(event, context):
    return format_response(200, {'admin': is_admin(_own_user(event))})


@api_handler
def buyer_handler(event, context):
    return format_response(200, {'buyer': is_buyer(_own_user(event))})
