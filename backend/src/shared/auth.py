"""
Authentication utilities: bearer JWT issuance/verification and role checks.

Roles are read from the stored user record, never from the token, so a
role change takes effect on the caller's next request.
"""
import time
from typing import Optional

import jwt

from .config import config
from .dynamo import get_item
from .errors import Unauthorized, Forbidden
from .models import Role
from .utils import get_header

ALGORITHM = 'HS256'


def issue_token(payload: dict) -> str:
    """Sign the user payload with the shared secret, valid for TOKEN_TTL_SECONDS."""
    claims = dict(payload)
    claims['exp'] = int(time.time()) + config.TOKEN_TTL_SECONDS
    return jwt.encode(claims, config.ACCESS_TOKEN_SECRET, algorithm=ALGORITHM)


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, config.ACCESS_TOKEN_SECRET, algorithms=[ALGORITHM])
    except jwt.PyJWTError:
        raise Unauthorized()


def get_claims(event: dict) -> dict:
    """
    Verify the Authorization header of an API Gateway event.

    Raises:
        Unauthorized: header missing, not a bearer token, or token invalid
    """
    header = get_header(event, 'Authorization')
    if not header:
        raise Unauthorized()

    parts = header.split(' ')
    if len(parts) != 2 or not parts[1]:
        raise Unauthorized()

    return decode_token(parts[1])


def get_caller_email(event: dict) -> str:
    """Email of the authenticated caller."""
    email = get_claims(event).get('email')
    if not email:
        raise Unauthorized()
    return email


def get_user(email: str) -> Optional[dict]:
    """Look up a user record by email."""
    if not email:
        return None
    return get_item(config.USERS_TABLE, {'email': email})


def is_admin(user: Optional[dict]) -> bool:
    """Check if the user record has the Admin role."""
    return bool(user) and user.get('role') == Role.ADMIN


def is_buyer(user: Optional[dict]) -> bool:
    """Check if the user record has the Buyer role."""
    return bool(user) and user.get('role') == Role.BUYER


def is_worker(user: Optional[dict]) -> bool:
    """Check if the user record has the Worker role."""
    return bool(user) and user.get('role') == Role.WORKER


def require_role(event: dict, *roles: str) -> dict:
    """
    Authenticate the caller and require one of the given roles.

    Returns:
        The caller's user record
    """
    email = get_caller_email(event)
    user = get_user(email)
    if not user or user.get('role') not in roles:
        raise Forbidden()
    return user
