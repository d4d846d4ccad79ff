"""
List Users Handler (Admin).
GET /users
"""
from shared.auth import require_role
from shared.config import config
from shared.dynamo import scan
from shared.models import Role
from shared.utils import api_handler, format_response


@api_handler
def handler(event, context):
    require_role(event, Role.ADMIN)
    return format_response(200, scan(config.USERS_TABLE))
