"""
Delete User Handler (Admin).
DELETE /users/{email}
"""
from shared.auth import require_role
from shared.config import config
from shared.dynamo import get_table
from shared.models import Role
from shared.utils import api_handler, format_response, get_path_param


@api_handler
def handler(event, context):
    require_role(event, Role.ADMIN)

    response = get_table(config.USERS_TABLE).delete_item(
        Key={'email': get_path_param(event, 'email')},
        ReturnValues='ALL_OLD'
    )
    deleted = 1 if response.get('Attributes') else 0

    return format_response(200, {'deletedCount': deleted})
