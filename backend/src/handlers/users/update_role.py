"""
Update User Role Handler (Admin).
PUT /users/{email}
"""
from botocore.exceptions import ClientError
from shared.auth import require_role
from shared.config import config
from shared.dynamo import get_table
from shared.errors import InvalidInput, NotFound
from shared.models import Role
from shared.utils import api_handler, format_response, get_path_param, parse_body


@api_handler
def handler(event, context):
    """
    Body: { "role": "Worker" | "Buyer" | "Admin" }
    """
    require_role(event, Role.ADMIN)

    email = get_path_param(event, 'email')
    role = parse_body(event).get('role')
    if role not in Role.ALL:
        raise InvalidInput(f'Role must be one of {", ".join(Role.ALL)}')

    try:
        get_table(config.USERS_TABLE).update_item(
            Key={'email': email},
            UpdateExpression='SET #role = :role',
            ConditionExpression='attribute_exists(#email)',
            ExpressionAttributeNames={'#role': 'role', '#email': 'email'},
            ExpressionAttributeValues={':role': role}
        )
    except ClientError as e:
        if e.response['Error']['Code'] == 'ConditionalCheckFailedException':
            raise NotFound('User not found')
        raise

    return format_response(200, {'message': 'User role updated successfully', 'role': role})
