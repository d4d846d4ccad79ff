"""
Set User Coins Handler (Admin).
PATCH /users/{email}

Overwrites the balance outright; regular coin movements go through the
ledger endpoints instead.
"""
from botocore.exceptions import ClientError
from shared.auth import require_role
from shared.config import config
from shared.dynamo import get_table
from shared.errors import InvalidInput, NotFound
from shared.logging import logger
from shared.models import Role
from shared.utils import api_handler, format_response, get_path_param, parse_body, to_int


@api_handler
def handler(event, context):
    """
    Body: { "coins": 120 }
    """
    admin = require_role(event, Role.ADMIN)

    email = get_path_param(event, 'email')
    coins = to_int(parse_body(event).get('coins'), 'coins')
    if coins < 0:
        raise InvalidInput('coins must not be negative')

    try:
        get_table(config.USERS_TABLE).update_item(
            Key={'email': email},
            UpdateExpression='SET coins = :coins',
            ConditionExpression='attribute_exists(#email)',
            ExpressionAttributeNames={'#email': 'email'},
            ExpressionAttributeValues={':coins': coins}
        )
    except ClientError as e:
        if e.response['Error']['Code'] == 'ConditionalCheckFailedException':
            raise NotFound('User not found')
        raise

    logger.info(f"Coins of {email} set to {coins} by {admin['email']}")
    return format_response(200, {'message': 'User coins updated successfully'})
