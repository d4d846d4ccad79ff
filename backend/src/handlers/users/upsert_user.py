"""
Register User Handler.
POST /users
"""
import datetime
from shared.config import config
from shared.dynamo import get_table
from shared.errors import InvalidInput
from shared.models import Role
from shared.utils import api_handler, format_response, parse_body, to_int


@api_handler
def handler(event, context):
    """
    Body: { "name": "...", "email": "...", "image": "...", "role": "Worker", "coins": 10 }

    Upserts by email on every login. Name and image follow the identity
    provider; role, coins and the registration date are only written when
    the user has none yet, so a returning login never resets a balance.
    """
    body = parse_body(event)
    email = body.get('email')
    if not email:
        raise InvalidInput('Missing email')

    role = body.get('role') or ''
    if role and role not in Role.ALL:
        raise InvalidInput(f'Unknown role: {role}')

    coins = to_int(body['coins'], 'coins') if body.get('coins') is not None else 0
    if coins < 0:
        raise InvalidInput('coins must not be negative')

    assignments = [
        '#name = :name',
        '#image = :image',
        'coins = if_not_exists(coins, :coins)',
        '#timestamp = if_not_exists(#timestamp, :ts)'
    ]
    names = {'#name': 'name', '#image': 'image', '#timestamp': 'timestamp'}
    values = {
        ':name': body.get('name') or 'Anonymous',
        ':image': body.get('image') or '',
        ':coins': coins,
        ':ts': datetime.date.today().isoformat()
    }
    if role:
        assignments.append('#role = if_not_exists(#role, :role)')
        names['#role'] = 'role'
        values[':role'] = role

    response = get_table(config.USERS_TABLE).update_item(
        Key={'email': email},
        UpdateExpression='SET ' + ', '.join(assignments),
        ExpressionAttributeNames=names,
        ExpressionAttributeValues=values,
        ReturnValues='ALL_NEW'
    )

    return format_response(200, response.get('Attributes', {}))
