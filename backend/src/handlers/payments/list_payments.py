"""
Payment History Handler.
GET /payments/{email}
"""
from boto3.dynamodb.conditions import Key
from shared.auth import get_caller_email, get_user, is_admin
from shared.config import config
from shared.dynamo import query
from shared.errors import Forbidden
from shared.utils import api_handler, format_response, get_path_param


@api_handler
def handler(event, context):
    caller = get_caller_email(event)
    email = get_path_param(event, 'email')
    if email != caller and not is_admin(get_user(caller)):
        raise Forbidden()

    payments = query(
        config.PAYMENTS_TABLE,
        Key('email').eq(email),
        index_name=config.PAYMENT_EMAIL_INDEX
    )
    payments.sort(key=lambda p: p.get('date', ''), reverse=True)
    return format_response(200, payments)
