"""
List Withdrawals Handler.
GET /withdrawals?status=pending          (Admin: review queue)
GET /withdrawals?email=worker@example.com (worker history)
"""
from boto3.dynamodb.conditions import Key, Attr
from shared.auth import get_caller_email, get_user, is_admin
from shared.config import config
from shared.dynamo import query, scan
from shared.errors import Forbidden
from shared.models import WithdrawalStatus
from shared.utils import api_handler, format_response, get_query_param


@api_handler
def handler(event, context):
    caller = get_caller_email(event)
    email = get_query_param(event, 'email')
    admin = is_admin(get_user(caller))

    if email:
        if email != caller and not admin:
            raise Forbidden()
        withdrawals = query(
            config.WITHDRAWALS_TABLE,
            Key('worker_email').eq(email),
            index_name=config.WITHDRAWAL_WORKER_INDEX
        )
    else:
        if not admin:
            raise Forbidden()
        status = get_query_param(event, 'status', WithdrawalStatus.PENDING)
        withdrawals = scan(config.WITHDRAWALS_TABLE, Attr('status').eq(status))

    withdrawals.sort(key=lambda w: w.get('withdraw_date', ''), reverse=True)
    return format_response(200, withdrawals)
