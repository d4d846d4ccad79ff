"""
Top Workers Handler.
GET /topWorkers
"""
from boto3.dynamodb.conditions import Attr
from shared.config import config
from shared.dynamo import scan
from shared.models import Role
from shared.utils import api_handler, format_response


@api_handler
def handler(event, context):
    """Workers with the highest coin balances, richest first."""
    workers = scan(config.USERS_TABLE, Attr('role').eq(Role.WORKER))
    workers.sort(key=lambda user: user.get('coins', 0), reverse=True)

    return format_response(200, workers[:config.TOP_WORKERS_LIMIT])
