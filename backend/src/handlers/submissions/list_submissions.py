"""
List Worker Submissions Handler.
GET /submissions?worker_email=worker@example.com
"""
from boto3.dynamodb.conditions import Key
from shared.config import config
from shared.dynamo import query
from shared.errors import InvalidInput
from shared.utils import api_handler, format_response, get_query_param


@api_handler
def handler(event, context):
    worker_email = get_query_param(event, 'worker_email')
    if not worker_email:
        raise InvalidInput('Missing worker_email')

    submissions = query(
        config.SUBMISSIONS_TABLE,
        Key('worker_email').eq(worker_email),
        index_name=config.SUBMISSION_WORKER_INDEX
    )
    return format_response(200, submissions)
