"""
Approved Submissions Handler.
GET /worker/approved-submissions?worker_email=worker@example.com
"""
from boto3.dynamodb.conditions import Key, Attr
from shared.auth import get_caller_email
from shared.config import config
from shared.dynamo import query
from shared.models import SubmissionStatus
from shared.utils import api_handler, format_response, get_query_param


@api_handler
def handler(event, context):
    caller = get_caller_email(event)
    worker_email = get_query_param(event, 'worker_email', caller)

    submissions = query(
        config.SUBMISSIONS_TABLE,
        Key('worker_email').eq(worker_email),
        index_name=config.SUBMISSION_WORKER_INDEX,
        filter_expression=Attr('status').eq(SubmissionStatus.APPROVED)
    )
    return format_response(200, submissions)
