"""
Buyer Review Queue Handler.
GET /buyer/submissions
"""
from boto3.dynamodb.conditions import Key, Attr
from shared.auth import get_caller_email
from shared.config import config
from shared.dynamo import query
from shared.models import SubmissionStatus
from shared.utils import api_handler, format_response


@api_handler
def handler(event, context):
    """Pending submissions on the caller's tasks."""
    buyer_email = get_caller_email(event)

    submissions = query(
        config.SUBMISSIONS_TABLE,
        Key('buyer_email').eq(buyer_email),
        index_name=config.SUBMISSION_BUYER_INDEX,
        filter_expression=Attr('status').eq(SubmissionStatus.PENDING)
    )
    return format_response(200, submissions)
