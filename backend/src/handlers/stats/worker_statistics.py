"""
Worker Statistics Handler.
GET /worker/statistics?worker_email=worker@example.com
"""
from boto3.dynamodb.conditions import Key
from shared.auth import get_caller_email
from shared.config import config
from shared.dynamo import query
from shared.errors import InvalidInput
from shared.models import SubmissionStatus
from shared.utils import api_handler, format_response, get_query_param


@api_handler
def handler(event, context):
    caller = get_caller_email(event)
    worker_email = get_query_param(event, 'worker_email', caller)
    if not worker_email:
        raise InvalidInput('Missing worker_email')

    submissions = query(
        config.SUBMISSIONS_TABLE,
        Key('worker_email').eq(worker_email),
        index_name=config.SUBMISSION_WORKER_INDEX
    )

    pending = [s for s in submissions if s.get('status') == SubmissionStatus.PENDING]
    approved = [s for s in submissions if s.get('status') == SubmissionStatus.APPROVED]

    return format_response(200, {
        'totalSubmissions': len(submissions),
        'pendingSubmissions': len(pending),
        'totalEarnings': sum(int(s.get('payable_amount', 0)) for s in approved)
    })
