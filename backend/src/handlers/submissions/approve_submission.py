"""
Approve Submission Handler.
POST /submissions/approve
"""
from shared import ledger
from shared.utils import api_handler, format_response, parse_body
from handlers.submissions.access import authorized_submission


@api_handler
def handler(event, context):
    """
    Body: { "submissionId": "...", "worker_email": "...", "payable_amount": 10 }

    Task owner or Admin only. The worker is paid the amount recorded on
    the submission; a different payable_amount is refused.
    """
    body = parse_body(event)
    authorized_submission(event, body.get('submissionId'))

    ledger.approve_submission(
        body.get('submissionId'),
        body.get('worker_email'),
        body.get('payable_amount')
    )

    return format_response(200, {'message': 'Submission approved successfully.'})
