"""
Reject Submission Handler.
POST /submissions/reject
"""
from shared import ledger
from shared.utils import api_handler, format_response, parse_body
from handlers.submissions.access import authorized_submission


@api_handler
def handler(event, context):
    """
    Body: { "submissionId": "...", "task_id": "..." }

    Task owner or Admin only.
    """
    body = parse_body(event)
    authorized_submission(event, body.get('submissionId'))

    ledger.reject_submission(body.get('submissionId'), body.get('task_id'))

    return format_response(200, {'message': 'Submission rejected successfully.'})
