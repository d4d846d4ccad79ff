"""
Submit Work Handler.
POST /submissions
"""
from shared import ledger
from shared.utils import api_handler, format_response, parse_body


@api_handler
def handler(event, context):
    """
    Body: {
        "task_id": "...", "worker_email": "...", "worker_name": "...",
        "submission_details": "...", "status": "pending"
    }

    Takes one open slot on the task. Buyer, price and title are copied
    from the task rather than trusted from the client.
    """
    submission = ledger.create_submission(parse_body(event))

    return format_response(201, {
        'insertedId': submission['submissionId'],
        'submission': submission
    })
