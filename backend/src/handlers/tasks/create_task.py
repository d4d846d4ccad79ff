"""
Create Task Handler.
POST /tasks
"""
from shared import ledger
from shared.auth import get_caller_email
from shared.errors import Forbidden
from shared.utils import api_handler, format_response, parse_body


@api_handler
def handler(event, context):
    """
    Body: {
        "title": "...", "detail": "...", "submissionInfo": "...",
        "requiredWorkers": 5, "payableAmount": 10,
        "completionDate": "2025-01-31", "imageUrl": "...",
        "userEmail": "buyer@example.com"
    }

    The buyer is charged requiredWorkers x payableAmount up front;
    any client-side total is ignored.
    """
    caller = get_caller_email(event)
    body = parse_body(event)

    owner_email = body.get('userEmail') or caller
    if owner_email != caller:
        raise Forbidden()

    task = ledger.create_task(owner_email, body)

    return format_response(201, {
        'insertedId': task['taskId'],
        'totalPayableAmount': task['totalPayableAmount'],
        'task': task
    })
