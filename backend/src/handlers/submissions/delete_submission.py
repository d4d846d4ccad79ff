"""
Delete Submission Handler.
DELETE /submissions/{id}
"""
from shared import ledger
from shared.utils import api_handler, format_response, get_path_param
from handlers.submissions.access import authorized_submission


@api_handler
def handler(event, context):
    """The submitting worker, the task owner or an Admin."""
    submission_id = get_path_param(event, 'id')
    authorized_submission(event, submission_id, allow_worker=True)

    ledger.delete_submission(submission_id)
    return format_response(200, {'deletedCount': 1})
