"""
Caller checks for acting on a single submission.
"""
from shared.auth import get_caller_email, get_user, is_admin
from shared.config import config
from shared.dynamo import get_item
from shared.errors import Forbidden, InvalidInput, NotFound


def authorized_submission(event: dict, submission_id: str, allow_worker: bool = False) -> dict:
    """
    Load a submission the caller may act on.

    The buyer who owns the task and Admins always qualify; the submitting
    worker only when `allow_worker` is set.

    Raises:
        Unauthorized: no valid token
        InvalidInput: submission_id missing
        NotFound: no such submission
        Forbidden: caller is not allowed to act on it
    """
    caller = get_caller_email(event)
    if not submission_id:
        raise InvalidInput('Missing submissionId')

    submission = get_item(config.SUBMISSIONS_TABLE, {'submissionId': submission_id})
    if not submission:
        raise NotFound('Submission not found.')

    allowed = {submission.get('buyer_email')}
    if allow_worker:
        allowed.add(submission.get('worker_email'))
    if caller not in allowed and not is_admin(get_user(caller)):
        raise Forbidden()
    return submission
