"""
Update Task Handler (Buyer).
PUT /tasks/{id}
"""
from shared import ledger
from shared.auth import require_role
from shared.config import config
from shared.dynamo import get_item
from shared.errors import Forbidden, NotFound
from shared.models import Role
from shared.utils import api_handler, format_response, get_path_param, parse_body


@api_handler
def handler(event, context):
    """
    Body: any of title, detail, submissionInfo, imageUrl, completionDate,
    requiredWorkers, payableAmount, isCompleted.

    The owner's balance absorbs the difference between the old and the
    new reservation.
    """
    buyer = require_role(event, Role.BUYER)
    task_id = get_path_param(event, 'id')

    task = get_item(config.TASKS_TABLE, {'taskId': task_id})
    if not task:
        raise NotFound('Task not found.')
    if task.get('userEmail') != buyer['email']:
        raise Forbidden()

    updated = ledger.update_task(task_id, parse_body(event))

    return format_response(200, {
        'success': True,
        'message': 'Task updated successfully.',
        'task': updated
    })
