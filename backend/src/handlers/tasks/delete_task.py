"""
Delete Task Handler.
DELETE /tasks/{id}
"""
from shared import ledger
from shared.auth import get_caller_email, get_user, is_admin
from shared.config import config
from shared.dynamo import get_item
from shared.errors import Forbidden, NotFound
from shared.utils import api_handler, format_response, get_path_param


@api_handler
def handler(event, context):
    """Owner or Admin only. Unfilled slots of an incomplete task are refunded."""
    caller = get_caller_email(event)
    task_id = get_path_param(event, 'id')

    task = get_item(config.TASKS_TABLE, {'taskId': task_id})
    if not task:
        raise NotFound('Task not found.')
    if task.get('userEmail') != caller and not is_admin(get_user(caller)):
        raise Forbidden()

    refund = ledger.delete_task(task_id)

    return format_response(200, {
        'success': True,
        'message': 'Task deleted successfully.',
        'refundedCoins': refund
    })
