"""
Get Task Handler.
GET /tasks/{id}
"""
from shared.config import config
from shared.dynamo import get_item
from shared.errors import NotFound
from shared.utils import api_handler, format_response, get_path_param
from handlers.tasks.owners import with_buyer_names


@api_handler
def handler(event, context):
    task = get_item(config.TASKS_TABLE, {'taskId': get_path_param(event, 'id')})
    if not task:
        raise NotFound('Task not found.')

    return format_response(200, with_buyer_names([task])[0])
