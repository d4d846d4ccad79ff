"""
List Tasks Handler.
GET /tasks?email=buyer@example.com
"""
from boto3.dynamodb.conditions import Key
from shared.config import config
from shared.dynamo import query, scan
from shared.utils import api_handler, format_response, get_query_param
from handlers.tasks.owners import with_buyer_names


@api_handler
def handler(event, context):
    """All tasks, or only one buyer's when `email` is given."""
    email = get_query_param(event, 'email')

    if email:
        tasks = query(
            config.TASKS_TABLE,
            Key('userEmail').eq(email),
            index_name=config.TASK_OWNER_INDEX
        )
    else:
        tasks = scan(config.TASKS_TABLE)

    tasks.sort(key=lambda task: task.get('createdAt', ''), reverse=True)
    return format_response(200, with_buyer_names(tasks))
