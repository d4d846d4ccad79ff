"""
Buyer Statistics Handler.
GET /buyer/statistics
"""
from boto3.dynamodb.conditions import Key
from shared.auth import get_caller_email
from shared.config import config
from shared.dynamo import query
from shared.ledger import reserved_coins
from shared.utils import api_handler, format_response


@api_handler
def handler(event, context):
    """
    Returns:
        totalTasks: tasks posted by the caller
        pendingWorkers: open slots across those tasks
        totalPayment: coins still reserved for those slots
    """
    tasks = query(
        config.TASKS_TABLE,
        Key('userEmail').eq(get_caller_email(event)),
        index_name=config.TASK_OWNER_INDEX
    )

    return format_response(200, {
        'totalTasks': len(tasks),
        'pendingWorkers': sum(int(task.get('requiredWorkers', 0)) for task in tasks),
        'totalPayment': sum(reserved_coins(task) for task in tasks)
    })
