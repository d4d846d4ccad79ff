"""
DynamoDB utility functions.

Values are passed as native Python types: both the tables and the
transaction client come from the boto3 resource, which serializes them.
"""
import boto3
from typing import List, Dict, Any, Optional
from botocore.exceptions import ClientError
from .config import config
from .logging import logger

_resource = None


def get_resource():
    """Return the DynamoDB resource, created once per container."""
    global _resource
    if _resource is None:
        _resource = boto3.resource('dynamodb', region_name=config.AWS_REGION)
    return _resource


def get_table(table_name: str):
    return get_resource().Table(table_name)


def get_item(table_name: str, key: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Get a single item from DynamoDB."""
    response = get_table(table_name).get_item(Key=key, ConsistentRead=True)
    return response.get('Item')


def put_item(table_name: str, item: Dict[str, Any]) -> None:
    get_table(table_name).put_item(Item=item)


def query(
    table_name: str,
    key_condition: Any,
    index_name: Optional[str] = None,
    filter_expression: Optional[Any] = None,
) -> List[Dict[str, Any]]:
    """
    Query a DynamoDB table or index, following pagination.

    Args:
        table_name: Name of the DynamoDB table
        key_condition: Key condition expression
        index_name: Optional GSI name
        filter_expression: Optional filter expression

    Returns:
        List of items matching the query
    """
    table = get_table(table_name)

    query_params = {'KeyConditionExpression': key_condition}
    if index_name:
        query_params['IndexName'] = index_name
    if filter_expression is not None:
        query_params['FilterExpression'] = filter_expression

    items = []
    while True:
        response = table.query(**query_params)
        items.extend(response.get('Items', []))
        last_key = response.get('LastEvaluatedKey')
        if not last_key:
            return items
        query_params['ExclusiveStartKey'] = last_key


def scan(table_name: str, filter_expression: Optional[Any] = None) -> List[Dict[str, Any]]:
    """Scan a whole table, following pagination."""
    table = get_table(table_name)

    scan_params = {}
    if filter_expression is not None:
        scan_params['FilterExpression'] = filter_expression

    items = []
    while True:
        response = table.scan(**scan_params)
        items.extend(response.get('Items', []))
        last_key = response.get('LastEvaluatedKey')
        if not last_key:
            return items
        scan_params['ExclusiveStartKey'] = last_key


def transact_write(transact_items: List[Dict[str, Any]]) -> bool:
    """
    Execute TransactWriteItems.

    Returns:
        True if committed, False if any condition check cancelled it.
        Other client errors propagate.
    """
    try:
        get_resource().meta.client.transact_write_items(TransactItems=transact_items)
        return True
    except ClientError as e:
        if e.response['Error']['Code'] == 'TransactionCanceledException':
            logger.info(f"Transaction cancelled: {e.response['Error'].get('Message', '')}")
            return False
        raise
