"""
Health Check Handler.
GET /
"""
from shared.utils import format_response


def handler(event, context):
    return format_response(200, {'message': 'Earnly is running'})
