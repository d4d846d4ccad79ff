"""
Shared fixtures: in-memory DynamoDB tables via moto, seeded users,
and API Gateway proxy event builders.
"""
import json
import os
import sys

import pytest

# Configuration is read once at import, so it must be in place first
os.environ['AWS_REGION'] = 'us-east-1'
os.environ['AWS_DEFAULT_REGION'] = 'us-east-1'
os.environ['AWS_ACCESS_KEY_ID'] = 'testing'
os.environ['AWS_SECRET_ACCESS_KEY'] = 'testing'
os.environ['AWS_SECURITY_TOKEN'] = 'testing'
os.environ['AWS_SESSION_TOKEN'] = 'testing'
os.environ['USERS_TABLE'] = 'test-users'
os.environ['TASKS_TABLE'] = 'test-tasks'
os.environ['SUBMISSIONS_TABLE'] = 'test-submissions'
os.environ['WITHDRAWALS_TABLE'] = 'test-withdrawals'
os.environ['PAYMENTS_TABLE'] = 'test-payments'
os.environ['ACCESS_TOKEN_SECRET'] = 'test-secret-that-is-long-enough-for-hs256'
os.environ['STRIPE_SECRET_KEY'] = 'sk_test_123'

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from moto import mock_aws  # noqa: E402

# (table, partition key, [(index name, index key)])
TABLES = [
    ('test-users', 'email', []),
    ('test-tasks', 'taskId', [('OwnerIndex', 'userEmail')]),
    ('test-submissions', 'submissionId', [
        ('WorkerIndex', 'worker_email'),
        ('BuyerIndex', 'buyer_email'),
    ]),
    ('test-withdrawals', 'withdrawalId', [('WorkerIndex', 'worker_email')]),
    ('test-payments', 'paymentId', [('EmailIndex', 'email')]),
]


def _create_table(resource, name, key, indexes):
    attributes = {key} | {index_key for _, index_key in indexes}
    params = {
        'TableName': name,
        'KeySchema': [{'AttributeName': key, 'KeyType': 'HASH'}],
        'AttributeDefinitions': [
            {'AttributeName': attr, 'AttributeType': 'S'} for attr in sorted(attributes)
        ],
        'BillingMode': 'PAY_PER_REQUEST',
    }
    if indexes:
        params['GlobalSecondaryIndexes'] = [
            {
                'IndexName': index_name,
                'KeySchema': [{'AttributeName': index_key, 'KeyType': 'HASH'}],
                'Projection': {'ProjectionType': 'ALL'},
            }
            for index_name, index_key in indexes
        ]
    resource.create_table(**params)


@pytest.fixture
def dynamodb():
    """Fresh tables for every test; the shared resource is rebuilt inside the mock."""
    from shared import dynamo

    with mock_aws():
        dynamo._resource = None
        resource = dynamo.get_resource()
        for name, key, indexes in TABLES:
            _create_table(resource, name, key, indexes)
        yield resource
        dynamo._resource = None


@pytest.fixture
def add_user(dynamodb):
    """Insert a user record and return it."""
    def _add(email, role='Worker', coins=0, **extra):
        item = {'email': email, 'name': email.split('@')[0], 'role': role, 'coins': coins}
        item.update(extra)
        dynamodb.Table('test-users').put_item(Item=item)
        return item
    return _add


@pytest.fixture
def user_record(dynamodb):
    """Read a user record back (None if missing)."""
    def _get(email):
        return dynamodb.Table('test-users').get_item(Key={'email': email}).get('Item')
    return _get


@pytest.fixture
def coins_of(user_record):
    def _coins(email):
        return int(user_record(email)['coins'])
    return _coins


@pytest.fixture
def task_record(dynamodb):
    def _get(task_id):
        return dynamodb.Table('test-tasks').get_item(Key={'taskId': task_id}).get('Item')
    return _get


@pytest.fixture
def make_event():
    """
    Build an API Gateway proxy event. Passing `caller` adds a valid
    bearer token for that email.
    """
    from shared.auth import issue_token

    def _event(body=None, path=None, query=None, caller=None, headers=None):
        event_headers = dict(headers or {})
        if caller:
            event_headers['Authorization'] = f"Bearer {issue_token({'email': caller})}"
        return {
            'headers': event_headers,
            'body': json.dumps(body) if body is not None else None,
            'pathParameters': path,
            'queryStringParameters': query,
        }
    return _event


def body_of(response):
    return json.loads(response['body'])


@pytest.fixture
def parse():
    return body_of
