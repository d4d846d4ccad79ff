"""
Tests for the task endpoints: auth gates, ownership and ledger wiring.
"""
import pytest

from handlers.tasks import create_task, update_task, delete_task, list_tasks, get_task


BUYER = 'buyer@example.com'


@pytest.fixture
def buyer(add_user):
    return add_user(BUYER, role='Buyer', coins=200, name='Bea Buyer')


def _create(make_event, parse, **fields):
    body = {'title': 'Review app', 'requiredWorkers': 5, 'payableAmount': 10, 'userEmail': BUYER}
    body.update(fields)
    response = create_task.handler(make_event(body=body, caller=BUYER), None)
    return response, parse(response)


class TestCreateTaskHandler:

    def test_requires_token(self, buyer, make_event, parse):
        response = create_task.handler(make_event(body={'requiredWorkers': 1, 'payableAmount': 1}), None)

        assert response['statusCode'] == 401
        assert parse(response)['message'] == 'unauthorized access'

    def test_created_and_charged(self, buyer, make_event, parse, coins_of):
        response, body = _create(make_event, parse)

        assert response['statusCode'] == 201
        assert body['insertedId']
        assert body['totalPayableAmount'] == 50
        assert coins_of(BUYER) == 150

    def test_insufficient_coins(self, buyer, make_event, parse, coins_of):
        response, body = _create(make_event, parse, requiredWorkers=11, payableAmount=20)

        assert response['statusCode'] == 400
        assert body['message'] == 'Insufficient coins'
        assert coins_of(BUYER) == 200

    def test_cannot_post_for_someone_else(self, buyer, add_user, make_event):
        add_user('other@example.com', role='Buyer', coins=500)

        response = create_task.handler(make_event(
            body={'requiredWorkers': 1, 'payableAmount': 1, 'userEmail': 'other@example.com'},
            caller=BUYER
        ), None)

        assert response['statusCode'] == 403


class TestUpdateTaskHandler:

    def test_owner_updates(self, buyer, make_event, parse, coins_of):
        _, created = _create(make_event, parse)

        response = update_task.handler(make_event(
            body={'requiredWorkers': 2},
            path={'id': created['insertedId']},
            caller=BUYER
        ), None)

        assert response['statusCode'] == 200
        assert parse(response)['success'] is True
        assert coins_of(BUYER) == 180

    def test_non_buyer_forbidden(self, buyer, add_user, make_event, parse):
        add_user('worker@example.com', role='Worker')
        _, created = _create(make_event, parse)

        response = update_task.handler(make_event(
            body={'requiredWorkers': 2},
            path={'id': created['insertedId']},
            caller='worker@example.com'
        ), None)

        assert response['statusCode'] == 403

    def test_other_buyer_forbidden(self, buyer, add_user, make_event, parse):
        add_user('other@example.com', role='Buyer')
        _, created = _create(make_event, parse)

        response = update_task.handler(make_event(
            body={'requiredWorkers': 2},
            path={'id': created['insertedId']},
            caller='other@example.com'
        ), None)

        assert response['statusCode'] == 403

    def test_missing_task(self, buyer, make_event, parse):
        response = update_task.handler(make_event(body={}, path={'id': 'nope'}, caller=BUYER), None)

        assert response['statusCode'] == 404
        assert parse(response)['message'] == 'Task not found.'


class TestDeleteTaskHandler:

    def test_owner_deletes_and_is_refunded(self, buyer, make_event, parse, coins_of):
        _, created = _create(make_event, parse)

        response = delete_task.handler(make_event(path={'id': created['insertedId']}, caller=BUYER), None)

        assert response['statusCode'] == 200
        assert parse(response)['refundedCoins'] == 50
        assert coins_of(BUYER) == 200

    def test_admin_may_delete(self, buyer, add_user, make_event, parse, coins_of):
        add_user('admin@example.com', role='Admin')
        _, created = _create(make_event, parse)

        response = delete_task.handler(make_event(
            path={'id': created['insertedId']}, caller='admin@example.com'
        ), None)

        assert response['statusCode'] == 200
        assert coins_of(BUYER) == 200

    def test_stranger_forbidden(self, buyer, add_user, make_event, parse):
        add_user('worker@example.com')
        _, created = _create(make_event, parse)

        response = delete_task.handler(make_event(
            path={'id': created['insertedId']}, caller='worker@example.com'
        ), None)

        assert response['statusCode'] == 403


class TestReadTasks:

    def test_list_joins_buyer_name(self, buyer, add_user, make_event, parse):
        add_user('other@example.com', role='Buyer', coins=100, name='Otto')
        _create(make_event, parse)
        create_task.handler(make_event(
            body={'title': 'Other', 'requiredWorkers': 1, 'payableAmount': 1},
            caller='other@example.com'
        ), None)

        everything = parse(list_tasks.handler(make_event(), None))
        mine = parse(list_tasks.handler(make_event(query={'email': BUYER}), None))

        assert len(everything) == 2
        assert len(mine) == 1
        assert mine[0]['Buyer_name'] == 'Bea Buyer'

    def test_detail(self, buyer, make_event, parse):
        _, created = _create(make_event, parse)

        response = get_task.handler(make_event(path={'id': created['insertedId']}), None)

        assert response['statusCode'] == 200
        assert parse(response)['Buyer_name'] == 'Bea Buyer'

    def test_detail_missing(self, dynamodb, make_event):
        response = get_task.handler(make_event(path={'id': 'nope'}), None)

        assert response['statusCode'] == 404
