"""
Tests for the withdrawal endpoints.
"""
import pytest

from handlers.withdrawals import approve_withdrawal, list_withdrawals, request_withdrawal

WORKER = 'worker@example.com'
ADMIN = 'admin@example.com'


@pytest.fixture
def people(add_user):
    add_user(WORKER, role='Worker', coins=600)
    add_user(ADMIN, role='Admin')


def _request(make_event, coins, caller=WORKER, **extra):
    body = {'withdrawal_coin': coins, 'payment_system': 'Stripe', 'account_number': '4242'}
    body.update(extra)
    return request_withdrawal.handler(make_event(body=body, caller=caller), None)


class TestRequestWithdrawal:

    def test_below_minimum(self, people, make_event, parse, coins_of):
        response = _request(make_event, 150)

        assert response['statusCode'] == 400
        assert parse(response)['message'] == 'Minimum withdrawal is 200 coins'
        assert coins_of(WORKER) == 600

    def test_insufficient(self, people, make_event, parse):
        response = _request(make_event, 601)

        assert response['statusCode'] == 400
        assert parse(response)['message'] == 'Insufficient coins'

    def test_created(self, people, make_event, parse, user_record):
        response = _request(make_event, 400, withdrawal_amount=20)

        assert response['statusCode'] == 201
        withdrawal = parse(response)['withdrawal']
        assert withdrawal['status'] == 'pending'
        assert withdrawal['withdrawal_amount'] == 20
        assert user_record(WORKER)['coins'] == 200
        assert user_record(WORKER)['pendingCoins'] == 400

    def test_cannot_withdraw_for_someone_else(self, people, make_event):
        response = _request(make_event, 200, caller=ADMIN, worker_email=WORKER)

        assert response['statusCode'] == 403


class TestApproveWithdrawal:

    def test_admin_approves(self, people, make_event, parse, user_record):
        withdrawal_id = parse(_request(make_event, 300))['insertedId']

        response = approve_withdrawal.handler(make_event(path={'id': withdrawal_id}, caller=ADMIN), None)

        assert response['statusCode'] == 200
        assert parse(response)['withdrawal']['status'] == 'approved'
        assert user_record(WORKER)['coins'] == 300
        assert user_record(WORKER)['pendingCoins'] == 0

    def test_worker_cannot_approve(self, people, make_event, parse):
        withdrawal_id = parse(_request(make_event, 300))['insertedId']

        response = approve_withdrawal.handler(make_event(path={'id': withdrawal_id}, caller=WORKER), None)

        assert response['statusCode'] == 403

    def test_missing(self, people, make_event):
        response = approve_withdrawal.handler(make_event(path={'id': 'nope'}, caller=ADMIN), None)

        assert response['statusCode'] == 404


class TestListWithdrawals:

    def test_admin_queue(self, people, make_event, parse):
        first = parse(_request(make_event, 200))['insertedId']
        _request(make_event, 250)
        approve_withdrawal.handler(make_event(path={'id': first}, caller=ADMIN), None)

        pending = parse(list_withdrawals.handler(make_event(caller=ADMIN), None))
        approved = parse(list_withdrawals.handler(make_event(query={'status': 'approved'}, caller=ADMIN), None))

        assert [w['withdrawal_coin'] for w in pending] == [250]
        assert [w['withdrawalId'] for w in approved] == [first]

    def test_queue_is_admin_only(self, people, make_event):
        response = list_withdrawals.handler(make_event(caller=WORKER), None)

        assert response['statusCode'] == 403

    def test_own_history(self, people, make_event, parse):
        _request(make_event, 200)

        history = parse(list_withdrawals.handler(make_event(query={'email': WORKER}, caller=WORKER), None))

        assert len(history) == 1

    def test_foreign_history_forbidden(self, people, add_user, make_event):
        add_user('other@example.com')

        response = list_withdrawals.handler(make_event(
            query={'email': WORKER}, caller='other@example.com'
        ), None)

        assert response['statusCode'] == 403
