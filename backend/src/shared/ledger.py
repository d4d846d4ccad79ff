"""
Coin ledger and task lifecycle.

A task reserves requiredWorkers x payableAmount coins from its owner.
Every operation that changes a reservation or pays a worker writes the
balance change and the entity change in one DynamoDB transaction; the
balance rules are re-asserted as condition expressions so concurrent
requests cannot overdraw an account. When a transaction is cancelled the
affected items are re-read to pick the error returned to the caller.

Open slots are tracked on the task: a new submission takes a slot,
rejecting or deleting a pending submission gives it back. requiredWorkers
therefore always equals the number of unfilled slots, which is what a
deleted task refunds.
"""
import datetime
import uuid
from decimal import Decimal, ROUND_DOWN
from typing import Any, Dict, List, Optional

from boto3.dynamodb.conditions import Attr, Key

from .config import config
from .dynamo import get_item, put_item, query, transact_write
from .errors import InsufficientFunds, InvalidInput, NotFound, UpdateFailed, BelowMinimum
from .logging import logger
from .models import SubmissionStatus, WithdrawalStatus, EDITABLE_TASK_FIELDS
from .utils import to_int


def _now() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


def reserved_coins(task: dict) -> int:
    """Coins currently reserved from the task owner."""
    return int(task.get('requiredWorkers', 0)) * int(task.get('payableAmount', 0))


def pending_submissions(task: dict) -> List[Dict[str, Any]]:
    """Pending submissions holding a slot on the task."""
    return query(
        config.SUBMISSIONS_TABLE,
        Key('buyer_email').eq(task['userEmail']),
        index_name=config.SUBMISSION_BUYER_INDEX,
        filter_expression=(
            Attr('task_id').eq(task['taskId'])
            & Attr('status').eq(SubmissionStatus.PENDING)
        )
    )


def _non_negative(value: Any, field: str) -> int:
    number = to_int(value, field)
    if number < 0:
        raise InvalidInput(f'{field} must not be negative')
    return number


def _coins_update(email: str, amount: int, minimum: int = 0) -> Dict[str, Any]:
    """
    Transaction item adding `amount` (possibly negative) to a user's coins.
    The user must exist; with `minimum` the balance must be at least that much.
    """
    condition = 'attribute_exists(#email)'
    values = {':amount': amount, ':zero': 0}
    if minimum > 0:
        condition += ' AND coins >= :minimum'
        values[':minimum'] = minimum

    return {
        'Update': {
            'TableName': config.USERS_TABLE,
            'Key': {'email': email},
            'UpdateExpression': 'SET coins = if_not_exists(coins, :zero) + :amount',
            'ConditionExpression': condition,
            'ExpressionAttributeNames': {'#email': 'email'},
            'ExpressionAttributeValues': values
        }
    }


# =================================================================
# Tasks
# =================================================================

def create_task(owner_email: str, task: dict) -> dict:
    """
    Debit the owner the full reservation and persist the task.

    Raises:
        InvalidInput: requiredWorkers/payableAmount missing or negative
        InsufficientFunds: owner missing or balance below the reservation
    """
    required = _non_negative(task.get('requiredWorkers'), 'requiredWorkers')
    payable = _non_negative(task.get('payableAmount'), 'payableAmount')
    total = required * payable

    owner = get_item(config.USERS_TABLE, {'email': owner_email}) if owner_email else None
    if not owner or int(owner.get('coins', 0)) < total:
        raise InsufficientFunds()

    item = {
        field: task[field] for field in EDITABLE_TASK_FIELDS
        if task.get(field) is not None
    }
    item.update({
        'taskId': str(uuid.uuid4()),
        'userEmail': owner_email,
        'requiredWorkers': required,
        'payableAmount': payable,
        'totalPayableAmount': total,
        'isCompleted': bool(task.get('isCompleted', False)),
        'createdAt': _now()
    })

    committed = transact_write([
        _coins_update(owner_email, -total, minimum=total),
        {
            'Put': {
                'TableName': config.TASKS_TABLE,
                'Item': item,
                'ConditionExpression': 'attribute_not_exists(taskId)'
            }
        }
    ])
    if not committed:
        raise InsufficientFunds()

    logger.info(f"Task {item['taskId']} created by {owner_email}, reserved {total} coins")
    return item


def update_task(task_id: str, changes: dict) -> dict:
    """
    Apply task edits and settle the change in reservation with the owner.

    The owner is credited oldTotal - newTotal (debited when negative).
    An unchanged total is a valid no-op on the balance.

    payableAmount is frozen while submissions hold slots, since each
    pending submission is settled at the price it was taken at.

    Raises:
        NotFound: task missing
        InvalidInput: new requiredWorkers/payableAmount malformed, or a
            price change while submissions are pending
        InsufficientFunds: owner cannot cover an increased reservation
        UpdateFailed: owner record missing, or the task changed concurrently
    """
    task = get_item(config.TASKS_TABLE, {'taskId': task_id})
    if not task:
        raise NotFound('Task not found.')

    old_required = int(task.get('requiredWorkers', 0))
    old_payable = int(task.get('payableAmount', 0))

    new_required = old_required
    if changes.get('requiredWorkers') is not None:
        new_required = _non_negative(changes['requiredWorkers'], 'requiredWorkers')
    new_payable = old_payable
    if changes.get('payableAmount') is not None:
        new_payable = _non_negative(changes['payableAmount'], 'payableAmount')

    # A submission taken after this check changes requiredWorkers,
    # which the conditional write below rejects
    if new_payable != old_payable and pending_submissions(task):
        raise InvalidInput('payableAmount cannot change while submissions are pending')

    new_total = new_required * new_payable
    delta = old_required * old_payable - new_total

    updates = {
        field: changes[field] for field in EDITABLE_TASK_FIELDS
        if changes.get(field) is not None
    }
    updates.update({
        'requiredWorkers': new_required,
        'payableAmount': new_payable,
        'totalPayableAmount': new_total,
        'updatedAt': _now()
    })

    names = {'#taskId': 'taskId'}
    values = {':old_required': old_required, ':old_payable': old_payable}
    assignments = []
    for i, (field, value) in enumerate(updates.items()):
        names[f'#f{i}'] = field
        values[f':v{i}'] = value
        assignments.append(f'#f{i} = :v{i}')

    # The reservation being settled must be the one read above
    task_update = {
        'Update': {
            'TableName': config.TASKS_TABLE,
            'Key': {'taskId': task_id},
            'UpdateExpression': 'SET ' + ', '.join(assignments),
            'ConditionExpression': (
                'attribute_exists(#taskId) AND requiredWorkers = :old_required '
                'AND payableAmount = :old_payable'
            ),
            'ExpressionAttributeNames': names,
            'ExpressionAttributeValues': values
        }
    }

    owner_email = task.get('userEmail')
    items = [task_update]
    if delta:
        items.append(_coins_update(owner_email, delta, minimum=max(-delta, 0)))

    if not transact_write(items):
        current = get_item(config.TASKS_TABLE, {'taskId': task_id})
        if not current:
            raise NotFound('Task not found.')
        if (int(current.get('requiredWorkers', 0)) != old_required
                or int(current.get('payableAmount', 0)) != old_payable):
            raise UpdateFailed('Task changed during update, please retry.')
        if not get_item(config.USERS_TABLE, {'email': owner_email}):
            raise UpdateFailed('Failed to update user coins.')
        raise InsufficientFunds()

    logger.info(f"Task {task_id} updated, owner {owner_email} balance adjusted by {delta}")
    task.update(updates)
    return task


def delete_task(task_id: str) -> int:
    """
    Delete a task and refund the owner for its unfilled slots.

    Returns:
        Coins refunded (0 for completed tasks or a deleted owner)

    Raises:
        NotFound: task missing
        UpdateFailed: the task changed while being deleted
    """
    task = get_item(config.TASKS_TABLE, {'taskId': task_id})
    if not task:
        raise NotFound('Task not found.')

    items = [{
        'Delete': {
            'TableName': config.TASKS_TABLE,
            'Key': {'taskId': task_id},
            'ConditionExpression': 'attribute_exists(taskId) AND requiredWorkers = :required',
            'ExpressionAttributeValues': {':required': int(task.get('requiredWorkers', 0))}
        }
    }]

    owner_email = task.get('userEmail')
    refund = 0
    if not task.get('isCompleted'):
        refund = reserved_coins(task)
        if refund and get_item(config.USERS_TABLE, {'email': owner_email}):
            items.append(_coins_update(owner_email, refund))
        else:
            refund = 0

    if not transact_write(items):
        if not get_item(config.TASKS_TABLE, {'taskId': task_id}):
            raise NotFound('Task not found.')
        raise UpdateFailed('Failed to delete the task.')

    logger.info(f"Task {task_id} deleted, refunded {refund} coins to {owner_email}")
    return refund


# =================================================================
# Submissions
# =================================================================

def _release_slot(submission: dict) -> List[Dict[str, Any]]:
    """
    Transaction items returning a pending submission's slot.
    If the task is gone, the slot's reservation goes back to the buyer.
    """
    task_id = submission.get('task_id')
    task = get_item(config.TASKS_TABLE, {'taskId': task_id}) if task_id else None
    if task:
        return [{
            'Update': {
                'TableName': config.TASKS_TABLE,
                'Key': {'taskId': task_id},
                'UpdateExpression': 'SET requiredWorkers = requiredWorkers + :one',
                'ConditionExpression': 'attribute_exists(taskId)',
                'ExpressionAttributeValues': {':one': 1}
            }
        }]

    buyer_email = submission.get('buyer_email')
    amount = int(submission.get('payable_amount', 0))
    if amount and get_item(config.USERS_TABLE, {'email': buyer_email}):
        return [_coins_update(buyer_email, amount)]
    return []


def create_submission(submission: dict) -> dict:
    """
    Record a worker's submission and take one open slot on the task.

    Raises:
        InvalidInput: worker_email/task_id/status missing, or no open slot
        NotFound: task missing
    """
    worker_email = submission.get('worker_email')
    task_id = submission.get('task_id')
    status = submission.get('status')
    if not worker_email or not task_id or not status:
        raise InvalidInput('Invalid submission data')
    if status != SubmissionStatus.PENDING:
        raise InvalidInput('New submissions must be pending')

    task = get_item(config.TASKS_TABLE, {'taskId': task_id})
    if not task:
        raise NotFound('Task not found.')
    if task.get('isCompleted') or int(task.get('requiredWorkers', 0)) <= 0:
        raise InvalidInput('No open slots left on this task')

    item = {
        'submissionId': str(uuid.uuid4()),
        'task_id': task_id,
        'task_title': task.get('title', ''),
        'worker_email': worker_email,
        'worker_name': submission.get('worker_name', ''),
        'buyer_email': task.get('userEmail', ''),
        'payable_amount': int(task.get('payableAmount', 0)),
        'submission_details': submission.get('submission_details', ''),
        'status': SubmissionStatus.PENDING,
        'current_date': submission.get('current_date') or _now()
    }

    committed = transact_write([
        {
            'Put': {
                'TableName': config.SUBMISSIONS_TABLE,
                'Item': item,
                'ConditionExpression': 'attribute_not_exists(submissionId)'
            }
        },
        {
            'Update': {
                'TableName': config.TASKS_TABLE,
                'Key': {'taskId': task_id},
                'UpdateExpression': 'SET requiredWorkers = requiredWorkers - :one',
                'ConditionExpression': 'attribute_exists(taskId) AND requiredWorkers >= :one',
                'ExpressionAttributeValues': {':one': 1}
            }
        }
    ])
    if not committed:
        if not get_item(config.TASKS_TABLE, {'taskId': task_id}):
            raise NotFound('Task not found.')
        raise InvalidInput('No open slots left on this task')

    logger.info(f"Submission {item['submissionId']} by {worker_email} took a slot on task {task_id}")
    return item


def delete_submission(submission_id: str) -> None:
    """
    Delete a submission; a pending one gives its slot back.

    Raises:
        NotFound: submission missing
        UpdateFailed: the submission changed while being deleted
    """
    submission = get_item(config.SUBMISSIONS_TABLE, {'submissionId': submission_id})
    if not submission:
        raise NotFound('Submission not found.')

    status = submission.get('status')
    items = [{
        'Delete': {
            'TableName': config.SUBMISSIONS_TABLE,
            'Key': {'submissionId': submission_id},
            'ConditionExpression': '#status = :status',
            'ExpressionAttributeNames': {'#status': 'status'},
            'ExpressionAttributeValues': {':status': status}
        }
    }]
    if status == SubmissionStatus.PENDING:
        items.extend(_release_slot(submission))

    if not transact_write(items):
        if not get_item(config.SUBMISSIONS_TABLE, {'submissionId': submission_id}):
            raise NotFound('Submission not found.')
        raise UpdateFailed('Failed to delete the submission.')

    logger.info(f"Submission {submission_id} deleted")


def _transition_submission(submission_id: str, new_status: str,
                           worker_email: Optional[str] = None) -> Dict[str, Any]:
    condition = '#status = :pending'
    values = {':pending': SubmissionStatus.PENDING, ':new_status': new_status}
    if worker_email:
        condition += ' AND worker_email = :worker'
        values[':worker'] = worker_email

    return {
        'Update': {
            'TableName': config.SUBMISSIONS_TABLE,
            'Key': {'submissionId': submission_id},
            'UpdateExpression': 'SET #status = :new_status',
            'ConditionExpression': condition,
            'ExpressionAttributeNames': {'#status': 'status'},
            'ExpressionAttributeValues': values
        }
    }


def _pending_submission(submission_id: str) -> dict:
    submission = get_item(config.SUBMISSIONS_TABLE, {'submissionId': submission_id})
    if not submission or submission.get('status') != SubmissionStatus.PENDING:
        raise NotFound('Pending submission not found.')
    return submission


def approve_submission(submission_id: str, worker_email: str, payable_amount: Any) -> int:
    """
    Approve a pending submission and pay the worker the slot price
    recorded on the submission.

    Returns:
        Coins credited to the worker

    Raises:
        InvalidInput: a field is missing, or worker_email/payable_amount
            do not match the submission
        NotFound: no pending submission with this id, or worker unknown
    """
    if not submission_id or not worker_email or payable_amount is None:
        raise InvalidInput('Missing submissionId, worker_email or payable_amount')
    requested = _non_negative(payable_amount, 'payable_amount')

    submission = _pending_submission(submission_id)
    if submission.get('worker_email') != worker_email:
        raise InvalidInput('worker_email does not match the submission')
    amount = int(submission.get('payable_amount', 0))
    if requested != amount:
        raise InvalidInput('payable_amount does not match the submission')

    committed = transact_write([
        _transition_submission(submission_id, SubmissionStatus.APPROVED, worker_email),
        _coins_update(worker_email, amount)
    ])
    if not committed:
        _pending_submission(submission_id)
        raise NotFound('Worker not found.')

    logger.info(f"Submission {submission_id} approved, paid {amount} coins to {worker_email}")
    return amount


def reject_submission(submission_id: str, task_id: str) -> None:
    """
    Reject a pending submission and reopen its slot on the task.

    Raises:
        InvalidInput: a field is missing or task_id is not the submission's task
        NotFound: no pending submission with this id
    """
    if not submission_id or not task_id:
        raise InvalidInput('Missing submissionId or task_id')

    submission = _pending_submission(submission_id)
    if submission.get('task_id') != task_id:
        raise InvalidInput('task_id does not match the submission')

    items = [_transition_submission(submission_id, SubmissionStatus.REJECTED)]
    items.extend(_release_slot(submission))

    if not transact_write(items):
        _pending_submission(submission_id)
        raise UpdateFailed('Failed to reject the submission.')

    logger.info(f"Submission {submission_id} rejected, slot returned on task {task_id}")


# =================================================================
# Withdrawals
# =================================================================

def request_withdrawal(worker_email: str, withdrawal: dict) -> dict:
    """
    Reserve coins for a cash withdrawal.

    Coins move from the spendable balance to pendingCoins in the same
    transaction that records the pending withdrawal.

    Raises:
        InvalidInput: withdrawal_coin missing or malformed
        BelowMinimum: withdrawal_coin below MIN_WITHDRAWAL_COINS
        NotFound: worker unknown
        InsufficientFunds: balance below withdrawal_coin
    """
    coin = to_int(withdrawal.get('withdrawal_coin'), 'withdrawal_coin')
    if coin < config.MIN_WITHDRAWAL_COINS:
        raise BelowMinimum(f'Minimum withdrawal is {config.MIN_WITHDRAWAL_COINS} coins')

    user = get_item(config.USERS_TABLE, {'email': worker_email}) if worker_email else None
    if not user:
        raise NotFound('Worker not found.')
    if int(user.get('coins', 0)) < coin:
        raise InsufficientFunds()

    amount = withdrawal.get('withdrawal_amount')
    if amount is None:
        amount = Decimal(coin) / Decimal(config.COINS_PER_DOLLAR)
    try:
        amount = Decimal(str(amount)).quantize(Decimal('0.01'), rounding=ROUND_DOWN)
    except ArithmeticError:
        raise InvalidInput('Invalid withdrawal_amount')

    item = {
        'withdrawalId': str(uuid.uuid4()),
        'worker_email': worker_email,
        'worker_name': withdrawal.get('worker_name') or user.get('name', ''),
        'withdrawal_coin': coin,
        'withdrawal_amount': amount,
        'payment_system': withdrawal.get('payment_system', ''),
        'account_number': withdrawal.get('account_number', ''),
        'withdraw_date': withdrawal.get('withdraw_date') or _now(),
        'status': WithdrawalStatus.PENDING
    }

    committed = transact_write([
        {
            'Update': {
                'TableName': config.USERS_TABLE,
                'Key': {'email': worker_email},
                'UpdateExpression': (
                    'SET coins = coins - :coin, '
                    'pendingCoins = if_not_exists(pendingCoins, :zero) + :coin'
                ),
                'ConditionExpression': 'attribute_exists(#email) AND coins >= :coin',
                'ExpressionAttributeNames': {'#email': 'email'},
                'ExpressionAttributeValues': {':coin': coin, ':zero': 0}
            }
        },
        {
            'Put': {
                'TableName': config.WITHDRAWALS_TABLE,
                'Item': item,
                'ConditionExpression': 'attribute_not_exists(withdrawalId)'
            }
        }
    ])
    if not committed:
        if not get_item(config.USERS_TABLE, {'email': worker_email}):
            raise NotFound('Worker not found.')
        raise InsufficientFunds()

    logger.info(f"Withdrawal {item['withdrawalId']} requested by {worker_email}: {coin} coins reserved")
    return item


def approve_withdrawal(withdrawal_id: str) -> dict:
    """
    Mark a pending withdrawal paid out and release its reservation.
    Spendable coins were already debited at request time.

    Raises:
        NotFound: withdrawal or worker missing
        InvalidInput: withdrawal is not pending
        InsufficientFunds: worker's pendingCoins below the withdrawal amount
    """
    withdrawal = get_item(config.WITHDRAWALS_TABLE, {'withdrawalId': withdrawal_id})
    if not withdrawal:
        raise NotFound('Withdrawal not found.')
    if withdrawal.get('status') != WithdrawalStatus.PENDING:
        raise InvalidInput('Withdrawal already approved')

    coin = int(withdrawal.get('withdrawal_coin', 0))
    worker_email = withdrawal.get('worker_email')
    user = get_item(config.USERS_TABLE, {'email': worker_email}) if worker_email else None
    if not user:
        raise NotFound('Worker not found.')
    if int(user.get('pendingCoins', 0)) < coin:
        raise InsufficientFunds('Insufficient pending coins')

    approved_at = _now()
    committed = transact_write([
        {
            'Update': {
                'TableName': config.WITHDRAWALS_TABLE,
                'Key': {'withdrawalId': withdrawal_id},
                'UpdateExpression': 'SET #status = :approved, approvedAt = :ts',
                'ConditionExpression': '#status = :pending',
                'ExpressionAttributeNames': {'#status': 'status'},
                'ExpressionAttributeValues': {
                    ':approved': WithdrawalStatus.APPROVED,
                    ':pending': WithdrawalStatus.PENDING,
                    ':ts': approved_at
                }
            }
        },
        {
            'Update': {
                'TableName': config.USERS_TABLE,
                'Key': {'email': worker_email},
                'UpdateExpression': 'SET pendingCoins = pendingCoins - :coin',
                'ConditionExpression': 'attribute_exists(#email) AND pendingCoins >= :coin',
                'ExpressionAttributeNames': {'#email': 'email'},
                'ExpressionAttributeValues': {':coin': coin}
            }
        }
    ])
    if not committed:
        current = get_item(config.WITHDRAWALS_TABLE, {'withdrawalId': withdrawal_id})
        if current and current.get('status') != WithdrawalStatus.PENDING:
            raise InvalidInput('Withdrawal already approved')
        raise InsufficientFunds('Insufficient pending coins')

    logger.info(f"Withdrawal {withdrawal_id} approved, released {coin} pending coins of {worker_email}")
    withdrawal.update({'status': WithdrawalStatus.APPROVED, 'approvedAt': approved_at})
    return withdrawal


# =================================================================
# Payments
# =================================================================

def record_payment(email: str, payment: dict) -> dict:
    """
    Append a completed purchase to the payment history.

    The record is informational only: balances are never credited from
    client-reported payments.

    Raises:
        InvalidInput: price or coins malformed
    """
    try:
        price = Decimal(str(payment.get('price', 0)))
    except ArithmeticError:
        raise InvalidInput('Invalid price')
    if not price.is_finite() or price < 0:
        raise InvalidInput('Invalid price')

    coins = 0
    if payment.get('coins') is not None:
        coins = _non_negative(payment['coins'], 'coins')

    item = {
        'paymentId': str(uuid.uuid4()),
        'email': email,
        'price': price,
        'coins': coins,
        'transactionId': payment.get('transactionId', ''),
        'date': payment.get('date') or _now()
    }
    put_item(config.PAYMENTS_TABLE, item)

    logger.info(f"Payment {item['paymentId']} recorded for {email}")
    return item
