"""
Request Withdrawal Handler.
POST /withdrawals
"""
from shared import ledger
from shared.auth import get_caller_email
from shared.errors import Forbidden
from shared.utils import api_handler, format_response, parse_body


@api_handler
def handler(event, context):
    """
    Body: {
        "withdrawal_coin": 400, "withdrawal_amount": 20,
        "payment_system": "Bkash", "account_number": "...",
        "worker_email": "worker@example.com"
    }

    The coins leave the spendable balance immediately and stay reserved
    until an admin approves the payout.
    """
    caller = get_caller_email(event)
    body = parse_body(event)

    worker_email = body.get('worker_email') or caller
    if worker_email != caller:
        raise Forbidden()

    withdrawal = ledger.request_withdrawal(worker_email, body)

    return format_response(201, {
        'insertedId': withdrawal['withdrawalId'],
        'withdrawal': withdrawal
    })
