"""
Record Payment Handler.
POST /payments
"""
from shared import ledger
from shared.auth import get_caller_email
from shared.errors import Forbidden
from shared.utils import api_handler, format_response, parse_body


@api_handler
def handler(event, context):
    """
    Body: { "email": "...", "price": 10, "coins": 100, "transactionId": "pi_...", "date": "..." }

    The record is history only; no coins are credited from it.
    """
    caller = get_caller_email(event)
    body = parse_body(event)

    email = body.get('email') or caller
    if email != caller:
        raise Forbidden()

    payment = ledger.record_payment(email, body)

    return format_response(201, {'insertedId': payment['paymentId'], 'payment': payment})
