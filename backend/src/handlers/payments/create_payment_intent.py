"""
Create Payment Intent Handler.
POST /api/create-payment-intent
"""
from shared.errors import InvalidInput
from shared.payments import PaymentError, create_payment_intent
from shared.utils import api_handler, format_response, parse_body, to_int


@api_handler
def handler(event, context):
    """
    Body: { "amount": 1000 }   # cents
    """
    amount = to_int(parse_body(event).get('amount'), 'amount')
    if amount <= 0:
        raise InvalidInput('Amount must be positive')

    try:
        client_secret = create_payment_intent(amount)
    except PaymentError as e:
        return format_response(500, {'error': str(e)})

    return format_response(200, {'clientSecret': client_secret})
