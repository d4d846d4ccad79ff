"""
Stripe PaymentIntent creation over the Stripe REST API.
"""
import requests
from .config import config
from .logging import logger


class PaymentError(Exception):
    """Raised when the payment processor rejects or fails a request."""
    pass


def create_payment_intent(amount: int, currency: str = None) -> str:
    """
    Create a PaymentIntent and return its client secret.

    Args:
        amount: Amount in the smallest currency unit (cents)
        currency: ISO currency code, defaults to PAYMENT_CURRENCY

    Returns:
        The PaymentIntent client_secret for the browser to confirm
    """
    try:
        resp = requests.post(
            f"{config.STRIPE_API_BASE}/payment_intents",
            auth=(config.STRIPE_SECRET_KEY, ''),
            data={
                'amount': amount,
                'currency': currency or config.PAYMENT_CURRENCY
            },
            timeout=15
        )
    except requests.RequestException as e:
        raise PaymentError(f"Payment processor unreachable: {e}")

    try:
        data = resp.json()
    except ValueError:
        data = {}

    if resp.status_code != 200:
        message = data.get('error', {}).get('message') or f"Stripe returned {resp.status_code}"
        logger.error(f"PaymentIntent creation failed: {message}")
        raise PaymentError(message)

    logger.info(f"PaymentIntent {data.get('id')} created for {amount}")
    return data['client_secret']
