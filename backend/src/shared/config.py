"""
Configuration module for Lambda handlers.
Loads all environment variables needed by the marketplace.
"""
import os


class Config:
    """Centralized configuration from environment variables."""

    # AWS Region
    AWS_REGION = os.environ.get('AWS_REGION', 'us-east-1')

    # DynamoDB Tables
    USERS_TABLE = os.environ.get('USERS_TABLE', '')
    TASKS_TABLE = os.environ.get('TASKS_TABLE', '')
    SUBMISSIONS_TABLE = os.environ.get('SUBMISSIONS_TABLE', '')
    WITHDRAWALS_TABLE = os.environ.get('WITHDRAWALS_TABLE', '')
    PAYMENTS_TABLE = os.environ.get('PAYMENTS_TABLE', '')

    # Secondary indexes
    TASK_OWNER_INDEX = os.environ.get('TASK_OWNER_INDEX', 'OwnerIndex')
    SUBMISSION_WORKER_INDEX = os.environ.get('SUBMISSION_WORKER_INDEX', 'WorkerIndex')
    SUBMISSION_BUYER_INDEX = os.environ.get('SUBMISSION_BUYER_INDEX', 'BuyerIndex')
    WITHDRAWAL_WORKER_INDEX = os.environ.get('WITHDRAWAL_WORKER_INDEX', 'WorkerIndex')
    PAYMENT_EMAIL_INDEX = os.environ.get('PAYMENT_EMAIL_INDEX', 'EmailIndex')

    # Auth
    ACCESS_TOKEN_SECRET = os.environ.get('ACCESS_TOKEN_SECRET', '')
    TOKEN_TTL_SECONDS = int(os.environ.get('TOKEN_TTL_SECONDS', '3600'))

    # Coin economy
    MIN_WITHDRAWAL_COINS = int(os.environ.get('MIN_WITHDRAWAL_COINS', '200'))
    COINS_PER_DOLLAR = int(os.environ.get('COINS_PER_DOLLAR', '20'))
    TOP_WORKERS_LIMIT = int(os.environ.get('TOP_WORKERS_LIMIT', '6'))

    # Stripe
    STRIPE_SECRET_KEY = os.environ.get('STRIPE_SECRET_KEY', '')
    STRIPE_API_BASE = os.environ.get('STRIPE_API_BASE', 'https://api.stripe.com/v1')
    PAYMENT_CURRENCY = os.environ.get('PAYMENT_CURRENCY', 'usd')


config = Config()
