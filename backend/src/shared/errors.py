"""
Error taxonomy for API handlers.
Every error carries the HTTP status it is surfaced with.
"""


class ApiError(Exception):
    """Base class for errors returned to the caller."""
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class Unauthorized(ApiError):
    """Missing, malformed or expired bearer token."""
    status_code = 401

    def __init__(self, message='unauthorized access'):
        super().__init__(message)


class Forbidden(ApiError):
    """Caller is authenticated but lacks the required role or ownership."""
    status_code = 403

    def __init__(self, message='forbidden access'):
        super().__init__(message)


class NotFound(ApiError):
    """User, task, submission or withdrawal does not exist."""
    status_code = 404


class InvalidInput(ApiError):
    """Required fields missing or malformed."""
    status_code = 400


class InsufficientFunds(ApiError):
    """Balance below the amount the operation needs."""
    status_code = 400

    def __init__(self, message='Insufficient coins'):
        super().__init__(message)


class BelowMinimum(ApiError):
    """Withdrawal request below the minimum coin amount."""
    status_code = 400


class UpdateFailed(ApiError):
    """Storage applied no change where one was expected."""
    status_code = 400
