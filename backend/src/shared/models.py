"""
Data models and status constants for the marketplace.
Submission lifecycle: pending → approved | rejected
Withdrawal lifecycle: pending → approved
"""


class Role:
    """User roles."""
    WORKER = 'Worker'
    BUYER = 'Buyer'
    ADMIN = 'Admin'

    ALL = (WORKER, BUYER, ADMIN)


class SubmissionStatus:
    """Submission review statuses."""
    PENDING = 'pending'
    APPROVED = 'approved'
    REJECTED = 'rejected'


class WithdrawalStatus:
    """Withdrawal request statuses."""
    PENDING = 'pending'
    APPROVED = 'approved'


# Task fields a buyer may change after posting
EDITABLE_TASK_FIELDS = (
    'title',
    'detail',
    'submissionInfo',
    'imageUrl',
    'completionDate',
    'requiredWorkers',
    'payableAmount',
    'isCompleted',
)
