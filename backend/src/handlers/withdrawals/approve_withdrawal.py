"""
Approve Withdrawal Handler (Admin).
PUT /withdrawals/{id}
"""
from shared import ledger
from shared.auth import require_role
from shared.models import Role
from shared.utils import api_handler, format_response, get_path_param


@api_handler
def handler(event, context):
    require_role(event, Role.ADMIN)

    withdrawal = ledger.approve_withdrawal(get_path_param(event, 'id'))

    return format_response(200, {
        'message': 'Withdrawal approved successfully.',
        'withdrawal': withdrawal
    })
