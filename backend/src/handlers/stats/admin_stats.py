"""
Admin Statistics Handler (Admin).
GET /admin/stats
"""
from decimal import Decimal
from shared.auth import require_role
from shared.config import config
from shared.dynamo import scan
from shared.models import Role
from shared.utils import api_handler, format_response


@api_handler
def handler(event, context):
    """
    Returns:
        totalWorkers, totalBuyers: user counts per role
        totalCoins: coins held across all users (spendable only)
        totalPayments: revenue from coin purchases, in dollars
    """
    require_role(event, Role.ADMIN)

    users = scan(config.USERS_TABLE)
    payments = scan(config.PAYMENTS_TABLE)

    return format_response(200, {
        'totalWorkers': sum(1 for user in users if user.get('role') == Role.WORKER),
        'totalBuyers': sum(1 for user in users if user.get('role') == Role.BUYER),
        'totalCoins': sum(int(user.get('coins', 0)) for user in users),
        'totalPayments': sum((Decimal(str(p.get('price', 0))) for p in payments), Decimal('0'))
    })
