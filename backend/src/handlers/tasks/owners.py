"""
Join tasks with their owner's display name.
"""
from typing import Dict, List
from shared.auth import get_user


def with_buyer_names(tasks: List[dict]) -> List[dict]:
    """Add `Buyer_name` to each task from the owning user's record."""
    names: Dict[str, str] = {}
    for task in tasks:
        email = task.get('userEmail')
        if email not in names:
            owner = get_user(email)
            names[email] = owner.get('name') if owner else None
        task['Buyer_name'] = names[email]
    return tasks
