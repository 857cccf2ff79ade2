"""
Authorization gate: pure ownership and authentication checks.
"""

from __future__ import annotations

from typing import Optional

from orchard.fruits.models import Fruit
from orchard.utils.exceptions import UnauthenticatedError


def can_mutate(requester_id: str, fruit: Fruit) -> bool:
    """Only the owner of a fruit may update or delete it."""
    return requester_id == fruit.owner_id


def require_authenticated(session_user_id: Optional[str], action: str = "do that") -> str:
    """Return the session user id, or raise UnauthenticatedError if there is none."""
    if not session_user_id:
        raise UnauthenticatedError(f"You need to be logged in to {action}")
    return session_user_id
