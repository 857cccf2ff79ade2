"""
Demo data matching the sample records the server has always shipped with.

Seed only into empty stores, in a safe, idempotent way.
"""

from __future__ import annotations

from orchard.auth.models import User
from orchard.auth.service import CredentialStore, hash_password
from orchard.fruits.models import Fruit
from orchard.stores.fruits import FruitStore
from orchard.utils.logger import get_logger

logger = get_logger(__name__)

DEMO_USER_ID = "fkj"
DEMO_EMAIL = "user@email.com"
DEMO_PASSWORD = "123"

DEMO_FRUITS = (
    {"id": "a1q", "name": "mango", "color": "yellow", "emoji": "🥭"},
    {"id": "w4f", "name": "grape", "color": "purple", "emoji": "🍇"},
)


def seed_demo_data(users: CredentialStore, fruits: FruitStore) -> bool:
    """Load the demo user and fruits. Returns False if data already exists."""
    if users.list_users() or fruits.list():
        return False
    users.add(
        User(
            id=DEMO_USER_ID,
            email=DEMO_EMAIL,
            password_hash=hash_password(DEMO_PASSWORD, users.bcrypt_rounds),
        )
    )
    for item in DEMO_FRUITS:
        fruits.create(Fruit(owner_id=DEMO_USER_ID, **item))
    logger.info("Seeded demo user and %d fruits", len(DEMO_FRUITS))
    return True
