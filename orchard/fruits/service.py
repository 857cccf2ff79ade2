"""
Fruit service: CRUD over the fruit store with session and ownership checks.

Reads are public. Every mutation runs the same short-circuiting sequence:

1. resolve the session and require a user      -> UnauthenticatedError (401)
2. require name, color and emoji (create/update) -> ValidationError (400)
3. look up the target fruit (update/delete)     -> NotFoundError (404)
4. require the requester to own it (update/delete) -> ForbiddenError (403)
5. mutate the store
"""

from __future__ import annotations

import threading
from typing import Any, Dict, List, Mapping, Optional

from orchard.auth.gate import can_mutate, require_authenticated
from orchard.auth.sessions import SessionManager
from orchard.core.ids import new_id
from orchard.fruits.models import FRUIT_FIELDS, Fruit
from orchard.stores.fruits import FruitStore
from orchard.utils.exceptions import ForbiddenError, NotFoundError, ValidationError
from orchard.utils.logger import get_logger

logger = get_logger(__name__)

NOT_FOUND_MESSAGE = "Sorry, fruit not found"
NOT_OWNER_MESSAGE = "You are not the owner of this fruit"


class FruitService:
    def __init__(self, store: FruitStore, sessions: SessionManager):
        self.store = store
        self.sessions = sessions
        # Holds lookup -> ownership check -> mutation together
        self._lock = threading.Lock()

    # Reads

    def list_fruits(self) -> List[Fruit]:
        return self.store.list()

    def get_fruit(self, fruit_id: str) -> Fruit:
        fruit = self.store.get(fruit_id)
        if fruit is None:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return fruit

    # Mutations

    def create_fruit(self, token: Optional[str], payload: Mapping[str, Any]) -> Fruit:
        user_id = require_authenticated(self.sessions.resolve(token), "create a fruit")
        fields = _required_fields(payload, "create")
        with self._lock:
            fruit = Fruit(id=new_id(self.store), owner_id=user_id, **fields)
            self.store.create(fruit)
        logger.info("Fruit created", extra={"user_id": user_id, "fruit_id": fruit.id})
        return fruit

    def update_fruit(self, token: Optional[str], fruit_id: str, payload: Mapping[str, Any]) -> Fruit:
        user_id = require_authenticated(self.sessions.resolve(token), "update a fruit")
        fields = _required_fields(payload, "update")
        with self._lock:
            self._owned_fruit(user_id, fruit_id)
            fruit = Fruit(id=fruit_id, owner_id=user_id, **fields)
            self.store.update(fruit_id, fruit)
        logger.info("Fruit updated", extra={"user_id": user_id, "fruit_id": fruit_id})
        return fruit

    def delete_fruit(self, token: Optional[str], fruit_id: str) -> None:
        user_id = require_authenticated(self.sessions.resolve(token), "delete a fruit")
        with self._lock:
            self._owned_fruit(user_id, fruit_id)
            self.store.delete(fruit_id)
        logger.info("Fruit deleted", extra={"user_id": user_id, "fruit_id": fruit_id})

    def _owned_fruit(self, user_id: str, fruit_id: str) -> Fruit:
        fruit = self.get_fruit(fruit_id)
        if not can_mutate(user_id, fruit):
            logger.warning(
                "Ownership check failed", extra={"user_id": user_id, "fruit_id": fruit_id}
            )
            raise ForbiddenError(NOT_OWNER_MESSAGE)
        return fruit


def _required_fields(payload: Mapping[str, Any], action: str) -> Dict[str, str]:
    values = {name: payload.get(name) for name in FRUIT_FIELDS}
    if not all(isinstance(v, str) and v for v in values.values()):
        raise ValidationError(f"Provide name, color and emoji to {action} a fruit")
    return values
