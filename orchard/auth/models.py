"""
Auth models.

User carries the bcrypt hash and is never serialized to clients directly;
routes expose UserPublic instead.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class User(BaseModel):
    """Registered user (immutable once created)."""

    model_config = ConfigDict(frozen=True)

    id: str
    email: str
    password_hash: str

    def public(self) -> "UserPublic":
        return UserPublic(id=self.id, email=self.email)


class UserPublic(BaseModel):
    id: str
    email: str
