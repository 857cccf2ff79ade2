"""
Credential store: email/password users with bcrypt hashes.

Users live in memory for the lifetime of the process. Emails are matched
exactly (case-sensitive), and the store holds at most one user per email.
"""

from __future__ import annotations

import base64
import hashlib
import threading
from typing import Dict, List, Optional

import bcrypt

from orchard.auth.models import User
from orchard.core.ids import new_id
from orchard.utils.exceptions import EmailTakenError, InvalidCredentialsError, ValidationError
from orchard.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_BCRYPT_ROUNDS = 8
_DUMMY_PASSWORD = "orchard-dummy-password"


def _bcrypt_input(password: str) -> bytes:
    """
    sha256 + base64 the password before bcrypt.

    bcrypt reads at most 72 bytes (and recent releases reject more); the
    44-byte digest keeps every character of longer passwords significant.
    """
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def hash_password(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Hash a password with bcrypt."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_bcrypt_input(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash."""
    try:
        return bcrypt.checkpw(_bcrypt_input(password), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


class CredentialStore:
    """In-memory user registry with registration and authentication."""

    def __init__(self, bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS):
        self.bcrypt_rounds = bcrypt_rounds
        self._users: Dict[str, User] = {}
        self._ids_by_email: Dict[str, str] = {}
        self._lock = threading.Lock()
        self._dummy_hash = hash_password(_DUMMY_PASSWORD, bcrypt_rounds)

    def register(self, email: Optional[str], password: Optional[str]) -> User:
        """
        Create a new user.

        - email and password must both be non-empty strings.
        - email must be unique (exact match).
        - the password is stored only as a bcrypt hash.
        """
        if not _filled(email) or not _filled(password):
            raise ValidationError("You need to provide email and password to register")
        if email in self._ids_by_email:
            raise EmailTakenError()

        password_hash = hash_password(password, self.bcrypt_rounds)

        with self._lock:
            # Re-check: another registration may have won while we hashed
            if email in self._ids_by_email:
                raise EmailTakenError()
            user = User(id=new_id(self._users), email=email, password_hash=password_hash)
            self._users[user.id] = user
            self._ids_by_email[email] = user.id

        logger.info("Registered user", extra={"user_id": user.id})
        return user

    def authenticate(self, email: Optional[str], password: Optional[str]) -> User:
        """
        Return the user if the credentials are valid.

        Unknown email and wrong password raise the same InvalidCredentialsError.
        """
        if not _filled(email) or not _filled(password):
            raise ValidationError("You need to provide email and password to login")
        user = self.get_by_email(email)
        # Unknown emails still pay for one bcrypt check
        password_hash = user.password_hash if user else self._dummy_hash
        if not verify_password(password, password_hash) or user is None:
            logger.info("Rejected login attempt")
            raise InvalidCredentialsError()
        return user

    def add(self, user: User) -> User:
        """Insert a pre-built user (used for seeding)."""
        with self._lock:
            if user.email in self._ids_by_email:
                raise EmailTakenError()
            self._users[user.id] = user
            self._ids_by_email[user.email] = user.id
        return user

    def get_by_email(self, email: str) -> Optional[User]:
        user_id = self._ids_by_email.get(email)
        return self._users.get(user_id) if user_id else None

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    def list_users(self) -> List[User]:
        return list(self._users.values())


def _filled(value: object) -> bool:
    return isinstance(value, str) and value != ""
