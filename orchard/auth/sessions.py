"""
Signed, client-held sessions.

We sign the session payload using itsdangerous (HMAC) so:
- The cookie can't be forged/tampered
- The cookie expires a fixed time after issuance (max_age)
- Keys can be rotated: the newest key signs, every configured key verifies

Nothing is stored server-side except the ids of sessions that were logged
out before their natural expiry.
"""

from __future__ import annotations

import threading
import time
from typing import Any, Callable, Dict, Iterable, Optional

from itsdangerous import BadData, TimestampSigner, URLSafeTimedSerializer

from orchard.core.ids import new_id
from orchard.utils.logger import get_logger

logger = get_logger(__name__)

SESSION_SALT = "orchard-session"
DEFAULT_MAX_AGE_SECONDS = 10 * 60


class _ClockedSigner(TimestampSigner):
    """TimestampSigner that reads time from an injectable clock."""

    def __init__(self, *args, clock: Callable[[], float] = time.time, **kwargs):
        super().__init__(*args, **kwargs)
        self._clock = clock

    def get_timestamp(self) -> int:
        return int(self._clock())


class SessionManager:
    """Issues, resolves and revokes session tokens."""

    def __init__(
        self,
        secret_keys: Iterable[str],
        max_age_seconds: int = DEFAULT_MAX_AGE_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        # itsdangerous signs with the last key and verifies with all of them
        keys = list(secret_keys)
        if not keys:
            raise ValueError("SessionManager needs at least one secret key")
        self.max_age_seconds = max_age_seconds
        self._clock = clock
        self._serializer = URLSafeTimedSerializer(
            secret_key=keys,
            salt=SESSION_SALT,
            signer=_ClockedSigner,
            signer_kwargs={"clock": clock},
        )
        # sid -> moment from which the token is dead anyway
        self._revoked: Dict[str, float] = {}
        self._lock = threading.Lock()

    def issue(self, user_id: str) -> str:
        """Create a new signed session token for user_id."""
        payload = {"uid": user_id, "sid": new_id(), "iat": self._clock()}
        return self._serializer.dumps(payload)

    def resolve(self, token: Optional[str]) -> Optional[str]:
        """
        Return the user id behind a token, or None.

        Missing, malformed, tampered, expired and revoked tokens all
        resolve to None; this never raises for bad input.
        """
        payload = self._load(token)
        if payload is None:
            return None
        with self._lock:
            if payload["sid"] in self._revoked:
                return None
        return payload["uid"]

    def revoke(self, token: Optional[str]) -> None:
        """
        Make a token unusable before its natural expiry (idempotent).

        Unknown, invalid or already expired tokens are ignored.
        """
        payload = self._load(token)
        if payload is None:
            return
        expires_at = payload["iat"] + self.max_age_seconds
        with self._lock:
            self._prune()
            self._revoked[payload["sid"]] = expires_at
        logger.info("Session revoked", extra={"user_id": payload["uid"]})

    def _load(self, token: Optional[str]) -> Optional[Dict[str, Any]]:
        if not token or not isinstance(token, str):
            return None
        try:
            # max_age is a whole-second guard; the exact TTL check uses iat below
            payload = self._serializer.loads(token, max_age=self.max_age_seconds)
        except BadData:
            return None
        if (
            not isinstance(payload, dict)
            or not isinstance(payload.get("uid"), str)
            or not isinstance(payload.get("sid"), str)
            or isinstance(payload.get("iat"), bool)
            or not isinstance(payload.get("iat"), (int, float))
        ):
            return None
        # Valid only while now < iat + TTL
        if self._clock() >= payload["iat"] + self.max_age_seconds:
            return None
        return payload

    def _prune(self) -> None:
        now = self._clock()
        for sid in [sid for sid, expires_at in self._revoked.items() if now >= expires_at]:
            del self._revoked[sid]
