"""
Orchard configuration.

All values are loaded from environment variables (typically via .env):

- ENVIRONMENT              (development | production)
- SESSION_KEYS             comma separated signing keys, oldest first.
                           The last key signs new sessions, every key verifies.
- SESSION_COOKIE_NAME      (default: session)
- SESSION_MAX_AGE_SECONDS  (default: 600)
- BCRYPT_ROUNDS            (default: 8)
- SEED_DEMO_DATA           (default: false)
- LOG_LEVEL / LOG_FORMAT / LOG_FILE
- HOST / PORT
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

from orchard.utils.exceptions import ConfigError
from orchard.utils.logger import get_logger

logger = get_logger(__name__)

DEV_SESSION_KEY = "orchard-dev-session-key"
MIN_BCRYPT_ROUNDS = 4
MAX_BCRYPT_ROUNDS = 31
LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class Settings:
    environment: str = "development"
    session_keys: Tuple[str, ...] = (DEV_SESSION_KEY,)
    session_cookie_name: str = "session"
    session_max_age_seconds: int = 10 * 60
    bcrypt_rounds: int = 8
    seed_demo_data: bool = False
    log_level: str = "INFO"
    log_format: str = "text"
    log_file: Optional[str] = None
    host: str = "127.0.0.1"
    port: int = 3000

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def __post_init__(self) -> None:
        if not self.session_keys or not all(self.session_keys):
            raise ConfigError("At least one non-empty session key is required.")
        if self.session_max_age_seconds <= 0:
            raise ConfigError("SESSION_MAX_AGE_SECONDS must be positive.")
        if not MIN_BCRYPT_ROUNDS <= self.bcrypt_rounds <= MAX_BCRYPT_ROUNDS:
            raise ConfigError(
                f"BCRYPT_ROUNDS must be between {MIN_BCRYPT_ROUNDS} and {MAX_BCRYPT_ROUNDS}."
            )
        if not isinstance(self.log_level, str) or self.log_level.upper() not in LOG_LEVELS:
            raise ConfigError(
                f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}."
            )


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


def _env_bool(name: str, default: bool = False) -> bool:
    raw = (os.getenv(name) or "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


def _env_keys(name: str) -> Tuple[str, ...]:
    raw = os.getenv(name) or ""
    return tuple(k.strip() for k in raw.split(",") if k.strip())


def load_settings() -> Settings:
    """Build Settings from the environment (and ./.env, if present)."""
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    environment = (os.getenv("ENVIRONMENT") or "development").strip().lower()
    keys = _env_keys("SESSION_KEYS")
    if not keys:
        if environment == "production":
            raise ConfigError("SESSION_KEYS must be set in production.")
        logger.warning("SESSION_KEYS not set; using the development signing key")
        keys = (DEV_SESSION_KEY,)

    return Settings(
        environment=environment,
        session_keys=keys,
        session_cookie_name=(os.getenv("SESSION_COOKIE_NAME") or "session").strip(),
        session_max_age_seconds=_env_int("SESSION_MAX_AGE_SECONDS", 10 * 60),
        bcrypt_rounds=_env_int("BCRYPT_ROUNDS", 8),
        seed_demo_data=_env_bool("SEED_DEMO_DATA"),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").strip(),
        log_format=(os.getenv("LOG_FORMAT") or "text").strip().lower(),
        log_file=os.getenv("LOG_FILE") or None,
        host=os.getenv("HOST", "127.0.0.1"),
        port=_env_int("PORT", 3000),
    )
