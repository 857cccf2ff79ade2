"""
FastAPI dependencies and request helpers shared by the routers.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import Request, Response

from orchard.auth.service import CredentialStore
from orchard.auth.sessions import SessionManager
from orchard.core.config import Settings
from orchard.fruits.service import FruitService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_credentials(request: Request) -> CredentialStore:
    return request.app.state.credentials


def get_sessions(request: Request) -> SessionManager:
    return request.app.state.sessions


def get_fruit_service(request: Request) -> FruitService:
    return request.app.state.fruit_service


def session_token(request: Request) -> Optional[str]:
    """Read the signed session cookie, if any."""
    settings: Settings = request.app.state.settings
    return request.cookies.get(settings.session_cookie_name)


async def read_json_body(request: Request) -> Dict[str, Any]:
    """
    Parse the request body as a JSON object.

    A missing, malformed or non-object body yields {} so field checks can
    report it after the session check has run.
    """
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def set_session_cookie(response: Response, settings: Settings, token: str) -> None:
    """Attach the signed session token as an HttpOnly cookie."""
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age_seconds,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        settings.session_cookie_name,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
