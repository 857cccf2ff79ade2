"""
FastAPI routes for registration, login and logout.

Prefix: /api/auth

Sessions are signed cookies; login sets one, logout clears and revokes it.
"""

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from orchard.auth.service import CredentialStore
from orchard.auth.sessions import SessionManager
from orchard.core.config import Settings
from orchard.utils.logger import get_logger

from .deps import (
    clear_session_cookie,
    get_credentials,
    get_sessions,
    get_settings,
    read_json_body,
    session_token,
    set_session_cookie,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register")
async def register(
    request: Request,
    credentials: CredentialStore = Depends(get_credentials),
) -> Dict[str, Any]:
    """
    Register a new user.

    Request (JSON): {"email": "...", "password": "..."}

    Response:
        {"message": "User registered!", "user": {"id": "...", "email": "..."}}
    """
    body = await read_json_body(request)
    # bcrypt is CPU-bound; keep it off the event loop
    user = await run_in_threadpool(credentials.register, body.get("email"), body.get("password"))
    return {"message": "User registered!", "user": user.public().model_dump()}


@router.post("/login")
async def login(
    request: Request,
    credentials: CredentialStore = Depends(get_credentials),
    sessions: SessionManager = Depends(get_sessions),
    settings: Settings = Depends(get_settings),
) -> Any:
    """
    Log in an existing user and set the session cookie.

    Unknown email and wrong password both answer 400 "Invalid credentials".
    """
    body = await read_json_body(request)
    user = await run_in_threadpool(credentials.authenticate, body.get("email"), body.get("password"))
    response = JSONResponse({"message": "Welcome!"})
    set_session_cookie(response, settings, sessions.issue(user.id))
    logger.info("User logged in", extra={"user_id": user.id})
    return response


@router.post("/logout")
async def logout(
    request: Request,
    sessions: SessionManager = Depends(get_sessions),
    settings: Settings = Depends(get_settings),
) -> Any:
    """Clear the current session (idempotent)."""
    sessions.revoke(session_token(request))
    response = JSONResponse({"message": "Successfully logout!"})
    clear_session_cookie(response, settings)
    return response
