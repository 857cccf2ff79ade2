"""FastAPI application factory for Orchard"""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI

from orchard import __version__
from orchard.auth.service import CredentialStore
from orchard.auth.sessions import SessionManager
from orchard.core.config import Settings, load_settings
from orchard.fruits.service import FruitService
from orchard.seed import seed_demo_data
from orchard.stores.fruits import FruitStore
from orchard.utils.logger import get_logger, setup_logging

from . import auth_routes, fruit_routes, pages
from .error_handlers import register_error_handlers
from .middleware import RequestLogMiddleware, SecurityHeadersMiddleware

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None, configure_logging: bool = False) -> FastAPI:
    """
    Build the application with its own stores.

    Each call gets fresh, empty stores (plus demo data when enabled), so
    tests never share state.
    """
    settings = settings or load_settings()
    if configure_logging:
        setup_logging(settings.log_level, settings.log_format, settings.log_file)

    credentials = CredentialStore(bcrypt_rounds=settings.bcrypt_rounds)
    fruits = FruitStore()
    sessions = SessionManager(settings.session_keys, max_age_seconds=settings.session_max_age_seconds)
    if settings.seed_demo_data:
        seed_demo_data(credentials, fruits)

    app = FastAPI(title="Orchard", description="Fruit resource server", version=__version__)
    app.state.settings = settings
    app.state.credentials = credentials
    app.state.sessions = sessions
    app.state.fruits = fruits
    app.state.fruit_service = FruitService(fruits, sessions)

    # Added last runs first: logging wraps the security headers
    app.add_middleware(SecurityHeadersMiddleware, hsts=settings.is_production)
    app.add_middleware(RequestLogMiddleware)

    register_error_handlers(app)
    app.include_router(pages.router)
    app.include_router(auth_routes.router)
    app.include_router(fruit_routes.router)

    logger.info("Orchard app created (environment=%s)", settings.environment)
    return app
