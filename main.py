"""Entry point for Orchard using uvicorn"""

import uvicorn

from orchard.core.config import load_settings
from orchard.utils.logger import setup_logging


if __name__ == "__main__":
    settings = load_settings()
    setup_logging(settings.log_level, settings.log_format, settings.log_file)

    print(f"Starting Orchard in {settings.environment} mode...")
    print(f"Host: {settings.host}, Port: {settings.port}")

    uvicorn.run(
        "orchard_web.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        access_log=False,
    )
