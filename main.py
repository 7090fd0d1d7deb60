"""
The Vault - Main Entry Point

Catalog and showcase service for reusable UI components.
"""

import structlog
import uvicorn

from vault.config.settings import get_settings
from vault.core.logging import configure_logging

logger = structlog.get_logger(__name__)


def main():
    """Main entry point for running the application."""
    settings = get_settings()
    configure_logging(settings.log_level, json_logs=not settings.is_development)

    logger.info(
        "Starting server",
        host=settings.api_host,
        port=settings.api_port,
        environment=settings.app_env,
    )

    uvicorn.run(
        "vault.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
