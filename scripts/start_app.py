#!/usr/bin/env python3
"""Start the FastAPI application with Logfire error tracking for startup errors."""

import sys

import logfire
import uvicorn

from stackit.config import AuthSettings, Settings
from stackit.util.error import ConfigurationError
from stackit.util.logging import setup_logging
from stackit.util.observability import configure_logfire


def check_settings(settings: Settings) -> None:
    """Refuse to start a deployed environment with development defaults.

    Raises:
        ConfigurationError: If the JWT secret was never set
    """
    if (
        settings.is_deployed
        and settings.auth.jwt_secret == AuthSettings().jwt_secret
    ):
        raise ConfigurationError("AUTH__JWT_SECRET must be set outside development")


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    setup_logging(settings)

    # Configure Logfire early to catch startup errors
    configure_logfire(settings)

    try:
        check_settings(settings)

        logfire.info("Starting FastAPI application")

        uvicorn.run(
            "stackit.interface.api.app:create_app",
            factory=True,
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )

        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails properly
        raise


if __name__ == "__main__":
    sys.exit(main())
