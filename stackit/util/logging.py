"""Logging configuration for the application."""

import logging
import sys

from stackit.config import Settings


def setup_logging(settings: Settings) -> None:
    """Configure stdlib logging for the process.

    Application code logs through logfire; this sets levels and format for
    uvicorn, SQLAlchemy and the other libraries that use stdlib loggers.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,  # Override any existing configuration
    )

    # Engine echo is noisy; logfire already traces queries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logging.getLogger("stackit").setLevel(level)

    logger = logging.getLogger(__name__)
    logger.info(
        f"Logging configured: environment={settings.environment}, level={logging.getLevelName(level)}"
    )
