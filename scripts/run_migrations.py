#!/usr/bin/env python3
"""Apply Alembic migrations, reporting failures to Logfire.

Usage:
    python scripts/run_migrations.py                      # upgrade to head
    python scripts/run_migrations.py upgrade <revision>
    python scripts/run_migrations.py downgrade <revision>
"""

import sys

import logfire
from alembic import command
from alembic.config import Config

from stackit.config import Settings
from stackit.util.error import ConfigurationError
from stackit.util.logging import setup_logging
from stackit.util.observability import configure_logfire

COMMANDS = {"upgrade": command.upgrade, "downgrade": command.downgrade}


def main(argv: list[str]) -> int:
    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    action = argv[1] if len(argv) > 1 else "upgrade"
    target = argv[2] if len(argv) > 2 else "head"
    try:
        if action not in COMMANDS:
            raise ConfigurationError(f"Unknown migration command: {action}")
        with logfire.span("migrations.run", action=action, target=target):
            COMMANDS[action](Config("alembic.ini"), target)
        logfire.info("Database migrations completed", action=action, target=target)
        return 0
    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # The deploy must not start the app on a half-migrated schema
        raise


if __name__ == "__main__":
    sys.exit(main(sys.argv))
