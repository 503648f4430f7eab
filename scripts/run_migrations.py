#!/usr/bin/env python3
"""Apply Alembic migrations to the account store.

Usage:
    python scripts/run_migrations.py [revision]   # defaults to "head"
"""

import sys

import logfire
from alembic import command
from alembic.config import Config

from dirauth.config import Settings
from dirauth.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    """Run migrations up to the requested revision."""
    settings = Settings()
    configure_logfire(settings)

    revision = argv[0] if argv else "head"

    with logfire.span("run_migrations", revision=revision):
        try:
            command.upgrade(Config("alembic.ini"), revision)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                revision=revision,
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # The schema must be current before the API starts
            raise

    logfire.info("Database migrations completed", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
