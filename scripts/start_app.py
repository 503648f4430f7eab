#!/usr/bin/env python3
"""Start the dirauth API, reporting startup errors to Logfire."""

import sys

import logfire
import uvicorn

from dirauth.config import Settings
from dirauth.util.logging import setup_logging
from dirauth.util.observability import configure_logfire


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    # Configure Logfire early to catch startup errors
    configure_logfire(settings)
    setup_logging(settings)

    try:
        logfire.info(
            "Starting dirauth API",
            environment=settings.environment,
            directory=settings.directory.server_url,
            mock_directory=settings.use_mock_directory,
        )

        uvicorn.run(
            "dirauth.interface.api.app:create_app",
            factory=True,
            host="0.0.0.0",
            port=8000,
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
        raise


if __name__ == "__main__":
    sys.exit(main())
